# FILE: ./vpnportal/crud/stats.py

from sqlalchemy.orm import Session

from vpnportal.models import portal as models


def content_counts(db: Session) -> dict:
    """شمارش محتوا برای داشبورد پنل مدیریت."""
    return {
        "platforms": db.query(models.Platform).count(),
        "applications": db.query(models.Application).count(),
        "tutorials": db.query(models.Tutorial).count(),
        "announcements": db.query(models.Announcement).count(),
        "active_announcements": (
            db.query(models.Announcement).filter(models.Announcement.is_active.is_(True)).count()
        ),
    }
