# FILE: ./vpnportal/crud/announcements.py

from typing import List, Optional
from sqlalchemy.orm import Session

from vpnportal.models import portal as models
from vpnportal.schemas import portal as schemas


def list_announcements(db: Session, active_only: bool = False) -> List[models.Announcement]:
    """اطلاعیه‌ها از جدیدترین به قدیمی‌ترین."""
    query = db.query(models.Announcement)
    if active_only:
        query = query.filter(models.Announcement.is_active.is_(True))
    return query.order_by(models.Announcement.created_at.desc(), models.Announcement.id.desc()).all()


def get_announcement(db: Session, announcement_id: int) -> Optional[models.Announcement]:
    return db.query(models.Announcement).filter(models.Announcement.id == announcement_id).first()


def create_announcement(db: Session, announcement: schemas.AnnouncementCreate) -> models.Announcement:
    now = models.utcnow()
    new_announcement = models.Announcement(
        **announcement.model_dump(mode="json"), created_at=now, updated_at=now
    )
    db.add(new_announcement)
    db.commit()
    db.refresh(new_announcement)
    return new_announcement


def update_announcement(
    db: Session, announcement_id: int, changes: schemas.AnnouncementUpdate
) -> Optional[models.Announcement]:
    db_announcement = get_announcement(db, announcement_id)
    if not db_announcement:
        return None

    for field, value in changes.changes().items():
        setattr(db_announcement, field, value)
    db_announcement.updated_at = models.utcnow()
    db.commit()
    db.refresh(db_announcement)
    return db_announcement


def delete_announcement(db: Session, announcement_id: int) -> bool:
    deleted = (
        db.query(models.Announcement)
        .filter(models.Announcement.id == announcement_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted > 0
