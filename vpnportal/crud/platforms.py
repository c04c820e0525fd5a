# FILE: ./vpnportal/crud/platforms.py

from typing import List, Optional
from sqlalchemy.orm import Session

from vpnportal.models import portal as models
from vpnportal.schemas import portal as schemas


def list_platforms(db: Session) -> List[models.Platform]:
    return db.query(models.Platform).order_by(models.Platform.order.asc(), models.Platform.id.asc()).all()


def get_platform(db: Session, platform_id: int) -> Optional[models.Platform]:
    return db.query(models.Platform).filter(models.Platform.id == platform_id).first()


def create_platform(db: Session, platform: schemas.PlatformCreate) -> models.Platform:
    new_platform = models.Platform(**platform.model_dump(mode="json"))
    db.add(new_platform)
    db.commit()
    db.refresh(new_platform)
    return new_platform


def update_platform(db: Session, platform_id: int, changes: schemas.PlatformUpdate) -> Optional[models.Platform]:
    db_platform = get_platform(db, platform_id)
    if not db_platform:
        return None

    for field, value in changes.changes().items():
        setattr(db_platform, field, value)
    db.commit()
    db.refresh(db_platform)
    return db_platform


def delete_platform(db: Session, platform_id: int) -> bool:
    """
    پلتفرم را حذف می‌کند. اپلیکیشن‌های آن با ON DELETE CASCADE و
    ارجاع آموزش‌ها با ON DELETE SET NULL توسط خود دیتابیس رسیدگی می‌شوند.
    """
    deleted = db.query(models.Platform).filter(models.Platform.id == platform_id).delete(synchronize_session=False)
    db.commit()
    return deleted > 0
