# FILE: ./vpnportal/crud/applications.py

from typing import List, Optional
from sqlalchemy.orm import Session

from vpnportal.core.errors import ValidationError
from vpnportal.crud.platforms import get_platform
from vpnportal.models import portal as models
from vpnportal.schemas import portal as schemas


def _ensure_platform_exists(db: Session, platform_id: int):
    if get_platform(db, platform_id) is None:
        raise ValidationError.for_field("platformId", f"Platform {platform_id} does not exist")


def list_applications(db: Session, platform_id: Optional[int] = None) -> List[models.Application]:
    query = db.query(models.Application)
    if platform_id is not None:
        query = query.filter(models.Application.platform_id == platform_id)
    return query.order_by(models.Application.order.asc(), models.Application.id.asc()).all()


def get_application(db: Session, application_id: int) -> Optional[models.Application]:
    return db.query(models.Application).filter(models.Application.id == application_id).first()


def create_application(db: Session, application: schemas.ApplicationCreate) -> models.Application:
    _ensure_platform_exists(db, application.platform_id)

    new_application = models.Application(**application.model_dump(mode="json"))
    db.add(new_application)
    db.commit()
    db.refresh(new_application)
    return new_application


def update_application(
    db: Session, application_id: int, changes: schemas.ApplicationUpdate
) -> Optional[models.Application]:
    db_application = get_application(db, application_id)
    if not db_application:
        return None

    data = changes.changes()
    if "platform_id" in data:
        _ensure_platform_exists(db, data["platform_id"])

    for field, value in data.items():
        setattr(db_application, field, value)
    db.commit()
    db.refresh(db_application)
    return db_application


def delete_application(db: Session, application_id: int) -> bool:
    deleted = (
        db.query(models.Application)
        .filter(models.Application.id == application_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted > 0
