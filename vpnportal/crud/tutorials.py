# FILE: ./vpnportal/crud/tutorials.py

from dataclasses import dataclass
from typing import List, Optional, Union
from sqlalchemy.orm import Session

from vpnportal.core.errors import ValidationError
from vpnportal.crud.applications import get_application
from vpnportal.crud.platforms import get_platform
from vpnportal.models import portal as models
from vpnportal.schemas import portal as schemas


# --- معیار فیلتر لیست آموزش‌ها ---
@dataclass(frozen=True)
class AllTutorials:
    pass


@dataclass(frozen=True)
class ByCategory:
    category: models.TutorialCategory


@dataclass(frozen=True)
class ByPlatform:
    platform_id: int


TutorialCriteria = Union[AllTutorials, ByCategory, ByPlatform]


def _check_references(db: Session, platform_id: Optional[int], app_id: Optional[int]):
    """
    آموزش می‌تواند به هیچ، یکی یا هر دوی پلتفرم و اپلیکیشن اشاره کند.
    هر ارجاع باید موجود باشد و اگر هر دو داده شده‌اند، اپلیکیشن باید متعلق به همان پلتفرم باشد.
    """
    errors = []
    if platform_id is not None and get_platform(db, platform_id) is None:
        errors.append({"field": "platformId", "message": f"Platform {platform_id} does not exist"})

    application = None
    if app_id is not None:
        application = get_application(db, app_id)
        if application is None:
            errors.append({"field": "appId", "message": f"Application {app_id} does not exist"})

    if not errors and application is not None and platform_id is not None:
        if application.platform_id != platform_id:
            errors.append({
                "field": "appId",
                "message": f"Application {app_id} does not belong to platform {platform_id}",
            })

    if errors:
        raise ValidationError(errors)


def list_tutorials(db: Session, criteria: TutorialCriteria = AllTutorials()) -> List[models.Tutorial]:
    query = db.query(models.Tutorial)
    if isinstance(criteria, ByCategory):
        query = query.filter(models.Tutorial.category == models.TutorialCategory(criteria.category).value)
    elif isinstance(criteria, ByPlatform):
        query = query.filter(models.Tutorial.platform_id == criteria.platform_id)
    return query.order_by(models.Tutorial.order.asc(), models.Tutorial.id.asc()).all()


def get_tutorial(db: Session, tutorial_id: int) -> Optional[models.Tutorial]:
    return db.query(models.Tutorial).filter(models.Tutorial.id == tutorial_id).first()


def create_tutorial(db: Session, tutorial: schemas.TutorialCreate) -> models.Tutorial:
    _check_references(db, tutorial.platform_id, tutorial.app_id)

    new_tutorial = models.Tutorial(**tutorial.model_dump(mode="json"))
    db.add(new_tutorial)
    db.commit()
    db.refresh(new_tutorial)
    return new_tutorial


def update_tutorial(db: Session, tutorial_id: int, changes: schemas.TutorialUpdate) -> Optional[models.Tutorial]:
    db_tutorial = get_tutorial(db, tutorial_id)
    if not db_tutorial:
        return None

    data = changes.changes()
    if "platform_id" in data or "app_id" in data:
        _check_references(
            db,
            data.get("platform_id", db_tutorial.platform_id),
            data.get("app_id", db_tutorial.app_id),
        )

    for field, value in data.items():
        setattr(db_tutorial, field, value)
    db.commit()
    db.refresh(db_tutorial)
    return db_tutorial


def delete_tutorial(db: Session, tutorial_id: int) -> bool:
    deleted = db.query(models.Tutorial).filter(models.Tutorial.id == tutorial_id).delete(synchronize_session=False)
    db.commit()
    return deleted > 0
