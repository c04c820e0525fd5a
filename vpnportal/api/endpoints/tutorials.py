# FILE: ./vpnportal/api/endpoints/tutorials.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from common.database import get_db
from vpnportal.api.deps import require_admin
from vpnportal.core.errors import NotFoundError
from vpnportal.crud import tutorials as crud
from vpnportal.models.portal import TutorialCategory
from vpnportal.schemas import portal as schemas


router = APIRouter(prefix="/tutorials")
logger = logging.getLogger(__name__)


def tutorial_criteria(
    category: Optional[TutorialCategory] = Query(default=None),
    platform_id: Optional[int] = Query(default=None, alias="platformId"),
) -> crud.TutorialCriteria:
    """
    پارامترهای کوئری را یک بار به معیار فیلتر تبدیل می‌کند.
    اگر هر دو ارسال شوند category اولویت دارد و platformId نادیده گرفته می‌شود.
    """
    if category is not None:
        if platform_id is not None:
            logger.warning(f"Both category and platformId given; ignoring platformId={platform_id}.")
        return crud.ByCategory(category)
    if platform_id is not None:
        return crud.ByPlatform(platform_id)
    return crud.AllTutorials()


@router.get("", response_model=List[schemas.TutorialInDB])
def get_all_tutorials(criteria: crud.TutorialCriteria = Depends(tutorial_criteria), db: Session = Depends(get_db)):
    return crud.list_tutorials(db, criteria)

@router.get("/{tutorial_id}", response_model=schemas.TutorialInDB)
def get_tutorial(tutorial_id: int, db: Session = Depends(get_db)):
    db_tutorial = crud.get_tutorial(db, tutorial_id)
    if not db_tutorial:
        raise NotFoundError("Tutorial not found")
    return db_tutorial

@router.post("", response_model=schemas.TutorialInDB, status_code=201, dependencies=[Depends(require_admin)])
def create_tutorial(tutorial: schemas.TutorialCreate, db: Session = Depends(get_db)):
    new_tutorial = crud.create_tutorial(db, tutorial)
    logger.info(f"Tutorial {new_tutorial.id} created in category '{new_tutorial.category}'.")
    return new_tutorial

@router.patch("/{tutorial_id}", response_model=schemas.TutorialInDB, dependencies=[Depends(require_admin)])
def update_tutorial(tutorial_id: int, changes: schemas.TutorialUpdate, db: Session = Depends(get_db)):
    db_tutorial = crud.update_tutorial(db, tutorial_id, changes)
    if not db_tutorial:
        raise NotFoundError("Tutorial not found")
    logger.info(f"Tutorial {tutorial_id} updated.")
    return db_tutorial

@router.delete("/{tutorial_id}", response_model=schemas.SuccessResponse, dependencies=[Depends(require_admin)])
def delete_tutorial(tutorial_id: int, db: Session = Depends(get_db)):
    if crud.delete_tutorial(db, tutorial_id):
        logger.info(f"Tutorial {tutorial_id} deleted.")
    return schemas.SuccessResponse()
