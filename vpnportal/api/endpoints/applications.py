# FILE: ./vpnportal/api/endpoints/applications.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from common.database import get_db
from vpnportal.api.deps import require_admin
from vpnportal.core.errors import NotFoundError
from vpnportal.crud import applications as crud
from vpnportal.schemas import portal as schemas


router = APIRouter(prefix="/applications")
logger = logging.getLogger(__name__)


@router.get("", response_model=List[schemas.ApplicationInDB])
def get_all_applications(
    platform_id: Optional[int] = Query(default=None, alias="platformId"),
    db: Session = Depends(get_db),
):
    """لیست اپلیکیشن‌ها، در صورت ارسال platformId فقط اپلیکیشن‌های همان پلتفرم."""
    return crud.list_applications(db, platform_id=platform_id)

@router.get("/{application_id}", response_model=schemas.ApplicationInDB)
def get_application(application_id: int, db: Session = Depends(get_db)):
    db_application = crud.get_application(db, application_id)
    if not db_application:
        raise NotFoundError("Application not found")
    return db_application

@router.post("", response_model=schemas.ApplicationInDB, status_code=201, dependencies=[Depends(require_admin)])
def create_application(application: schemas.ApplicationCreate, db: Session = Depends(get_db)):
    new_application = crud.create_application(db, application)
    logger.info(f"Application {new_application.id} created on platform {new_application.platform_id}.")
    return new_application

@router.patch("/{application_id}", response_model=schemas.ApplicationInDB, dependencies=[Depends(require_admin)])
def update_application(application_id: int, changes: schemas.ApplicationUpdate, db: Session = Depends(get_db)):
    db_application = crud.update_application(db, application_id, changes)
    if not db_application:
        raise NotFoundError("Application not found")
    logger.info(f"Application {application_id} updated.")
    return db_application

@router.delete("/{application_id}", response_model=schemas.SuccessResponse, dependencies=[Depends(require_admin)])
def delete_application(application_id: int, db: Session = Depends(get_db)):
    if crud.delete_application(db, application_id):
        logger.info(f"Application {application_id} deleted.")
    return schemas.SuccessResponse()
