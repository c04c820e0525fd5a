# FILE: ./vpnportal/api/endpoints/platforms.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
import logging

from common.database import get_db
from vpnportal.api.deps import require_admin
from vpnportal.core.errors import NotFoundError
from vpnportal.crud import platforms as crud
from vpnportal.schemas import portal as schemas


router = APIRouter(prefix="/platforms")
logger = logging.getLogger(__name__)


@router.get("", response_model=List[schemas.PlatformInDB])
def get_all_platforms(db: Session = Depends(get_db)):
    """لیست پلتفرم‌ها به ترتیب order و سپس id."""
    return crud.list_platforms(db)

@router.get("/{platform_id}", response_model=schemas.PlatformInDB)
def get_platform(platform_id: int, db: Session = Depends(get_db)):
    db_platform = crud.get_platform(db, platform_id)
    if not db_platform:
        raise NotFoundError("Platform not found")
    return db_platform

@router.post("", response_model=schemas.PlatformInDB, status_code=201, dependencies=[Depends(require_admin)])
def create_platform(platform: schemas.PlatformCreate, db: Session = Depends(get_db)):
    new_platform = crud.create_platform(db, platform)
    logger.info(f"Platform {new_platform.id} created.")
    return new_platform

@router.patch("/{platform_id}", response_model=schemas.PlatformInDB, dependencies=[Depends(require_admin)])
def update_platform(platform_id: int, changes: schemas.PlatformUpdate, db: Session = Depends(get_db)):
    db_platform = crud.update_platform(db, platform_id, changes)
    if not db_platform:
        raise NotFoundError("Platform not found")
    logger.info(f"Platform {platform_id} updated.")
    return db_platform

@router.delete("/{platform_id}", response_model=schemas.SuccessResponse, dependencies=[Depends(require_admin)])
def delete_platform(platform_id: int, db: Session = Depends(get_db)):
    if crud.delete_platform(db, platform_id):
        logger.info(f"Platform {platform_id} deleted with its applications.")
    return schemas.SuccessResponse()
