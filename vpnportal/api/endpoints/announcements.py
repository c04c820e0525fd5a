# FILE: ./vpnportal/api/endpoints/announcements.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from common.database import get_db
from vpnportal.api.deps import require_admin
from vpnportal.core.errors import NotFoundError
from vpnportal.crud import announcements as crud
from vpnportal.schemas import portal as schemas


router = APIRouter(prefix="/announcements")
logger = logging.getLogger(__name__)


@router.get("", response_model=List[schemas.AnnouncementInDB])
def get_all_announcements(active: Optional[str] = Query(default=None), db: Session = Depends(get_db)):
    """با active=true فقط اطلاعیه‌های فعال برگردانده می‌شوند؛ هر مقدار دیگری یعنی همه."""
    return crud.list_announcements(db, active_only=(active == "true"))

@router.get("/{announcement_id}", response_model=schemas.AnnouncementInDB)
def get_announcement(announcement_id: int, db: Session = Depends(get_db)):
    db_announcement = crud.get_announcement(db, announcement_id)
    if not db_announcement:
        raise NotFoundError("Announcement not found")
    return db_announcement

@router.post("", response_model=schemas.AnnouncementInDB, status_code=201, dependencies=[Depends(require_admin)])
def create_announcement(announcement: schemas.AnnouncementCreate, db: Session = Depends(get_db)):
    new_announcement = crud.create_announcement(db, announcement)
    logger.info(f"Announcement {new_announcement.id} created (active={new_announcement.is_active}).")
    return new_announcement

@router.patch("/{announcement_id}", response_model=schemas.AnnouncementInDB, dependencies=[Depends(require_admin)])
def update_announcement(announcement_id: int, changes: schemas.AnnouncementUpdate, db: Session = Depends(get_db)):
    db_announcement = crud.update_announcement(db, announcement_id, changes)
    if not db_announcement:
        raise NotFoundError("Announcement not found")
    logger.info(f"Announcement {announcement_id} updated.")
    return db_announcement

@router.delete("/{announcement_id}", response_model=schemas.SuccessResponse, dependencies=[Depends(require_admin)])
def delete_announcement(announcement_id: int, db: Session = Depends(get_db)):
    if crud.delete_announcement(db, announcement_id):
        logger.info(f"Announcement {announcement_id} deleted.")
    return schemas.SuccessResponse()
