# FILE: ./vpnportal/api/endpoints/stats.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from common.database import get_db
from vpnportal.api.deps import require_admin
from vpnportal.crud.stats import content_counts
from vpnportal.schemas import portal as schemas


router = APIRouter()


@router.get("/stats", response_model=schemas.ContentStats, dependencies=[Depends(require_admin)])
def get_stats(db: Session = Depends(get_db)):
    return content_counts(db)
