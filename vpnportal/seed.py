# FILE: ./vpnportal/seed.py
"""
ساخت اولین مدیر پنل.

اگر جدول admins خالی باشد و INITIAL_ADMIN_PASSWORD تنظیم شده باشد، یک مدیر ساخته می‌شود.
اجرا از خط فرمان:  python -m vpnportal.seed
"""

import logging
import sys
from typing import Optional
from sqlalchemy.orm import Session

from common import config
from common.database import Base, SessionLocal, engine
from common.logging_config import setup_logging
from vpnportal.core.security import MIN_PASSWORD_LENGTH, hash_password
from vpnportal.crud import admins as crud
from vpnportal.models import portal as models

logger = logging.getLogger(__name__)


def ensure_initial_admin(db: Session, username: str, password: Optional[str]) -> Optional[models.Admin]:
    if crud.count_admins(db) > 0:
        return None
    if not password:
        logger.warning("No admin exists and INITIAL_ADMIN_PASSWORD is not set; admin login is unavailable.")
        return None
    if len(password) < MIN_PASSWORD_LENGTH:
        logger.error(f"INITIAL_ADMIN_PASSWORD must be at least {MIN_PASSWORD_LENGTH} characters; admin not created.")
        return None

    admin = crud.create_admin(db, username, hash_password(password))
    logger.info(f"✅ Initial admin '{username}' created with id {admin.id}.")
    return admin


def main():
    setup_logging()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        admin = ensure_initial_admin(db, config.INITIAL_ADMIN_USERNAME, config.INITIAL_ADMIN_PASSWORD)
    finally:
        db.close()
    return 0 if admin is not None else 1


if __name__ == "__main__":
    sys.exit(main())
