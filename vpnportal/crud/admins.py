# FILE: ./vpnportal/crud/admins.py

from typing import Optional
from sqlalchemy.orm import Session

from vpnportal.models import portal as models


def get_admin(db: Session, admin_id: int) -> Optional[models.Admin]:
    return db.query(models.Admin).filter(models.Admin.id == admin_id).first()


def get_admin_by_username(db: Session, username: str) -> Optional[models.Admin]:
    # مقایسه‌ی دقیق و حساس به حروف بزرگ و کوچک در خود پایتون انجام می‌شود،
    # چون collation پیش‌فرض MySQL حساس به حروف نیست
    candidates = db.query(models.Admin).filter(models.Admin.username == username).all()
    return next((admin for admin in candidates if admin.username == username), None)


def count_admins(db: Session) -> int:
    return db.query(models.Admin).count()


def create_admin(db: Session, username: str, password_hash: str) -> models.Admin:
    new_admin = models.Admin(username=username, password=password_hash)
    db.add(new_admin)
    db.commit()
    db.refresh(new_admin)
    return new_admin


def update_admin_username(db: Session, admin_id: int, username: str) -> Optional[models.Admin]:
    db_admin = get_admin(db, admin_id)
    if not db_admin:
        return None
    db_admin.username = username
    db.commit()
    db.refresh(db_admin)
    return db_admin


def update_admin_password(db: Session, admin_id: int, password_hash: str) -> Optional[models.Admin]:
    db_admin = get_admin(db, admin_id)
    if not db_admin:
        return None
    db_admin.password = password_hash
    db.commit()
    db.refresh(db_admin)
    return db_admin
