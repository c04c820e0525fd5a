# FILE: ./vpnportal/api/endpoints/auth.py

from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from common.database import get_db
from vpnportal.api.deps import current_admin_id, end_session, establish_session, require_admin
from vpnportal.core import security
from vpnportal.core.errors import AuthenticationError, DuplicateUsername, NotFoundError
from vpnportal.crud import admins as crud
from vpnportal.schemas import portal as schemas


router = APIRouter(prefix="/auth")
logger = logging.getLogger(__name__)


@router.post("/login", response_model=schemas.AdminPublic)
def login(credentials: schemas.LoginRequest, request: Request, db: Session = Depends(get_db)):
    """
    نام کاربری و رمز عبور را بررسی می‌کند و نشست جدید می‌سازد.
    پیام خطا برای نام کاربری ناموجود و رمز اشتباه یکسان است.
    """
    admin = crud.get_admin_by_username(db, credentials.username)
    if admin is None:
        security.burn_verification(credentials.password)
        logger.warning(f"Failed login for username '{credentials.username}'.")
        raise AuthenticationError("Invalid credentials")

    if not security.verify_password(credentials.password, admin.password):
        logger.warning(f"Failed login for username '{credentials.username}'.")
        raise AuthenticationError("Invalid credentials")

    establish_session(request, admin.id)
    logger.info(f"Admin {admin.id} logged in.")
    return admin

@router.post("/logout", response_model=schemas.SuccessResponse)
def logout(request: Request):
    admin_id = current_admin_id(request)
    end_session(request)
    if admin_id is not None:
        logger.info(f"Admin {admin_id} logged out.")
    return schemas.SuccessResponse()

@router.get("/me", response_model=schemas.AdminPublic)
def me(request: Request, db: Session = Depends(get_db)):
    admin_id = current_admin_id(request)
    if admin_id is None:
        raise AuthenticationError("Not authenticated")

    admin = crud.get_admin(db, admin_id)
    if admin is None:
        # مدیر این نشست دیگر وجود ندارد
        end_session(request)
        raise AuthenticationError("Not authenticated")
    return admin

@router.patch("/username", response_model=schemas.AdminPublic)
def change_username(
    payload: schemas.UsernameChange,
    admin_id: int = Depends(require_admin),
    db: Session = Depends(get_db),
):
    admin = crud.get_admin(db, admin_id)
    if admin is None:
        raise NotFoundError("Admin not found")
    if not security.verify_password(payload.current_password, admin.password):
        raise AuthenticationError("Current password is incorrect")

    existing = crud.get_admin_by_username(db, payload.new_username)
    if existing is not None and existing.id != admin_id:
        raise DuplicateUsername()

    try:
        updated = crud.update_admin_username(db, admin_id, payload.new_username)
    except IntegrityError:
        db.rollback()
        raise DuplicateUsername()

    logger.info(f"Admin {admin_id} changed username.")
    return updated

@router.patch("/password", response_model=schemas.SuccessResponse)
def change_password(
    payload: schemas.PasswordChange,
    admin_id: int = Depends(require_admin),
    db: Session = Depends(get_db),
):
    admin = crud.get_admin(db, admin_id)
    if admin is None:
        raise NotFoundError("Admin not found")
    if not security.verify_password(payload.current_password, admin.password):
        raise AuthenticationError("Current password is incorrect")

    crud.update_admin_password(db, admin_id, security.hash_password(payload.new_password))
    logger.info(f"Admin {admin_id} changed password.")
    return schemas.SuccessResponse()
