# FILE: ./vpnportal/api/deps.py

import logging
from typing import Optional
from fastapi import Request

from vpnportal.core.errors import AuthorizationError
from vpnportal.core.sessions import SessionStore
from vpnportal.core.uploads import ImageStorage

logger = logging.getLogger(__name__)


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_image_storage(request: Request) -> ImageStorage:
    return request.app.state.image_storage


def current_admin_id(request: Request) -> Optional[int]:
    """شناسه‌ی مدیر نشست جاری که توسط میان‌افزار نشست بارگذاری شده است."""
    return getattr(request.state, "admin_id", None)


def require_admin(request: Request) -> int:
    """
    محافظ مسیرهای تغییردهنده. پیش از خواندن بدنه‌ی درخواست اجرا می‌شود
    تا بدون نشست معتبر هیچ تغییری انجام نشود.
    """
    admin_id = current_admin_id(request)
    if admin_id is None:
        logger.info(f"Rejected unauthenticated {request.method} {request.url.path}")
        raise AuthorizationError()
    return admin_id


def establish_session(request: Request, admin_id: int) -> str:
    """نشست جدیدی برای مدیر می‌سازد و نشست قبلی همین کلاینت را از بین می‌برد."""
    store = get_session_store(request)
    previous = getattr(request.state, "session_id", None)
    if previous:
        store.destroy(previous)

    session_id = store.new_session_id()
    store.set(session_id, admin_id)
    request.state.session_id = session_id
    request.state.admin_id = admin_id
    return session_id


def end_session(request: Request):
    session_id = getattr(request.state, "session_id", None)
    if session_id:
        get_session_store(request).destroy(session_id)
    request.state.session_id = None
    request.state.admin_id = None
    request.state.session_ended = True
