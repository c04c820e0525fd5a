# FILE: ./vpnportal/core/sessions.py
"""
نشست‌های سمت سرور برای ورود مدیر.

کوکی فقط شناسه‌ی تصادفی نشست به همراه امضای itsdangerous را نگه می‌دارد و
اطلاعات نشست (شناسه‌ی مدیر) در SessionStore سمت سرور ذخیره می‌شود.
"""

import abc
import hashlib
import logging
import secrets
import threading
import time
from typing import Callable, Dict, Optional, Tuple

from itsdangerous import BadSignature, Signer

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "vpnportal.sid"


class SessionStore(abc.ABC):
    """رابط ذخیره‌ساز نشست که به لایه‌ی مسیرها تزریق می‌شود."""

    @abc.abstractmethod
    def get(self, session_id: str) -> Optional[int]:
        """شناسه‌ی مدیر نشست را برمی‌گرداند یا None اگر نشست وجود ندارد یا منقضی شده است."""

    @abc.abstractmethod
    def set(self, session_id: str, admin_id: int) -> None:
        ...

    @abc.abstractmethod
    def destroy(self, session_id: str) -> None:
        ...

    def new_session_id(self) -> str:
        return secrets.token_urlsafe(32)


class InMemorySessionStore(SessionStore):
    """
    ذخیره‌ساز درون‌حافظه‌ای با انقضای لغزان: هر get موفق مهلت نشست را تمدید می‌کند.
    """

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> Optional[int]:
        now = self._clock()
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                return None
            admin_id, expires_at = entry
            if expires_at <= now:
                del self._sessions[session_id]
                return None
            self._sessions[session_id] = (admin_id, now + self.ttl_seconds)
            return admin_id

    def set(self, session_id: str, admin_id: int) -> None:
        # نشست‌های رهاشده (کوکی حذف‌شده بدون خروج) هنگام ساخت نشست جدید پاک می‌شوند
        self.purge_expired()
        with self._lock:
            self._sessions[session_id] = (admin_id, self._clock() + self.ttl_seconds)

    def destroy(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [sid for sid, (_, expires_at) in self._sessions.items() if expires_at <= now]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.debug(f"Purged {len(expired)} expired sessions.")
        return len(expired)

    def __len__(self):
        with self._lock:
            return len(self._sessions)


class CookieSigner:
    """مقدار کوکی را به صورت <session_id>.<امضا> با itsdangerous امضا و بررسی می‌کند."""

    def __init__(self, secret: str):
        self._signer = Signer(secret, salt=SESSION_COOKIE_NAME, digest_method=hashlib.sha256)

    def sign(self, session_id: str) -> str:
        return self._signer.sign(session_id).decode("utf-8")

    def unsign(self, cookie_value: Optional[str]) -> Optional[str]:
        if not cookie_value:
            return None
        try:
            return self._signer.unsign(cookie_value).decode("utf-8")
        except BadSignature:
            logger.warning("Rejected session cookie with invalid signature.")
            return None
