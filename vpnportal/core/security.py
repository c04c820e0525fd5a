# FILE: ./vpnportal/core/security.py
from passlib.context import CryptContext

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

MIN_PASSWORD_LENGTH = 6

# برای کاربری که وجود ندارد هم یک مقایسه‌ی کامل bcrypt انجام می‌شود تا زمان پاسخ
# وجود یا عدم وجود نام کاربری را لو ندهد
_DUMMY_HASH = pwd_context.hash("not-a-real-password")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def burn_verification(password: str) -> None:
    pwd_context.verify(password, _DUMMY_HASH)
