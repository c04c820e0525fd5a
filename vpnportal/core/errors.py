# FILE: ./vpnportal/core/errors.py
"""خطاهای دامنه که در مرز API به پاسخ JSON با کد وضعیت مناسب تبدیل می‌شوند."""

from typing import Any, Dict, List, Optional


class PortalError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def payload(self) -> Any:
        return self.message


class ValidationError(PortalError):
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, errors: List[Dict[str, str]]):
        self.errors = errors
        super().__init__("; ".join(f"{e['field']}: {e['message']}" for e in errors))

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])

    @property
    def payload(self) -> Any:
        return self.errors


class AuthenticationError(PortalError):
    status_code = 401
    default_message = "Invalid credentials"


class AuthorizationError(PortalError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(PortalError):
    status_code = 404
    default_message = "Not found"


class UploadRejected(PortalError):
    status_code = 400
    default_message = "Upload rejected"


class DuplicateUsername(PortalError):
    status_code = 400
    default_message = "Username is already taken"


class UnexpectedError(PortalError):
    status_code = 500
