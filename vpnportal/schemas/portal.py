# FILE: ./vpnportal/schemas/portal.py

from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import ClassVar, FrozenSet, List, Optional
from datetime import datetime
from vpnportal.models.portal import TutorialType, TutorialCategory


class CamelModel(BaseModel):
    """فیلدها در پایتون snake_case و روی سیم camelCase هستند."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PartialUpdate(CamelModel):
    """
    پایه‌ی اسکماهای به‌روزرسانی جزئی.
    فیلدی که ارسال نشده نادیده گرفته می‌شود، اما null صریح برای ستون‌های اجباری رد می‌شود.
    """
    non_nullable: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_for_required_columns(self):
        for name in self.model_fields_set & self.non_nullable:
            if getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(mode="json", exclude_unset=True)


def _blank_to_none(value):
    # فرم‌های پنل مدیریت برای فیلدهای خالی رشته‌ی خالی می‌فرستند
    if isinstance(value, str) and not value.strip():
        return None
    return value


# --- Platform Schemas ---
class PlatformBase(CamelModel):
    name_en: str = Field(min_length=1, max_length=255)
    name_fa: str = Field(min_length=1, max_length=255)
    icon: str = Field(min_length=1, max_length=100)
    order: int = 0

class PlatformCreate(PlatformBase):
    pass

class PlatformUpdate(PartialUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset({"name_en", "name_fa", "icon", "order"})
    name_en: Optional[str] = Field(default=None, min_length=1, max_length=255)
    name_fa: Optional[str] = Field(default=None, min_length=1, max_length=255)
    icon: Optional[str] = Field(default=None, min_length=1, max_length=100)
    order: Optional[int] = None

class PlatformInDB(PlatformBase):
    id: int
    created_at: datetime


# --- Application Schemas ---
class ApplicationBase(CamelModel):
    platform_id: int
    name_en: str = Field(min_length=1, max_length=255)
    name_fa: str = Field(min_length=1, max_length=255)
    description_en: Optional[str] = None
    description_fa: Optional[str] = None
    download_link: str = Field(min_length=1, max_length=2048)
    version: Optional[str] = Field(default=None, max_length=50)
    order: int = 0

    @field_validator("description_en", "description_fa", "version", mode="before")
    @classmethod
    def blank_optional_text(cls, value):
        return _blank_to_none(value)

class ApplicationCreate(ApplicationBase):
    pass

class ApplicationUpdate(PartialUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset(
        {"platform_id", "name_en", "name_fa", "download_link", "order"}
    )
    platform_id: Optional[int] = None
    name_en: Optional[str] = Field(default=None, min_length=1, max_length=255)
    name_fa: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description_en: Optional[str] = None
    description_fa: Optional[str] = None
    download_link: Optional[str] = Field(default=None, min_length=1, max_length=2048)
    version: Optional[str] = Field(default=None, max_length=50)
    order: Optional[int] = None

    @field_validator("description_en", "description_fa", "version", mode="before")
    @classmethod
    def blank_optional_text(cls, value):
        return _blank_to_none(value)

class ApplicationInDB(ApplicationBase):
    id: int
    created_at: datetime


# --- Tutorial Schemas ---
class TutorialBase(CamelModel):
    type: TutorialType
    category: TutorialCategory
    title_en: str = Field(min_length=1, max_length=512)
    title_fa: str = Field(min_length=1, max_length=512)
    content_en: Optional[str] = None
    content_fa: Optional[str] = None
    video_url: Optional[str] = Field(default=None, max_length=2048)
    images: List[str] = []
    platform_id: Optional[int] = None
    app_id: Optional[int] = None
    order: int = 0

    @field_validator("content_en", "content_fa", "video_url", mode="before")
    @classmethod
    def blank_optional_text(cls, value):
        return _blank_to_none(value)

class TutorialCreate(TutorialBase):
    pass

class TutorialUpdate(PartialUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset(
        {"type", "category", "title_en", "title_fa", "images", "order"}
    )
    type: Optional[TutorialType] = None
    category: Optional[TutorialCategory] = None
    title_en: Optional[str] = Field(default=None, min_length=1, max_length=512)
    title_fa: Optional[str] = Field(default=None, min_length=1, max_length=512)
    content_en: Optional[str] = None
    content_fa: Optional[str] = None
    video_url: Optional[str] = Field(default=None, max_length=2048)
    images: Optional[List[str]] = None
    platform_id: Optional[int] = None
    app_id: Optional[int] = None
    order: Optional[int] = None

    @field_validator("content_en", "content_fa", "video_url", mode="before")
    @classmethod
    def blank_optional_text(cls, value):
        return _blank_to_none(value)

class TutorialInDB(TutorialBase):
    id: int
    created_at: datetime

    @field_validator("images", mode="before")
    @classmethod
    def images_never_null(cls, value):
        return value or []


# --- Announcement Schemas ---
class AnnouncementBase(CamelModel):
    title_en: str = Field(min_length=1, max_length=512)
    title_fa: str = Field(min_length=1, max_length=512)
    content_en: str = Field(min_length=1)
    content_fa: str = Field(min_length=1)
    is_active: bool = True

class AnnouncementCreate(AnnouncementBase):
    pass

class AnnouncementUpdate(PartialUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset(
        {"title_en", "title_fa", "content_en", "content_fa", "is_active"}
    )
    title_en: Optional[str] = Field(default=None, min_length=1, max_length=512)
    title_fa: Optional[str] = Field(default=None, min_length=1, max_length=512)
    content_en: Optional[str] = Field(default=None, min_length=1)
    content_fa: Optional[str] = Field(default=None, min_length=1)
    is_active: Optional[bool] = None

class AnnouncementInDB(AnnouncementBase):
    id: int
    created_at: datetime
    updated_at: datetime


# --- Auth Schemas ---
class LoginRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)

class AdminPublic(CamelModel):
    id: int
    username: str

class UsernameChange(CamelModel):
    # پنل مدیریت newUsername/password می‌فرستد
    new_username: str = Field(
        min_length=1, max_length=255,
        validation_alias=AliasChoices("newUsername", "username", "new_username"),
    )
    current_password: str = Field(
        min_length=1,
        validation_alias=AliasChoices("currentPassword", "password", "current_password"),
    )

class PasswordChange(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6)


# --- Misc Schemas ---
class SuccessResponse(BaseModel):
    success: bool = True

class UploadedImage(BaseModel):
    url: str
    filename: str

class DeletedImage(BaseModel):
    deleted: bool

class ContentStats(CamelModel):
    platforms: int
    applications: int
    tutorials: int
    announcements: int
    active_announcements: int
