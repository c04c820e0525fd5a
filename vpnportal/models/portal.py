# FILE: ./vpnportal/models/portal.py

from datetime import datetime, timezone
import enum

from sqlalchemy import Column, Integer, String, JSON, ForeignKey, Text, DateTime, Boolean
from sqlalchemy.orm import relationship
from common.database import Base


def utcnow():
    return datetime.now(timezone.utc)


class TutorialType(str, enum.Enum):
    TEXT = "text"
    VIDEO = "video"


class TutorialCategory(str, enum.Enum):
    GENERAL = "general"
    BOT = "bot"
    TROUBLESHOOTING = "troubleshooting"


class Admin(Base):
    __tablename__ = "admins"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class Platform(Base):
    __tablename__ = "platforms"
    id = Column(Integer, primary_key=True, index=True)
    name_en = Column(String(255), nullable=False)
    name_fa = Column(String(255), nullable=False)
    icon = Column(String(100), nullable=False)
    order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # حذف در سطح دیتابیس انجام می‌شود (ON DELETE)
    applications = relationship("Application", back_populates="platform", passive_deletes=True)
    tutorials = relationship("Tutorial", back_populates="platform", passive_deletes=True)


class Application(Base):
    __tablename__ = "applications"
    id = Column(Integer, primary_key=True, index=True)
    platform_id = Column(Integer, ForeignKey("platforms.id", ondelete="CASCADE"), nullable=False, index=True)
    name_en = Column(String(255), nullable=False)
    name_fa = Column(String(255), nullable=False)
    description_en = Column(Text)
    description_fa = Column(Text)
    download_link = Column(String(2048), nullable=False)
    version = Column(String(50))
    order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    platform = relationship("Platform", back_populates="applications")
    tutorials = relationship("Tutorial", back_populates="application", passive_deletes=True)


class Tutorial(Base):
    __tablename__ = "tutorials"
    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(20), nullable=False)
    category = Column(String(50), nullable=False, index=True)
    title_en = Column(String(512), nullable=False)
    title_fa = Column(String(512), nullable=False)
    content_en = Column(Text)
    content_fa = Column(Text)
    video_url = Column(String(2048))
    images = Column(JSON, default=list, nullable=False)
    platform_id = Column(Integer, ForeignKey("platforms.id", ondelete="SET NULL"), index=True)
    app_id = Column(Integer, ForeignKey("applications.id", ondelete="SET NULL"), index=True)
    order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    platform = relationship("Platform", back_populates="tutorials")
    application = relationship("Application", back_populates="tutorials")


class Announcement(Base):
    __tablename__ = "announcements"
    id = Column(Integer, primary_key=True, index=True)
    title_en = Column(String(512), nullable=False)
    title_fa = Column(String(512), nullable=False)
    content_en = Column(Text, nullable=False)
    content_fa = Column(Text, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
