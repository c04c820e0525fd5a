# FILE: ./common/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from common.config import DATABASE_URL


def make_engine(url: str):
    """
    Engine برای URL داده شده می‌سازد.
    در SQLite کلیدهای خارجی فعال می‌شوند تا CASCADE و SET NULL مثل MySQL رفتار کنند.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        sqlite_engine = create_engine(url, **kwargs)

        @event.listens_for(sqlite_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return sqlite_engine

    # pool_pre_ping=True برای جلوگیری از خطای "MySQL server has gone away"
    return create_engine(url, pool_pre_ping=True)


engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """
    Dependency injector برای FastAPI جهت گرفتن یک session دیتابیس.
    تضمین می‌کند که session پس از پایان درخواست بسته می‌شود.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
