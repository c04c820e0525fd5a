# tests/conftest.py
import os
import tempfile

# پیش از import برنامه، دیتابیس و پوشه‌ی آپلود تست تنظیم می‌شوند
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="vpnportal-uploads-")
os.environ.pop("INITIAL_ADMIN_PASSWORD", None)

import pytest
from fastapi.testclient import TestClient

from common.database import Base, SessionLocal, engine
from vpnportal.core.security import hash_password
from vpnportal.core.sessions import InMemorySessionStore
from vpnportal.core.uploads import ImageStorage
from vpnportal.crud import admins as admins_crud
from vpnportal.main import create_app

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def app(upload_dir):
    return create_app(
        session_store=InMemorySessionStore(ttl_seconds=3600),
        image_storage=ImageStorage(str(upload_dir), max_file_size=5 * 1024 * 1024),
        session_secret="test-session-secret",
    )


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def admin(db_session):
    return admins_crud.create_admin(db_session, ADMIN_USERNAME, hash_password(ADMIN_PASSWORD))


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def anon_client(app, client):
    """کلاینت دوم بدون کوکی نشست، روی همان برنامه."""
    return TestClient(app)


@pytest.fixture
def admin_client(client, admin):
    resp = client.post("/api/v1/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200, resp.text
    return client


@pytest.fixture
def make_platform(admin_client):
    def _make(**overrides):
        body = {"nameEn": "Android", "nameFa": "اندروید", "icon": "android"}
        body.update(overrides)
        resp = admin_client.post("/api/v1/platforms", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make


@pytest.fixture
def make_application(admin_client):
    def _make(platform_id, **overrides):
        body = {
            "platformId": platform_id,
            "nameEn": "v2rayNG",
            "nameFa": "وی‌تو‌ری",
            "downloadLink": "https://example.com/v2rayng.apk",
        }
        body.update(overrides)
        resp = admin_client.post("/api/v1/applications", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make
