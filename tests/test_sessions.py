from fastapi.testclient import TestClient

from conftest import ADMIN_PASSWORD, ADMIN_USERNAME
from vpnportal.core.sessions import CookieSigner, InMemorySessionStore
from vpnportal.core.uploads import ImageStorage
from vpnportal.main import create_app


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_session_store_set_get_destroy():
    store = InMemorySessionStore(ttl_seconds=60)
    sid = store.new_session_id()
    assert store.get(sid) is None

    store.set(sid, 7)
    assert store.get(sid) == 7

    store.destroy(sid)
    assert store.get(sid) is None
    store.destroy(sid)


def test_session_ids_are_unique():
    store = InMemorySessionStore(ttl_seconds=60)
    ids = {store.new_session_id() for _ in range(200)}
    assert len(ids) == 200


def test_session_expiry_is_sliding():
    clock = FakeClock()
    store = InMemorySessionStore(ttl_seconds=100, clock=clock)
    store.set("abc", 1)

    clock.now += 90
    assert store.get("abc") == 1  # تمدید تا now + 100

    clock.now += 90
    assert store.get("abc") == 1

    clock.now += 101
    assert store.get("abc") is None
    assert len(store) == 0


def test_purge_expired_removes_only_stale_sessions():
    clock = FakeClock()
    store = InMemorySessionStore(ttl_seconds=10, clock=clock)
    store.set("old", 1)
    clock.now += 5
    store.set("fresh", 2)
    clock.now += 6

    assert store.purge_expired() == 1
    assert store.get("fresh") == 2


def test_cookie_signer_round_trip_and_tamper_detection():
    signer = CookieSigner("secret-a")
    value = signer.sign("session-id_123")
    assert signer.unsign(value) == "session-id_123"

    assert CookieSigner("secret-b").unsign(value) is None
    assert signer.unsign("session-id_123") is None
    assert signer.unsign("") is None
    assert signer.unsign(None) is None
    assert signer.unsign("other-id." + value.rsplit(".", 1)[1]) is None


def test_expired_sessions_are_reclaimed_on_new_session():
    clock = FakeClock()
    store = InMemorySessionStore(ttl_seconds=60, clock=clock)
    for i in range(50):
        store.set(f"abandoned-{i}", 1)

    clock.now += 10_000
    store.set("fresh", 1)
    assert len(store) == 1
    assert store.get("fresh") == 1


def test_create_app_uses_injected_collaborators(upload_dir):
    store = InMemorySessionStore(ttl_seconds=5)
    storage = ImageStorage(str(upload_dir), max_file_size=1024)
    app = create_app(session_store=store, image_storage=storage, session_secret="s")
    assert app.state.session_store is store
    assert app.state.image_storage is storage


def test_abandoned_logins_do_not_accumulate(admin, upload_dir):
    clock = FakeClock()
    store = InMemorySessionStore(ttl_seconds=60, clock=clock)
    app = create_app(
        session_store=store,
        image_storage=ImageStorage(str(upload_dir), max_file_size=1024),
        session_secret="test-session-secret",
    )
    credentials = {"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}

    for _ in range(3):
        # هر کلاینت تازه کوکی ندارد و نشست قبلی را رها می‌کند
        with TestClient(app) as c:
            assert c.post("/api/v1/auth/login", json=credentials).status_code == 200
    assert len(store) == 3

    clock.now += 120
    with TestClient(app) as c:
        assert c.post("/api/v1/auth/login", json=credentials).status_code == 200
        assert len(store) == 1
        assert c.get("/api/v1/auth/me").status_code == 200
