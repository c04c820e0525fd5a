from conftest import ADMIN_PASSWORD, ADMIN_USERNAME
from vpnportal.core.sessions import SESSION_COOKIE_NAME


def test_login_then_me_returns_identity_without_hash(client, admin):
    resp = client.post("/api/v1/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    assert resp.json() == {"id": admin.id, "username": ADMIN_USERNAME}

    set_cookie = resp.headers["set-cookie"]
    assert SESSION_COOKIE_NAME in set_cookie
    assert "httponly" in set_cookie.lower()
    assert "samesite=lax" in set_cookie.lower()

    me = client.get("/api/v1/auth/me")
    assert me.status_code == 200
    body = me.json()
    assert body == {"id": admin.id, "username": ADMIN_USERNAME}
    assert "password" not in body


def test_me_without_session_is_401(client):
    resp = client.get("/api/v1/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Not authenticated"}


def test_wrong_password_and_unknown_user_look_identical(client, admin):
    wrong_password = client.post("/api/v1/auth/login", json={"username": ADMIN_USERNAME, "password": "nope-nope"})
    unknown_user = client.post("/api/v1/auth/login", json={"username": "ghost", "password": ADMIN_PASSWORD})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {"error": "Invalid credentials"}


def test_username_lookup_is_case_sensitive(client, admin):
    resp = client.post("/api/v1/auth/login", json={"username": ADMIN_USERNAME.upper(), "password": ADMIN_PASSWORD})
    assert resp.status_code == 401


def test_login_requires_both_fields(client):
    resp = client.post("/api/v1/auth/login", json={"username": "admin"})
    assert resp.status_code == 400
    fields = [e["field"] for e in resp.json()["error"]]
    assert "password" in fields


def test_logout_destroys_session_and_is_idempotent(admin_client):
    assert admin_client.post("/api/v1/auth/logout").json() == {"success": True}
    assert admin_client.get("/api/v1/auth/me").status_code == 401
    assert admin_client.post("/api/v1/auth/logout").json() == {"success": True}


def test_logout_invalidates_server_side_session_even_with_old_cookie(admin_client, anon_client):
    cookie = admin_client.cookies.get(SESSION_COOKIE_NAME)
    assert anon_client.get("/api/v1/auth/me", headers={"Cookie": f"{SESSION_COOKIE_NAME}={cookie}"}).status_code == 200

    admin_client.post("/api/v1/auth/logout")
    resp = anon_client.get("/api/v1/auth/me", headers={"Cookie": f"{SESSION_COOKIE_NAME}={cookie}"})
    assert resp.status_code == 401


def test_tampered_cookie_is_anonymous(admin_client, anon_client):
    cookie = admin_client.cookies.get(SESSION_COOKIE_NAME)
    session_id, _signature = cookie.rsplit(".", 1)
    forged = f"{session_id}.{'0' * 64}"
    resp = anon_client.get("/api/v1/auth/me", headers={"Cookie": f"{SESSION_COOKIE_NAME}={forged}"})
    assert resp.status_code == 401


def test_password_change_flow(admin_client, anon_client):
    wrong = admin_client.patch(
        "/api/v1/auth/password", json={"currentPassword": "not-it", "newPassword": "brand-new-pass"}
    )
    assert wrong.status_code == 401

    ok = admin_client.patch(
        "/api/v1/auth/password", json={"currentPassword": ADMIN_PASSWORD, "newPassword": "brand-new-pass"}
    )
    assert ok.status_code == 200
    assert ok.json() == {"success": True}

    old = anon_client.post("/api/v1/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert old.status_code == 401
    new = anon_client.post("/api/v1/auth/login", json={"username": ADMIN_USERNAME, "password": "brand-new-pass"})
    assert new.status_code == 200


def test_password_change_enforces_minimum_length(admin_client):
    resp = admin_client.patch(
        "/api/v1/auth/password", json={"currentPassword": ADMIN_PASSWORD, "newPassword": "12345"}
    )
    assert resp.status_code == 400
    assert resp.json()["error"][0]["field"] == "newPassword"


def test_password_change_keeps_current_session(admin_client):
    admin_client.patch(
        "/api/v1/auth/password", json={"currentPassword": ADMIN_PASSWORD, "newPassword": "another-pass"}
    )
    assert admin_client.get("/api/v1/auth/me").status_code == 200


def test_username_change(admin_client, admin):
    resp = admin_client.patch("/api/v1/auth/username", json={"newUsername": "root", "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    assert resp.json() == {"id": admin.id, "username": "root"}
    assert admin_client.get("/api/v1/auth/me").json()["username"] == "root"


def test_username_change_requires_current_password(admin_client):
    resp = admin_client.patch("/api/v1/auth/username", json={"newUsername": "root", "password": "wrong-one"})
    assert resp.status_code == 401
    assert admin_client.get("/api/v1/auth/me").json()["username"] == ADMIN_USERNAME


def test_username_change_rejects_taken_name(admin_client, db_session):
    from vpnportal.core.security import hash_password
    from vpnportal.crud import admins as crud

    crud.create_admin(db_session, "editor", hash_password("editor-pass"))
    resp = admin_client.patch("/api/v1/auth/username", json={"newUsername": "editor", "password": ADMIN_PASSWORD})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Username is already taken"}


def test_credential_changes_require_session(client, admin):
    resp = client.patch("/api/v1/auth/password", json={"currentPassword": ADMIN_PASSWORD, "newPassword": "whatever1"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized"}
