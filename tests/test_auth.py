from tests.conftest import CREDENTIALS


def test_login_admin_returns_session_user(anon):
    resp = anon.post("/api/auth/login", json=CREDENTIALS["admin"])
    assert resp.status_code == 200
    user = resp.json()["user"]
    assert user["role"] == "admin"
    assert user["username"] == "admin"
    assert set(user) == {"id", "username", "role", "name"}
    assert "session" in resp.cookies


def test_login_role_mismatch_is_rejected(anon):
    resp = anon.post("/api/auth/login", json={"username": "admin", "password": "admin123", "role": "hr"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid credentials"}


def test_login_wrong_password(anon):
    resp = anon.post("/api/auth/login", json={"username": "admin", "password": "nope", "role": "admin"})
    assert resp.status_code == 401


def test_login_username_is_case_sensitive(anon):
    resp = anon.post("/api/auth/login", json={"username": "Admin", "password": "admin123", "role": "admin"})
    assert resp.status_code == 401


def test_login_malformed_body(anon):
    resp = anon.post("/api/auth/login", json={"username": "admin", "role": "superuser"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid request data"}


def test_me_requires_session(anon):
    resp = anon.get("/api/auth/me")
    assert resp.status_code == 401


def test_me_and_logout(login):
    client = login("hr")
    resp = client.get("/api/auth/me")
    assert resp.status_code == 200
    assert resp.json()["user"]["role"] == "hr"

    resp = client.post("/api/auth/logout")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Logged out successfully"}
    assert client.get("/api/auth/me").status_code == 401


def test_bearer_token_is_accepted(anon, login):
    client = login("admin")
    token = client.cookies.get("session")
    resp = anon.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.json()["user"]["username"] == "admin"


def test_tampered_token_is_rejected(anon):
    resp = anon.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401


def test_passwords_are_hashed_in_store(store):
    admin = store.get_user_by_username("admin")
    assert admin.password_hash
    assert admin.password_hash != "admin123"
    assert "passwordHash" not in admin.to_dict()


def test_logout_revokes_token(anon, login):
    client = login("hr")
    token = client.cookies.get("session")
    assert client.post("/api/auth/logout").status_code == 200

    resp = anon.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Session expired"}


def test_logout_only_revokes_presented_token(anon, login):
    first = login("admin")
    second = login("admin")
    token = first.cookies.get("session")
    resp = anon.post("/api/auth/logout", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert first.get("/api/auth/me").status_code == 401
    assert second.get("/api/auth/me").status_code == 200


def test_logout_without_session(anon):
    resp = anon.post("/api/auth/logout")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Logged out successfully"}
