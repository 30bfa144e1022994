from influencer_hub.config import settings
from influencer_hub.models import Profile
from influencer_hub.security.auth import ensure_profile_exists, get_password_hash, verify_password

def test_signup_then_me(client):
    r = client.post("/auth/signup", json={"name": "Ava", "email": "ava@example.com", "password": "secret123"})
    assert r.status_code == 200
    token = r.json()["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "ava@example.com"
    assert me.json()["name"] == "Ava"

def test_signup_sets_session_cookie(client):
    r = client.post("/auth/signup", json={"name": "Ava", "email": "ava@example.com", "password": "secret123"})
    assert "access_token" in r.cookies

    # Cookie alone is enough to identify the user
    assert client.get("/auth/me").status_code == 200

def test_duplicate_signup_rejected(client, make_user):
    make_user(email="ava@example.com")
    r = client.post("/auth/signup", json={"name": "Ava 2", "email": "AVA@example.com", "password": "secret123"})
    assert r.status_code == 400

def test_signup_short_password(client):
    r = client.post("/auth/signup", json={"name": "Ava", "email": "ava@example.com", "password": "123"})
    assert r.status_code == 422

def test_login_success_and_failure(client, make_user):
    make_user(email="ava@example.com", password="secret123")

    ok = client.post("/auth/login", data={"username": "ava@example.com", "password": "secret123"})
    assert ok.status_code == 200
    assert ok.json()["token_type"] == "bearer"

    bad = client.post("/auth/login", data={"username": "ava@example.com", "password": "wrong-pass"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Incorrect email or password"

def test_me_requires_auth(client):
    assert client.get("/auth/me").status_code == 401

def test_garbage_token_is_unauthenticated(client):
    r = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401

def test_logout_clears_cookie(client):
    client.post("/auth/signup", json={"name": "Ava", "email": "ava@example.com", "password": "secret123"})
    r = client.post("/auth/logout")
    assert r.status_code == 200
    assert client.get("/auth/me").status_code == 401

def test_update_profile(client, auth_headers):
    r = client.patch("/auth/me", json={"niche": "fitness", "audience_age": "18-24"}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["niche"] == "fitness"
    assert r.json()["audience_age"] == "18-24"

    empty = client.patch("/auth/me", json={}, headers=auth_headers)
    assert empty.status_code == 400

def test_resend_confirmation_does_not_leak_accounts(client, make_user):
    make_user(email="ava@example.com")
    known = client.post("/auth/resend-confirmation", json={"email": "ava@example.com"})
    unknown = client.post("/auth/resend-confirmation", json={"email": "nobody@example.com"})
    assert known.status_code == unknown.status_code == 202
    assert known.json() == unknown.json()

def test_demo_login_disabled_by_default(client):
    assert client.post("/auth/demo").status_code == 404

def test_demo_login_reuses_profile(client, monkeypatch):
    monkeypatch.setattr(settings, "demo_auto_login", True)
    first = client.post("/auth/demo")
    assert first.status_code == 200
    id1 = client.get("/auth/me").json()["id"]

    client.cookies.clear()
    client.post("/auth/demo")
    assert client.get("/auth/me").json()["id"] == id1

def test_ensure_profile_exists_name_fallbacks(db):
    from_metadata = ensure_profile_exists(db, None, {"email": "a@example.com", "user_metadata": {"name": "Meta Name"}})
    anonymous = ensure_profile_exists(db, None, {"email": "b@example.com"})
    db.commit()

    assert from_metadata.name == "Meta Name"
    assert anonymous.name == "User"

def test_ensure_profile_exists_returns_existing(db):
    profile = Profile(email="c@example.com", name="Existing")
    db.add(profile)
    db.commit()

    same = ensure_profile_exists(db, profile.id, {"email": "other@example.com", "name": "Other"})
    assert same.id == profile.id
    assert same.name == "Existing"
    assert db.query(Profile).count() == 1

def test_password_hashing():
    hashed = get_password_hash("secret123")
    assert verify_password("secret123", hashed)
    assert not verify_password("secret124", hashed)
    assert not verify_password("secret123", None)
