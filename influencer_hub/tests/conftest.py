import os
import tempfile

# Point the app at a throwaway database and uploads dir before it is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOADS_DIR"] = tempfile.mkdtemp(prefix="influencer_hub_uploads_")
os.environ.pop("OPENAI_API_KEY", None)
os.environ.pop("AXIOM_TOKEN", None)

import pytest
from fastapi.testclient import TestClient

from influencer_hub.db import engine, SessionLocal, get_db
from influencer_hub.models import Base
from influencer_hub.main import app

@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

@pytest.fixture
def make_user(client):
    """Signs up a profile and returns its Authorization header."""
    def _make(email="creator@example.com", name="Ava Creator", password="secret123"):
        r = client.post("/auth/signup", json={"name": name, "email": email, "password": password})
        assert r.status_code == 200, r.text
        # Drop the session cookie so each request is identified by its own header
        client.cookies.clear()
        return {"Authorization": f"Bearer {r.json()['access_token']}"}
    return _make

@pytest.fixture
def auth_headers(make_user):
    return make_user()
