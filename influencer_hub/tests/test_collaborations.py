import pytest
from influencer_hub.services.marketplace import format_collaboration_type

@pytest.fixture
def brand(make_user):
    return make_user(email="brand@example.com", name="Glow Labs")

@pytest.fixture
def creator(make_user):
    return make_user(email="creator@example.com", name="Ava")

@pytest.fixture
def collab_id(client, brand):
    r = client.post("/collaborations", json={
        "brand_name": "Glow Labs",
        "brand_description": "Clean skincare for sensitive skin",
        "collaboration_type": "brand_ambassador",
        "requirements": "10k+ followers",
        "compensation": "$800 per month",
    }, headers=brand)
    assert r.status_code == 200
    return r.json()["id"]

def test_listing_and_search(client, collab_id):
    rows = client.get("/collaborations").json()
    assert len(rows) == 1
    assert rows[0]["type_label"] == "Brand Ambassador"

    assert len(client.get("/collaborations", params={"q": "SKINCARE"}).json()) == 1
    assert client.get("/collaborations", params={"q": "gaming"}).json() == []

def test_apply_flow(client, creator, collab_id):
    r = client.post(f"/collaborations/{collab_id}/apply", json={"message": "I love your serums!"}, headers=creator)
    assert r.status_code == 201
    assert r.json()["status"] == "pending"

    again = client.post(f"/collaborations/{collab_id}/apply", json={"message": "Me again"}, headers=creator)
    assert again.status_code == 409

    mine = client.get("/collaborations/applications", headers=creator).json()
    assert len(mine) == 1
    assert mine[0]["brand_name"] == "Glow Labs"

def test_apply_needs_message(client, creator, collab_id):
    r = client.post(f"/collaborations/{collab_id}/apply", json={"message": "   "}, headers=creator)
    assert r.status_code == 400
    assert r.json()["detail"] == "Please enter a message to the brand"

def test_apply_unknown_collaboration(client, creator):
    assert client.post("/collaborations/999/apply", json={"message": "Hi"}, headers=creator).status_code == 404

def test_review_application(client, brand, creator, collab_id):
    app_id = client.post(f"/collaborations/{collab_id}/apply", json={"message": "Hi"}, headers=creator).json()["id"]

    assert client.patch(f"/collaborations/applications/{app_id}", json={"status": "approved"}, headers=creator).status_code == 403
    assert client.patch(f"/collaborations/applications/{app_id}", json={"status": "maybe"}, headers=brand).status_code == 400

    r = client.patch(f"/collaborations/applications/{app_id}", json={"status": "approved"}, headers=brand)
    assert r.status_code == 200
    assert r.json()["status"] == "approved"

def test_closed_collaboration_hidden(client, brand, creator, collab_id):
    assert client.delete(f"/collaborations/{collab_id}", headers=creator).status_code == 404
    assert client.delete(f"/collaborations/{collab_id}", headers=brand).status_code == 200

    assert client.get("/collaborations").json() == []
    assert client.post(f"/collaborations/{collab_id}/apply", json={"message": "Hi"}, headers=creator).status_code == 404

def test_create_requires_brand_name(client, brand):
    assert client.post("/collaborations", json={"brand_name": "  "}, headers=brand).status_code == 400

def test_format_collaboration_type():
    assert format_collaboration_type("sponsored_post") == "Sponsored Post"
    assert format_collaboration_type("event") == "Event"
    assert format_collaboration_type("") == ""

def test_review_cannot_reset_to_pending(client, brand, creator, collab_id):
    app_id = client.post(f"/collaborations/{collab_id}/apply", json={"message": "Hi"}, headers=creator).json()["id"]
    r = client.patch(f"/collaborations/applications/{app_id}", json={"status": "pending"}, headers=brand)
    assert r.status_code == 400

def test_create_rejects_unknown_type(client, brand):
    r = client.post("/collaborations", json={"brand_name": "Acme", "collaboration_type": "barter"}, headers=brand)
    assert r.status_code == 400

def test_search_matches_type_and_name(client, brand, collab_id):
    client.post("/collaborations", json={"brand_name": "Trail Co", "collaboration_type": "affiliate"}, headers=brand)

    assert [c["brand_name"] for c in client.get("/collaborations", params={"q": "ambassador"}).json()] == ["Glow Labs"]
    assert [c["brand_name"] for c in client.get("/collaborations", params={"q": "trail"}).json()] == ["Trail Co"]
    assert len(client.get("/collaborations", params={"q": "  "}).json()) == 2
