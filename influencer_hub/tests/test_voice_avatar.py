import os
from influencer_hub.models import TrainingJob

def test_voice_settings_defaults_and_update(client, auth_headers):
    r = client.get("/voice/settings", headers=auth_headers)
    assert r.status_code == 200
    assert (r.json()["pitch"], r.json()["speed"], r.json()["clarity"]) == (50, 50, 75)

    r = client.patch("/voice/settings", json={"pitch": 80, "voice_name": "Warm"}, headers=auth_headers)
    assert r.json()["pitch"] == 80
    assert r.json()["voice_name"] == "Warm"
    assert r.json()["speed"] == 50

def test_voice_settings_range(client, auth_headers):
    assert client.patch("/voice/settings", json={"clarity": 150}, headers=auth_headers).status_code == 422

def test_voice_samples_require_files(client, auth_headers, db):
    r = client.post("/voice/samples", headers=auth_headers)
    assert r.status_code == 400
    assert db.query(TrainingJob).count() == 0

def test_voice_samples_start_training(client, auth_headers):
    files = [
        ("files", ("take1.wav", b"RIFFfake", "audio/wav")),
        ("files", ("take2.mp3", b"ID3fake", "audio/mpeg")),
    ]
    r = client.post("/voice/samples", files=files, headers=auth_headers)
    assert r.status_code == 200
    job = r.json()
    assert job["kind"] == "voice"
    assert len(job["file_urls"]) == 2

    settings = client.get("/voice/settings", headers=auth_headers).json()
    assert settings["sample_url"] == job["file_urls"][0]

def test_voice_samples_reject_wrong_type(client, auth_headers):
    files = [("files", ("notes.txt", b"hello", "text/plain"))]
    assert client.post("/voice/samples", files=files, headers=auth_headers).status_code == 400

def test_avatar_media_sets_profile_picture(client, auth_headers):
    files = [
        ("files", ("intro.mp4", b"fake-video", "video/mp4")),
        ("files", ("face.jpg", b"fake-jpeg", "image/jpeg")),
    ]
    r = client.post("/avatar/media", files=files, headers=auth_headers)
    assert r.status_code == 200
    job = r.json()
    assert job["kind"] == "avatar"

    me = client.get("/auth/me", headers=auth_headers).json()
    assert me["avatar_url"] == job["file_urls"][1]
    assert me["avatar_url"].endswith("face.jpg")

def test_avatar_media_requires_files(client, auth_headers):
    r = client.post("/avatar/media", headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["detail"].startswith("No files selected")

def test_training_jobs_listing(client, auth_headers):
    client.post("/voice/samples", files=[("files", ("a.mp3", b"x", "audio/mpeg"))], headers=auth_headers)
    client.post("/avatar/media", files=[("files", ("b.png", b"x", "image/png"))], headers=auth_headers)

    assert len(client.get("/training-jobs", headers=auth_headers).json()) == 2
    avatar_jobs = client.get("/training-jobs", params={"kind": "avatar"}, headers=auth_headers).json()
    assert [j["kind"] for j in avatar_jobs] == ["avatar"]

    assert client.get("/training-jobs/999", headers=auth_headers).status_code == 404

def _stored_files():
    from influencer_hub.config import settings
    return set(os.listdir(settings.uploads_dir)) if os.path.isdir(settings.uploads_dir) else set()

def test_mixed_batch_writes_nothing(client, auth_headers, db):
    before = _stored_files()
    files = [
        ("files", ("take1.mp3", b"ID3fake", "audio/mpeg")),
        ("files", ("notes.txt", b"hello", "text/plain")),
    ]
    r = client.post("/voice/samples", files=files, headers=auth_headers)
    assert r.status_code == 400
    assert "notes.txt" in r.json()["detail"]
    assert _stored_files() == before
    assert db.query(TrainingJob).count() == 0

def test_avatar_mixed_batch_writes_nothing(client, auth_headers):
    before = _stored_files()
    files = [
        ("files", ("face.jpg", b"fake-jpeg", "image/jpeg")),
        ("files", ("song.mp3", b"ID3fake", "audio/mpeg")),
    ]
    assert client.post("/avatar/media", files=files, headers=auth_headers).status_code == 400
    assert _stored_files() == before
