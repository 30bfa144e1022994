import json
from unittest.mock import MagicMock, patch
from influencer_hub.config import settings
from influencer_hub.services.llm import build_prompts, complete, generate_post_caption

def _generate(client, **body):
    return client.post("/api/ai-content-generator", json=body)

def test_hashtags_from_json_array(client):
    with patch("influencer_hub.services.llm.complete", return_value='["travel", "sunset", "wanderlust"]'):
        r = _generate(client, type="hashtags", prompt="Beach trip")
    assert r.status_code == 200
    assert r.json() == {"result": ["travel", "sunset", "wanderlust"]}

def test_hashtags_from_plain_text(client):
    """Non-JSON replies are split on commas and newlines."""
    with patch("influencer_hub.services.llm.complete", return_value="#travel, #sunset\n'#beach'"):
        r = _generate(client, type="hashtags", prompt="Beach trip")
    assert r.json()["result"] == ["#travel", "#sunset", "#beach"]

def test_monetization_json(client):
    reply = json.dumps([{"title": "Affiliate links", "description": "Gear you use", "estimatedValue": "$500/month"}])
    with patch("influencer_hub.services.llm.complete", return_value=reply):
        r = _generate(client, type="monetization", prompt="Fitness, 50k followers")
    assert r.json()["result"][0]["title"] == "Affiliate links"

def test_monetization_numbered_text(client):
    reply = "1. Sponsored posts\nPartner with gym brands\n2. Online coaching\nSell programs"
    with patch("influencer_hub.services.llm.complete", return_value=reply):
        r = _generate(client, type="monetization", prompt="Fitness")
    assert r.json()["result"] == [
        {"title": "Sponsored posts", "description": "Partner with gym brands", "estimatedValue": None},
        {"title": "Online coaching", "description": "Sell programs", "estimatedValue": None},
    ]

def test_caption_passes_text_through(client):
    with patch("influencer_hub.services.llm.complete", return_value="Golden hour never gets old.") as mock_complete:
        r = _generate(client, type="caption", prompt="Sunset photo", contentLength="short")
    assert r.json() == {"result": "Golden hour never gets old."}
    _, user_prompt = mock_complete.call_args[0]
    assert "short caption" in user_prompt

def test_upstream_error_becomes_500(client):
    with patch("influencer_hub.services.llm.complete", side_effect=RuntimeError("rate limited")):
        r = _generate(client, type="caption", prompt="Anything")
    assert r.status_code == 500
    assert r.json() == {"error": "rate limited"}

def test_missing_api_key_becomes_500(client, monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", None)
    r = _generate(client, type="comments", prompt="Love this!")
    assert r.status_code == 500
    assert "OPENAI_API_KEY" in r.json()["error"]

def test_missing_field_becomes_500(client):
    r = client.post("/api/ai-content-generator", json={"prompt": "no type"})
    assert r.status_code == 500
    assert "type" in r.json()["error"]

def test_unreadable_body_becomes_500(client):
    r = client.post("/api/ai-content-generator", content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 500
    assert set(r.json()) == {"error"}

def test_build_prompts_defaults():
    system, user = build_prompts("repurpose", "My blog post")
    assert "repurposing expert" in system
    assert "for Instagram in a concise format" in user

    system, user = build_prompts("unknown", "raw prompt")
    assert system == "You are a helpful assistant for social media content creation."
    assert user == "raw prompt"

def test_complete_calls_chat_completions(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "sk-test")
    mock_response = MagicMock()
    mock_response.choices = [MagicMock(message=MagicMock(content="Hello there"))]

    with patch("influencer_hub.services.llm.OpenAI") as mock_openai:
        mock_openai.return_value.chat.completions.create.return_value = mock_response
        assert complete("system", "user") == "Hello there"

    kwargs = mock_openai.return_value.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == settings.openai_model
    assert kwargs["temperature"] == 0.7
    assert kwargs["messages"][0] == {"role": "system", "content": "system"}

def test_generate_post_caption_uses_profile():
    profile = MagicMock(niche="vegan cooking", audience_type="students", audience_age=None, interests=None)
    with patch("influencer_hub.services.llm.complete", return_value="Try this 10 minute curry") as mock_complete:
        assert generate_post_caption(profile) == "Try this 10 minute curry"
    _, user_prompt = mock_complete.call_args[0]
    assert "niche: vegan cooking" in user_prompt
    assert "audience: students" in user_prompt
