# tests/unit/test_services.py
import json

import httpx
import pytest

from pantrychef.config import Settings
from pantrychef.services.exceptions import ConfigurationError, UpstreamError
from pantrychef.services.gemini import GeminiRecipeGenerator, build_prompt
from pantrychef.services.youtube import YouTubeVideoSearch


def make_settings(**overrides) -> Settings:
    base = {"gemini_api_key": "test-gemini", "youtube_api_key": "test-youtube"}
    base.update(overrides)
    return Settings(**base)


# ---- Gemini ------------------------------------------------------------------

def test_prompt_embeds_joined_ingredients():
    prompt = build_prompt(["rice", "tomato", "onion"])
    assert "A user has these ingredients: rice, tomato, onion." in prompt
    assert "A catchy recipe title" in prompt


def test_generate_returns_recipe_text(upstream, gemini_body):
    upstream.reply(json=gemini_body("# Tomato Rice\nCook it."))
    gen = GeminiRecipeGenerator(make_settings(), http=upstream.client)

    assert gen.generate(["rice", "tomato"]) == "# Tomato Rice\nCook it."

    (req,) = upstream.requests
    assert req.method == "POST"
    assert req.url.path == "/v1/models/gemini-2.5-flash:generateContent"
    assert req.headers["x-goog-api-key"] == "test-gemini"
    assert "key" not in req.url.params
    body = json.loads(req.content)
    assert "rice, tomato" in body["contents"][0]["parts"][0]["text"]


def test_generate_without_key_makes_no_call(upstream):
    gen = GeminiRecipeGenerator(make_settings(gemini_api_key=None), http=upstream.client)
    with pytest.raises(ConfigurationError) as ei:
        gen.generate(["rice"])
    assert ei.value.status_code == 500
    assert upstream.requests == []


def test_generate_forwards_upstream_status_and_message(upstream):
    upstream.reply(400, json={"error": {"code": 400, "message": "API key not valid.", "status": "INVALID_ARGUMENT"}})
    gen = GeminiRecipeGenerator(make_settings(), http=upstream.client)
    with pytest.raises(UpstreamError) as ei:
        gen.generate(["rice"])
    assert ei.value.status_code == 400
    assert ei.value.message == "Gemini API error: API key not valid."


def test_generate_falls_back_to_status_text(upstream):
    upstream.reply(503, text="<html>down</html>")
    gen = GeminiRecipeGenerator(make_settings(), http=upstream.client)
    with pytest.raises(UpstreamError) as ei:
        gen.generate(["rice"])
    assert ei.value.status_code == 503
    assert ei.value.message == "Gemini API error: Service Unavailable"


def test_generate_timeout_is_a_single_failed_attempt(upstream):
    upstream.fail(httpx.ReadTimeout("timed out"))
    gen = GeminiRecipeGenerator(make_settings(), http=upstream.client)
    with pytest.raises(UpstreamError) as ei:
        gen.generate(["rice"])
    assert ei.value.status_code == 504
    assert len(upstream.requests) == 1


def test_generate_unreachable_upstream(upstream):
    upstream.fail(httpx.ConnectError("connection refused"))
    gen = GeminiRecipeGenerator(make_settings(), http=upstream.client)
    with pytest.raises(UpstreamError) as ei:
        gen.generate(["rice"])
    assert ei.value.status_code == 502


@pytest.mark.parametrize("body", [{"candidates": []}, {"promptFeedback": {"blockReason": "SAFETY"}}])
def test_generate_without_candidates_is_an_upstream_error(upstream, body):
    upstream.reply(json=body)
    gen = GeminiRecipeGenerator(make_settings(), http=upstream.client)
    with pytest.raises(UpstreamError) as ei:
        gen.generate(["rice"])
    assert ei.value.status_code == 502


def test_generate_with_malformed_body(upstream):
    upstream.reply(json={"candidates": "nope"})
    gen = GeminiRecipeGenerator(make_settings(), http=upstream.client)
    with pytest.raises(UpstreamError):
        gen.generate(["rice"])


def test_generate_uses_configured_model(upstream, gemini_body):
    upstream.reply(json=gemini_body("ok"))
    gen = GeminiRecipeGenerator(make_settings(gemini_model="gemini-2.0-flash"), http=upstream.client)
    gen.generate([])
    assert upstream.requests[0].url.path.endswith("/models/gemini-2.0-flash:generateContent")


# ---- YouTube -----------------------------------------------------------------

def test_search_one_fixed_parameters(upstream, youtube_body):
    upstream.reply(json=youtube_body("vid123"))
    search = YouTubeVideoSearch(make_settings(), http=upstream.client)

    assert search.search_one("tomato soup") == "vid123"

    params = upstream.requests[0].url.params
    assert params["q"] == "tomato soup"
    assert params["key"] == "test-youtube"
    assert params["maxResults"] == "1"
    assert params["order"] == "relevance"
    assert params["videoDefinition"] == "high"
    assert params["safeSearch"] == "strict"
    assert params["type"] == "video"
    assert "videoDuration" not in params


def test_search_one_no_results(upstream, youtube_body):
    upstream.reply(json=youtube_body())
    search = YouTubeVideoSearch(make_settings(), http=upstream.client)
    assert search.search_one("nothing") is None


def test_search_without_key(upstream):
    search = YouTubeVideoSearch(make_settings(youtube_api_key=""), http=upstream.client)
    with pytest.raises(ConfigurationError):
        search.search_one("soup")
    with pytest.raises(ConfigurationError):
        search.discover("soup")
    assert upstream.requests == []


def test_search_result_without_video_id(upstream):
    upstream.reply(json={"items": [{"id": {"kind": "youtube#channel", "channelId": "c1"}}]})
    search = YouTubeVideoSearch(make_settings(), http=upstream.client)
    with pytest.raises(UpstreamError):
        search.search_one("soup")


def test_discover_caps_and_filters(upstream, youtube_body):
    upstream.reply(json=youtube_body("a1", "b2"))
    search = YouTubeVideoSearch(make_settings(), http=upstream.client)

    videos = search.discover("pasta", max_results=50)

    params = upstream.requests[0].url.params
    assert params["maxResults"] == "20"
    assert params["videoDuration"] == "short"
    assert params["videoCategoryId"] == "26"
    assert [v.video_id for v in videos] == ["a1", "b2"]
    assert videos[0].thumbnail == "https://i.ytimg.com/vi/a1/mqdefault.jpg"
    assert videos[0].channel_title == "Test Kitchen"


def test_discover_default_count(upstream, youtube_body):
    upstream.reply(json=youtube_body())
    search = YouTubeVideoSearch(make_settings(), http=upstream.client)
    assert search.discover("pasta") == []
    assert upstream.requests[0].url.params["maxResults"] == "12"


def test_discover_forwards_quota_errors(upstream):
    upstream.reply(403, json={"error": {"code": 403, "message": "quotaExceeded"}})
    search = YouTubeVideoSearch(make_settings(), http=upstream.client)
    with pytest.raises(UpstreamError) as ei:
        search.discover("pasta")
    assert ei.value.status_code == 403
    assert ei.value.message == "YouTube API error: quotaExceeded"
