from typing import List, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from pantrychef.main import create_app


class FakeUpstream:
    """Stands in for a third-party API: queue replies, then inspect what was sent."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._replies: List[Union[httpx.Response, Exception]] = []
        self.client = httpx.Client(transport=httpx.MockTransport(self._handle))

    def reply(self, status_code: int = 200, json=None, **kwargs) -> "FakeUpstream":
        self._replies.append(httpx.Response(status_code, json=json, **kwargs))
        return self

    def fail(self, exc: Exception) -> "FakeUpstream":
        self._replies.append(exc)
        return self

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._replies:
            raise AssertionError(f"unexpected upstream call: {request.method} {request.url}")
        r = self._replies.pop(0)
        if isinstance(r, Exception):
            raise r
        return r


@pytest.fixture
def upstream():
    fake = FakeUpstream()
    yield fake
    fake.client.close()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    # never pick up real keys from the developer's shell or a project .env
    monkeypatch.chdir(tmp_path)
    for name in ("GEMINI_API_KEY", "YOUTUBE_API_KEY", "GEMINI_MODEL", "PORT", "LOG_LEVEL",
                 "TELEMETRY_ENABLED", "OTLP_ENDPOINT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def app():
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


def gemini_reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


def youtube_item(video_id: str, title: str = "How to cook") -> dict:
    return {
        "kind": "youtube#searchResult",
        "id": {"kind": "youtube#video", "videoId": video_id},
        "snippet": {
            "title": title,
            "description": f"{title} in five minutes",
            "channelTitle": "Test Kitchen",
            "thumbnails": {
                "default": {"url": f"https://i.ytimg.com/vi/{video_id}/default.jpg"},
                "medium": {"url": f"https://i.ytimg.com/vi/{video_id}/mqdefault.jpg"},
            },
        },
    }


@pytest.fixture
def gemini_body():
    return gemini_reply


@pytest.fixture
def youtube_body():
    def build(*video_ids: str) -> dict:
        return {"kind": "youtube#searchListResponse", "items": [youtube_item(v) for v in video_ids]}
    return build
