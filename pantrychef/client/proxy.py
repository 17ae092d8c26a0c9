from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from pantrychef.core.models import DiscoverResponse, GenerateResponse, Video, VideoSearchResponse
from pantrychef.services.exceptions import NetworkError, ProxyError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 60.0  # above the server's own 30s upstream timeout


class ProxyClient:
    """Calls the pantrychef backend and unwraps its `{success, ...}` envelope."""

    def __init__(self, base_url: str, http: Optional[httpx.Client] = None, timeout: float = DEFAULT_TIMEOUT_S):
        self._base_url = base_url.rstrip("/")
        self._http = http or httpx.Client(timeout=timeout)
        self._timeout = timeout

    def close(self) -> None:
        self._http.close()

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            resp = self._http.post(f"{self._base_url}{path}", json=payload, timeout=self._timeout)
        except httpx.TransportError as e:
            logger.error("POST %s failed: %s", path, e)
            raise NetworkError(f"Could not connect to the recipe server: {e}") from e
        try:
            body = resp.json()
        except ValueError as e:
            raise ProxyError(f"Unexpected response from server (HTTP {resp.status_code})", resp.status_code) from e
        if not isinstance(body, dict):
            raise ProxyError(f"Unexpected response from server (HTTP {resp.status_code})", resp.status_code)
        if not body.get("success") or resp.is_error:
            raise ProxyError(body.get("error") or f"Request failed (HTTP {resp.status_code})", resp.status_code)
        return body

    def generate(self, ingredients: List[str]) -> str:
        body = self._post("/api/generate", {"ingredients": list(ingredients)})
        try:
            return GenerateResponse.model_validate(body).recipe
        except ValidationError as e:
            raise ProxyError("Server returned a malformed recipe response") from e

    def search_video(self, query: str) -> str:
        body = self._post("/api/youtube-search", {"query": query})
        video_id = VideoSearchResponse.model_validate(body).video_id
        if not video_id:
            raise ProxyError("Could not find a cooking video for this recipe.")
        return video_id

    def discover(self, query: str, max_results: int = 20) -> List[Video]:
        body = self._post("/api/youtube-discover", {"query": query, "maxResults": max_results})
        try:
            return DiscoverResponse.model_validate(body).videos
        except ValidationError as e:
            raise ProxyError("Server returned a malformed video list") from e
