from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from pantrychef.config import Settings
from pantrychef.core.models import Video, YouTubeSearchItem, YouTubeSearchResult
from .exceptions import ConfigurationError, UpstreamError
from .upstream import call_upstream, decode

logger = logging.getLogger(__name__)

API_NAME = "YouTube"

DISCOVER_DEFAULT_RESULTS = 12
DISCOVER_MAX_RESULTS = 20
HOWTO_CATEGORY_ID = "26"  # "Howto & Style", where cooking videos live

# Shared by both searches
BASE_PARAMS: Dict[str, Any] = {
    "part": "snippet",
    "type": "video",
    "order": "relevance",
    "videoDefinition": "high",
    "safeSearch": "strict",
}


def _video_id(item: YouTubeSearchItem) -> str:
    if not item.id.video_id:
        raise UpstreamError("YouTube API returned a result without a video id", 502)
    return item.id.video_id


def _to_video(item: YouTubeSearchItem) -> Video:
    snippet = item.snippet
    if snippet is None or snippet.thumbnails.medium is None:
        raise UpstreamError("YouTube API returned a result without a snippet thumbnail", 502)
    return Video(
        video_id=_video_id(item),
        title=snippet.title,
        thumbnail=snippet.thumbnails.medium.url,
        channel_title=snippet.channel_title,
        description=snippet.description,
    )


class YouTubeVideoSearch:
    """Cooking-video lookups against the YouTube Data API v3 `search` endpoint."""

    def __init__(self, settings: Settings, http: Optional[httpx.Client] = None):
        self._api_key = settings.youtube_api_key
        self._url = settings.youtube_search_url
        self._timeout = settings.search_timeout_s
        self._http = http

    def _search(self, query: str, **params: Any) -> YouTubeSearchResult:
        if not self._api_key:
            logger.error("YOUTUBE_API_KEY not found in environment variables")
            raise ConfigurationError("Server configuration error: YouTube API key not configured")
        data = call_upstream(
            API_NAME,
            "GET",
            self._url,
            timeout=self._timeout,
            http=self._http,
            params={**BASE_PARAMS, **params, "q": query, "key": self._api_key},
        )
        return decode(API_NAME, YouTubeSearchResult, data)

    def search_one(self, query: str) -> Optional[str]:
        """Video id of the most relevant match, or None when nothing matched."""
        logger.info("Searching YouTube for: %s", query)
        result = self._search(query, maxResults=1)
        if not result.items:
            logger.info("No YouTube results for: %s", query)
            return None
        video_id = _video_id(result.items[0])
        logger.info("Found YouTube video: %s", video_id)
        return video_id

    def discover(self, query: str, max_results: int = DISCOVER_DEFAULT_RESULTS) -> List[Video]:
        """Short how-to videos for the discover feed; an empty list is a valid answer."""
        limit = min(max_results, DISCOVER_MAX_RESULTS)
        logger.info("Discover: searching YouTube for: %s (max: %d)", query, limit)
        result = self._search(
            query,
            maxResults=limit,
            videoDuration="short",
            videoCategoryId=HOWTO_CATEGORY_ID,
        )
        videos = [_to_video(item) for item in result.items]
        logger.info("Discover: found %d videos", len(videos))
        return videos
