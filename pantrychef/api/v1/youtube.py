from __future__ import annotations

from fastapi import APIRouter, Depends

from pantrychef.api.deps import get_video_search
from pantrychef.core.models import (
    DiscoverRequest,
    DiscoverResponse,
    ErrorResponse,
    VideoSearchRequest,
    VideoSearchResponse,
)
from pantrychef.services.youtube import YouTubeVideoSearch

router = APIRouter(tags=["videos"])

NO_RESULTS = "No cooking videos found for this recipe"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "query missing or not a string"},
    500: {"model": ErrorResponse, "description": "YOUTUBE_API_KEY not configured"},
}

# ---- Routes ------------------------------------------------------------------

@router.post(
    "/api/youtube-search",
    response_model=VideoSearchResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def youtube_search(
    request: VideoSearchRequest,
    search: YouTubeVideoSearch = Depends(get_video_search),
):
    video_id = search.search_one(request.query)
    if video_id is None:
        # Nothing matched: a valid answer, not an HTTP error
        return VideoSearchResponse(success=False, error=NO_RESULTS)
    return VideoSearchResponse(success=True, video_id=video_id)


@router.post("/api/youtube-discover", response_model=DiscoverResponse, responses=ERROR_RESPONSES)
def youtube_discover(
    request: DiscoverRequest,
    search: YouTubeVideoSearch = Depends(get_video_search),
):
    return DiscoverResponse(videos=search.discover(request.query, request.max_results))
