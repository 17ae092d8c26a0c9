# pantrychef/core/models.py
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(populate_by_name=True)


# ---------- Requests ----------

class GenerateRequest(WireModel):
    ingredients: List[str] = Field(..., description="Ingredient names, in display order")


class VideoSearchRequest(WireModel):
    query: str = Field(..., min_length=1, description="Free-text search, e.g. 'tomato soup recipe'")

    @field_validator("query")
    def query_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("query cannot be blank")
        return v


class DiscoverRequest(VideoSearchRequest):
    max_results: int = Field(12, ge=0, alias="maxResults")


# ---------- Responses ----------

class GenerateResponse(WireModel):
    success: Literal[True] = True
    recipe: str


class VideoSearchResponse(WireModel):
    success: bool
    video_id: Optional[str] = Field(None, alias="videoId")
    error: Optional[str] = None


class Video(WireModel):
    video_id: str = Field(..., alias="videoId")
    title: str
    thumbnail: str
    channel_title: str = Field(..., alias="channelTitle")
    description: str = ""


class DiscoverResponse(WireModel):
    success: Literal[True] = True
    videos: List[Video] = Field(default_factory=list)


class ErrorResponse(WireModel):
    success: Literal[False] = False
    error: str


class HealthResponse(WireModel):
    status: Literal["ok"] = "ok"
    message: str


# ---------- Upstream payloads ----------
# Only the fields we read are declared; everything else is ignored.

class UpstreamErrorDetail(BaseModel):
    message: Optional[str] = None


class UpstreamErrorBody(BaseModel):
    """Google APIs share this shape: {"error": {"code": .., "message": ..}}"""
    error: Optional[UpstreamErrorDetail] = None


class GeminiPart(BaseModel):
    text: Optional[str] = None


class GeminiContent(BaseModel):
    parts: List[GeminiPart] = Field(default_factory=list)


class GeminiCandidate(BaseModel):
    content: Optional[GeminiContent] = None


class GeminiResponse(BaseModel):
    candidates: List[GeminiCandidate] = Field(default_factory=list)

    def first_text(self) -> Optional[str]:
        """Text of the first part of the first candidate, if there is one."""
        if not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None or not content.parts:
            return None
        text = content.parts[0].text
        return text if text and text.strip() else None


class YouTubeItemId(BaseModel):
    video_id: Optional[str] = Field(None, alias="videoId")


class YouTubeThumbnail(BaseModel):
    url: str


class YouTubeThumbnails(BaseModel):
    medium: Optional[YouTubeThumbnail] = None


class YouTubeSnippet(BaseModel):
    title: str = ""
    channel_title: str = Field("", alias="channelTitle")
    description: str = ""
    thumbnails: YouTubeThumbnails = Field(default_factory=YouTubeThumbnails)


class YouTubeSearchItem(BaseModel):
    id: YouTubeItemId
    snippet: Optional[YouTubeSnippet] = None


class YouTubeSearchResult(BaseModel):
    items: List[YouTubeSearchItem] = Field(default_factory=list)
