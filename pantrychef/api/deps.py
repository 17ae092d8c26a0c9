from __future__ import annotations

from fastapi import Depends

from pantrychef.config import Settings
from pantrychef.services.gemini import GeminiRecipeGenerator
from pantrychef.services.youtube import YouTubeVideoSearch

# ---- DI helpers --------------------------------------------------------------
# Settings are rebuilt per request so a changed environment is picked up.

def get_settings() -> Settings:
    return Settings()

def get_generator(settings: Settings = Depends(get_settings)) -> GeminiRecipeGenerator:
    return GeminiRecipeGenerator(settings)

def get_video_search(settings: Settings = Depends(get_settings)) -> YouTubeVideoSearch:
    return YouTubeVideoSearch(settings)
