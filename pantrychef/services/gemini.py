from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from pantrychef.config import Settings
from pantrychef.core.models import GeminiResponse
from .exceptions import ConfigurationError, UpstreamError
from .upstream import call_upstream, decode

logger = logging.getLogger(__name__)

API_NAME = "Gemini"

PROMPT_TEMPLATE = (
    "You are a helpful chef assistant. A user has these ingredients: {ingredients}.\n\n"
    "Create a complete, delicious recipe using most or all of these ingredients. "
    "If the ingredients are limited or unusual, be creative and suggest reasonable "
    "additions or substitutions.\n\n"
    "Please provide:\n"
    "1. A catchy recipe title\n"
    "2. A complete ingredients list (include the user's ingredients plus any additions)\n"
    "3. Clear, step-by-step cooking instructions\n"
    "4. Estimated cooking time and servings\n\n"
    "Keep the recipe practical and easy to follow for home cooks."
)


def build_prompt(ingredients: List[str]) -> str:
    return PROMPT_TEMPLATE.format(ingredients=", ".join(ingredients))


class GeminiRecipeGenerator:
    """
    Turns an ingredient list into recipe text via Gemini `generateContent`.
    One attempt per call; failures surface as ConfigurationError / UpstreamError.
    """

    def __init__(self, settings: Settings, http: Optional[httpx.Client] = None):
        self._api_key = settings.gemini_api_key
        self._model = settings.gemini_model
        self._endpoint = f"{settings.gemini_base_url.rstrip('/')}/models/{self._model}:generateContent"
        self._timeout = settings.generate_timeout_s
        self._http = http

    @property
    def model(self) -> str:
        return self._model

    def generate(self, ingredients: List[str]) -> str:
        if not self._api_key:
            logger.error("GEMINI_API_KEY not found in environment variables")
            raise ConfigurationError("Server configuration error: API key not configured")

        logger.info("Generating recipe for ingredients: %s", ", ".join(ingredients))
        data = call_upstream(
            API_NAME,
            "POST",
            self._endpoint,
            timeout=self._timeout,
            http=self._http,
            headers={"x-goog-api-key": self._api_key},
            json={"contents": [{"parts": [{"text": build_prompt(ingredients)}]}]},
        )
        recipe = decode(API_NAME, GeminiResponse, data).first_text()
        if recipe is None:
            # e.g. blocked by safety filters: candidates missing or without text
            logger.error("Gemini API returned no recipe text")
            raise UpstreamError("Gemini API returned no recipe text", 502)

        logger.info("Recipe generated successfully (%d chars)", len(recipe))
        return recipe
