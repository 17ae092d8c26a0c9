from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends

from pantrychef.api.deps import get_generator
from pantrychef.core.models import ErrorResponse, GenerateRequest, GenerateResponse
from pantrychef.services.gemini import GeminiRecipeGenerator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recipes"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "ingredients missing or not an array"},
    500: {"model": ErrorResponse, "description": "GEMINI_API_KEY not configured"},
    502: {"model": ErrorResponse, "description": "Gemini failed or answered without a recipe"},
}

# ---- Routes ------------------------------------------------------------------

@router.post("/api/generate", response_model=GenerateResponse, responses=ERROR_RESPONSES)
def generate_recipe(
    request: GenerateRequest,
    generator: GeminiRecipeGenerator = Depends(get_generator),
):
    t0 = time.perf_counter()
    recipe = generator.generate(request.ingredients)
    dt_ms = (time.perf_counter() - t0) * 1000.0
    logger.info(
        "generate ok: %d ingredients, model=%s, %.0f ms",
        len(request.ingredients), generator.model, dt_ms,
    )
    return GenerateResponse(recipe=recipe)
