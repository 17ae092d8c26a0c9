from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pantrychef.api.v1.generate import router as generate_router
from pantrychef.api.v1.youtube import router as youtube_router
from pantrychef.config import Settings
from pantrychef.core.models import ErrorResponse, HealthResponse
from pantrychef.services.exceptions import InvalidRequest, ServiceError

logger = logging.getLogger("pantrychef")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Per-field messages for bodies that fail validation
FIELD_MESSAGES = {
    "ingredients": "ingredients array is required",
    "query": "search query is required",
    "maxResults": "maxResults must be a non-negative integer",
}


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # httpx logs full request URLs at INFO, and the YouTube key travels in the query string
    logging.getLogger("httpx").setLevel(logging.WARNING)


def invalid_request_message(errors: List[Dict[str, Any]]) -> str:
    for err in errors:
        loc = err.get("loc") or ()
        if len(loc) > 1 and loc[0] == "body" and loc[1] in FIELD_MESSAGES:
            return f"Invalid request: {FIELD_MESSAGES[loc[1]]}"
    if errors:
        return f"Invalid request: {errors[0].get('msg', 'malformed body')}"
    return "Invalid request"


def _envelope(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()
    logger.info("pantrychef server ready on port %d", settings.port)
    logger.info("CORS enabled for: %s", ", ".join(settings.cors_allow_origins))
    logger.info("Gemini API key: %s", "configured" if settings.gemini_api_key else "NOT FOUND - add GEMINI_API_KEY to .env")
    logger.info("YouTube API key: %s", "configured" if settings.youtube_api_key else "NOT FOUND - add YOUTUBE_API_KEY to .env")
    yield


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level)
    app = FastAPI(title="pantrychef API", version="1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(generate_router)
    app.include_router(youtube_router)

    # ---- Error envelope -------------------------------------------------------

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return _envelope(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = invalid_request_message(list(exc.errors()))
        logger.info("%s %s rejected: %s", request.method, request.url.path, message)
        return _envelope(InvalidRequest.status_code, message)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _envelope(500, f"Internal server error: {exc}")

    # ---- Probes ---------------------------------------------------------------

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(message="pantrychef server is running")

    @app.get("/readyz")
    def readyz():
        return {"status": "ready"}

    if settings.telemetry_enabled:
        from pantrychef.telemetry import setup_telemetry  # opentelemetry is only needed when tracing
        setup_telemetry(app, settings)

    return app


app = create_app()


def main() -> None:
    import uvicorn

    settings = Settings()
    uvicorn.run("pantrychef.main:app", host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
