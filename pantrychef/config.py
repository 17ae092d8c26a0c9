from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional, List
from dotenv import load_dotenv
load_dotenv()  # populates os.environ from .env


class Settings(BaseSettings):
    # Each field reads the upper-cased env var of the same name (GEMINI_API_KEY, PORT, ...)
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Recipe generation (Gemini REST API)
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1"
    generate_timeout_s: float = Field(30.0, gt=0)

    # Video search (YouTube Data API v3)
    youtube_api_key: Optional[str] = None
    youtube_search_url: str = "https://www.googleapis.com/youtube/v3/search"
    search_timeout_s: float = Field(10.0, gt=0)

    # Server
    port: int = 3001
    log_level: str = "INFO"
    # Only the Vite dev server talks to us
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])

    # Tracing (off unless an OTLP collector is running)
    telemetry_enabled: bool = False
    otlp_endpoint: str = "http://127.0.0.1:6006/v1/traces"

    # Client side
    proxy_base_url: str = "http://localhost:3001"
