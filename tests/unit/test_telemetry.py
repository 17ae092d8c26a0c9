# tests/unit/test_telemetry.py
from fastapi import FastAPI
from opentelemetry.sdk.trace import TracerProvider

from pantrychef.config import Settings
from pantrychef.telemetry import setup_telemetry


def test_setup_telemetry_instruments_app():
    app = FastAPI()
    provider = setup_telemetry(app, Settings(otlp_endpoint="http://127.0.0.1:9/v1/traces"))
    try:
        assert isinstance(provider, TracerProvider)
        assert getattr(app, "_is_instrumented_by_opentelemetry", False) is True
    finally:
        provider.shutdown()


def test_telemetry_is_off_by_default(monkeypatch):
    monkeypatch.delenv("TELEMETRY_ENABLED", raising=False)
    assert Settings().telemetry_enabled is False
