from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import httpx
from pydantic import BaseModel, ValidationError

from pantrychef.core.models import UpstreamErrorBody
from .exceptions import UpstreamError

logger = logging.getLogger(__name__)


@contextmanager
def _client(http: Optional[httpx.Client]) -> Iterator[httpx.Client]:
    if http is not None:
        yield http
        return
    with httpx.Client() as c:
        yield c


def _error_message(resp: httpx.Response) -> str:
    """Prefer the upstream's own error message, fall back to the status text."""
    try:
        body = UpstreamErrorBody.model_validate(resp.json())
    except (ValueError, ValidationError):
        body = None
    if body is not None and body.error is not None and body.error.message:
        return body.error.message
    return resp.reason_phrase or f"HTTP {resp.status_code}"


def call_upstream(
    api_name: str,
    method: str,
    url: str,
    *,
    timeout: float,
    http: Optional[httpx.Client] = None,
    **kwargs: Any,
) -> Any:
    """
    Single attempt against a third-party JSON API. Returns the decoded body.

    Every failure becomes an UpstreamError:
    - non-2xx: the upstream status is forwarded
    - timeout: 504
    - any other transport failure or a non-JSON body: 502
    """
    t0 = time.perf_counter()
    try:
        with _client(http) as client:
            resp = client.request(method, url, timeout=timeout, **kwargs)
    except httpx.TimeoutException as e:
        logger.error("%s API timed out after %.1fs", api_name, timeout)
        raise UpstreamError(f"{api_name} API timed out after {timeout:g}s", 504) from e
    except httpx.HTTPError as e:
        logger.error("%s API unreachable: %s", api_name, e)
        raise UpstreamError(f"Could not reach {api_name} API: {e}", 502) from e
    dt_ms = (time.perf_counter() - t0) * 1000.0

    if resp.is_error:
        logger.error("%s API error status=%s body=%s", api_name, resp.status_code, resp.text[:500])
        raise UpstreamError(f"{api_name} API error: {_error_message(resp)}", resp.status_code)

    logger.debug("%s API %s ok in %.0f ms", api_name, method, dt_ms)
    try:
        return resp.json()
    except ValueError as e:
        raise UpstreamError(f"{api_name} API returned a non-JSON body", 502) from e


def decode(api_name: str, model: type[BaseModel], data: Any) -> Any:
    """Validate an upstream body against `model`; shape mismatches are upstream failures."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error("%s API returned an unexpected shape: %s", api_name, e)
        raise UpstreamError(f"{api_name} API returned an unexpected response", 502) from e
