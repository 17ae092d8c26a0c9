from __future__ import annotations


class ServiceError(RuntimeError):
    """Base class for errors that end up in a ``{success: false}`` envelope."""
    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code

    @property
    def message(self) -> str:
        return str(self)


class InvalidRequest(ServiceError):
    """Malformed caller input."""
    status_code = 400


class ConfigurationError(ServiceError):
    """A server-held credential is missing."""
    status_code = 500


class UpstreamError(ServiceError):
    """Errors from a third-party API (status forwarded when it answered)."""
    status_code = 502


class NetworkError(ServiceError):
    """The client could not reach the proxy at all."""
    status_code = 503


class ProxyError(ServiceError):
    """The proxy answered with ``success: false``."""


class RepoError(ServiceError):
    """Errors from client-side storage (I/O, parse)."""
