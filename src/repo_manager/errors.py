"""Error taxonomy for provider calls and input loading.

Every error raised by a provider or by the setup orchestrator derives from
`ProviderError`, so the calling layer can catch one type per command.
"""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for all repo-manager errors."""


class ApiError(ProviderError):
    """Raised when the remote API answers with a non-2xx status or an unusable payload."""

    def __init__(self, operation: str, *, status: int | None = None, body: str = "") -> None:
        self.operation = operation
        self.status = status
        self.body = body
        if status is None:
            message = f"Failed to {operation}: {body}"
        else:
            message = f"Failed to {operation}. Status: {status}, Body: {body}"
        super().__init__(message)


class NetworkError(ProviderError):
    """Raised when the request never produced an HTTP response."""


class NotFoundError(ProviderError):
    """Raised when a local lookup fails (e.g. an unknown milestone version)."""


class ConfigError(ProviderError):
    """Raised for bad configuration: credentials, repository, unreadable files."""


class InvalidInputError(ProviderError):
    """Raised when an input document is not valid JSON or fails validation."""


__all__ = [
    "ApiError",
    "ConfigError",
    "InvalidInputError",
    "NetworkError",
    "NotFoundError",
    "ProviderError",
]
