"""Custom exceptions raised by the KeyEnv client."""

from __future__ import annotations

from typing import Any


class KeyEnvError(Exception):
    """Base error raised for any KeyEnv related issue."""


class KeyEnvConfigError(KeyEnvError, ValueError):
    """Raised when the client is misconfigured or missing credentials."""


class KeyEnvAPIError(KeyEnvError):
    """Raised for every failed request, whether or not the API was reached.

    ``status_code`` is ``0`` when the request never reached the server and
    ``408`` when the transport timed out.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details: dict[str, Any] = dict(details or {})

    def is_not_found(self) -> bool:
        return self.status_code == 404

    def is_unauthorized(self) -> bool:
        return self.status_code == 401

    def is_timeout(self) -> bool:
        return self.status_code == 408

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"status_code={self.status_code}, error_code={self.error_code!r})"
        )


__all__ = [
    "KeyEnvAPIError",
    "KeyEnvConfigError",
    "KeyEnvError",
]
