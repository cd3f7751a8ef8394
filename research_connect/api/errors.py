"""Exception hierarchy raised by the API client."""

from __future__ import annotations

from typing import Any


class ResearchConnectError(Exception):
    """Base class for every error raised by this package."""


class ApiError(ResearchConnectError):
    """The backend answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str, payload: Any = None) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.payload = payload

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class TransportError(ResearchConnectError):
    """The request never produced an HTTP response (DNS, connect, timeout)."""


class TokenRefreshError(ResearchConnectError):
    """Refreshing the bearer token failed; the session is over."""


class PermissionDeniedError(ResearchConnectError):
    """The signed-in user is not of the type an operation requires."""
