"""API package – re-exports the HTTP client, refresh guard and errors."""

from __future__ import annotations

from research_connect.api.client import ApiClient, is_auth_endpoint
from research_connect.api.errors import (
    ApiError,
    PermissionDeniedError,
    ResearchConnectError,
    TokenRefreshError,
    TransportError,
)
from research_connect.api.refresh import RefreshGuard

__all__ = [
    "ApiClient",
    "ApiError",
    "PermissionDeniedError",
    "RefreshGuard",
    "ResearchConnectError",
    "TokenRefreshError",
    "TransportError",
    "is_auth_endpoint",
]
