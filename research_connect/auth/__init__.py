"""Auth package – token inspection and credential storage."""

from __future__ import annotations

from research_connect.auth.storage import (
    CredentialStore,
    FileCredentialStore,
    MemoryCredentialStore,
)
from research_connect.auth.tokens import (
    DEFAULT_LEEWAY_SECONDS,
    decode_claims,
    is_authenticated,
    is_token_expired,
    require_user_type,
)

__all__ = [
    "DEFAULT_LEEWAY_SECONDS",
    "CredentialStore",
    "FileCredentialStore",
    "MemoryCredentialStore",
    "decode_claims",
    "is_authenticated",
    "is_token_expired",
    "require_user_type",
]
