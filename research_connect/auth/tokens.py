"""Local bearer-token inspection.

Nothing here talks to the network: the token's claims are decoded with
PyJWT *without* signature verification (the client never holds the signing
secret) and the ``exp`` claim is compared against the local clock.
"""

from __future__ import annotations

import logging
import time

import jwt

from research_connect.api.errors import PermissionDeniedError
from research_connect.auth.storage import CredentialStore
from research_connect.schemas.auth import TokenClaims, UserType

logger = logging.getLogger(__name__)

# Refresh this many seconds before the real expiry.
DEFAULT_LEEWAY_SECONDS = 30


def decode_claims(token: str) -> TokenClaims:
    """
    Decode a JWT's payload into :class:`TokenClaims`.

    Raises:
        jwt.PyJWTError: If the token is not a well-formed JWT
    """
    payload = jwt.decode(token, options={"verify_signature": False})
    return TokenClaims.model_validate(payload)


def is_token_expired(
    token: str | None,
    leeway: float = DEFAULT_LEEWAY_SECONDS,
    now: float | None = None,
) -> bool:
    """
    Return True if ``token`` is missing, undecodable, or expires within ``leeway``.

    A token without an ``exp`` claim never expires locally; the backend
    remains the authority and will answer 401 if it disagrees.
    """
    if not token:
        return True

    try:
        claims = decode_claims(token)
    except jwt.PyJWTError as exc:
        logger.error("Error decoding token: %s", exc)
        return True

    if claims.exp is None:
        return False

    current = time.time() if now is None else now
    return claims.exp < current + leeway


def is_authenticated(store: CredentialStore, leeway: float = DEFAULT_LEEWAY_SECONDS) -> bool:
    """True if ``store`` holds a token that has not expired locally."""
    return not is_token_expired(store.get_token(), leeway)


def require_user_type(claims: TokenClaims, required: UserType | str) -> TokenClaims:
    """Raise :class:`PermissionDeniedError` unless ``claims`` belong to ``required``."""
    required = UserType(required)
    if claims.type != required:
        raise PermissionDeniedError(
            f"This operation requires a '{required.value}' account, "
            f"signed in as '{claims.type.value if claims.type else 'unknown'}'"
        )
    return claims
