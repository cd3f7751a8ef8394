"""Authentication, password reset and e-mail verification."""

from __future__ import annotations

import logging
from typing import Any

from research_connect.api.errors import ResearchConnectError
from research_connect.auth.tokens import decode_claims, is_authenticated, is_token_expired
from research_connect.schemas import LoginIn, RegisterUserIn, TokenClaims, as_payload
from research_connect.schemas.auth import ResetPasswordIn, VerifyCodeIn
from research_connect.services.base import BaseService

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    """``/auth`` endpoints plus local session helpers."""

    async def register(self, data: RegisterUserIn | dict[str, Any]) -> Any:
        return await self._client.post(
            "/auth/signup", json=as_payload(data), action="registering user"
        )

    async def login(self, email: str, password: str) -> str:
        """Sign in and persist the returned token in the credential store."""
        body = await self._client.post(
            "/auth/login",
            json=LoginIn(email=email, password=password).to_payload(),
            action="logging in user",
        )
        token = (body or {}).get("token")
        if not token:
            raise ResearchConnectError("Login response did not contain a token")
        self._client.store.set_token(token)
        logger.info("Signed in as %s", email)
        return token

    async def refresh(self) -> str:
        """Force a refresh through the shared guard."""
        return await self._client.guard.refresh()

    async def me(self) -> Any:
        return await self._client.get("/auth/me", action="fetching current user")

    def logout(self) -> None:
        self._client.store.clear()
        logger.info("Signed out")

    def current_user(self) -> TokenClaims | None:
        """Claims of the stored token, or None if there is no usable session."""
        token = self._client.store.get_token()
        if is_token_expired(token, self._client.leeway):
            return None
        return decode_claims(token)

    def is_authenticated(self) -> bool:
        return is_authenticated(self._client.store, self._client.leeway)

    # ── Password reset ─────────────────────────────────────────────────────

    async def forgot_password(self, email: str) -> Any:
        return await self._client.post(
            "/auth/forgot-password", json={"email": email}, action="requesting password reset"
        )

    async def verify_reset_token(self, token: str) -> Any:
        return await self._client.post(
            "/auth/verify-reset-token", json={"token": token}, action="verifying reset token"
        )

    async def reset_password(self, token: str, new_password: str) -> Any:
        payload = ResetPasswordIn(token=token, new_password=new_password).to_payload()
        return await self._client.post(
            "/auth/reset-password", json=payload, action="resetting password"
        )

    # ── E-mail verification ────────────────────────────────────────────────

    async def send_verification_code(self, email: str) -> Any:
        return await self._client.post(
            "/auth/send-verification-code",
            json={"email": email},
            action="sending verification code",
        )

    async def verify_code(self, email: str, code: str) -> Any:
        payload = VerifyCodeIn(email=email, code=code).to_payload()
        return await self._client.post("/auth/verify-code", json=payload, action="verifying code")

    async def verify_email(self, token: str) -> Any:
        return await self._client.post(
            "/auth/verify-email", json={"token": token}, action="verifying email"
        )

    async def resend_verification(self, email: str) -> Any:
        return await self._client.post(
            "/auth/resend-verification", json={"email": email}, action="resending verification"
        )
