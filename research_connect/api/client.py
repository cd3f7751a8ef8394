"""Async HTTP client for the ResearchConnect REST API.

Every request goes through :meth:`ApiClient.request`, which

1. refreshes the bearer token up front when it is already expired locally,
2. attaches ``Authorization: Bearer <token>``,
3. on a 401 from a non-auth endpoint, refreshes once through the shared
   :class:`~research_connect.api.refresh.RefreshGuard` and replays the
   request exactly once,
4. turns non-2xx responses into :class:`ApiError`, logs the failure and
   re-raises it to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx

from research_connect.api.errors import (
    ApiError,
    ResearchConnectError,
    TokenRefreshError,
    TransportError,
)
from research_connect.api.refresh import DEFAULT_LOGIN_PATH, RefreshGuard, SessionExpiredHook
from research_connect.auth.storage import CredentialStore, MemoryCredentialStore
from research_connect.auth.tokens import DEFAULT_LEEWAY_SECONDS, is_token_expired
from research_connect.schemas.auth import TokenOut

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080/v1"

# Requests to these never trigger a refresh or a replay.
AUTH_ENDPOINTS = ("/auth/login", "/auth/register", "/auth/signup", "/auth/refresh")


def is_auth_endpoint(path: str) -> bool:
    return any(marker in path for marker in AUTH_ENDPOINTS)


class RequestState(str, Enum):
    INITIAL = "initial"
    REFRESHING = "refreshing"
    ATTACHED = "attached"
    SENT = "sent"
    RETRY_QUEUED = "retry_queued"
    RETRIED = "retried"
    SETTLED = "settled"
    REJECTED = "rejected"


@dataclass
class RequestAttempt:
    """One logical request, possibly sent twice."""

    method: str
    path: str
    json: Any = None
    params: dict[str, Any] | None = None
    token: str | None = None
    retried: bool = False
    state: RequestState = RequestState.INITIAL
    history: list[RequestState] = field(default_factory=lambda: [RequestState.INITIAL])

    def advance(self, state: RequestState) -> None:
        self.state = state
        self.history.append(state)
        logger.debug("%s %s -> %s", self.method, self.path, state.value)


def _error_from_response(response: httpx.Response) -> ApiError:
    try:
        payload: Any = response.json()
    except ValueError:
        payload = response.text

    message = ""
    if isinstance(payload, dict):
        message = str(payload.get("error") or payload.get("message") or "")
    elif isinstance(payload, str):
        message = payload.strip()
    return ApiError(response.status_code, message or response.reason_phrase, payload)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ApiClient:
    """
    Thin wrapper around :class:`httpx.AsyncClient` with token-refresh handling.

    Args:
        base_url: API root, e.g. ``http://localhost:8080/v1``
        store: Credential store; an in-memory one is created if omitted
        timeout: Request timeout in seconds (httpx default when None)
        leeway: Seconds before ``exp`` at which a token counts as expired
        login_path: Login entry point reported when the session expires
        on_session_expired: Callback fired once per failed refresh
        transport: Custom httpx transport (tests mount an ASGI app here)
        http_client: Pre-built client; the caller keeps ownership
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        store: CredentialStore | None = None,
        timeout: float | None = None,
        leeway: float = DEFAULT_LEEWAY_SECONDS,
        login_path: str = DEFAULT_LOGIN_PATH,
        on_session_expired: SessionExpiredHook | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.store = store if store is not None else MemoryCredentialStore()
        self.leeway = leeway
        self._owns_http = http_client is None
        if http_client is None:
            options: dict[str, Any] = {
                "base_url": base_url.rstrip("/"),
                "headers": {"Accept": "application/json"},
            }
            if timeout is not None:
                options["timeout"] = timeout
            if transport is not None:
                options["transport"] = transport
            http_client = httpx.AsyncClient(**options)
        self._http = http_client
        self.guard = RefreshGuard(
            self.store,
            self.refresh_token,
            on_session_expired=on_session_expired,
            login_path=login_path,
        )

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    # ── Public request API ─────────────────────────────────────────────────

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        action: str | None = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            ApiError: Non-2xx response (after at most one refresh + replay)
            TransportError: No response was received
            TokenRefreshError: The token could not be refreshed
        """
        attempt = RequestAttempt(method.upper(), path, json=json, params=params)
        action = action or f"calling {attempt.method} {path}"
        try:
            response = await self._dispatch(attempt)
        except ResearchConnectError as exc:
            attempt.advance(RequestState.REJECTED)
            logger.error("Error %s: %s", action, exc)
            raise
        attempt.advance(RequestState.SETTLED)
        return _decode_body(response)

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def refresh_token(self, current: str) -> str:
        """Exchange ``current`` for a new token via ``POST /auth/refresh``.

        Sent straight through httpx so it never re-enters the guard.
        """
        try:
            response = await self._http.post(
                "/auth/refresh",
                json={"token": current},
                headers={"Authorization": f"Bearer {current}"},
            )
        except httpx.HTTPError as exc:
            logger.error("Error refreshing token: %s", exc)
            raise TransportError(str(exc)) from exc

        if response.is_error:
            error = _error_from_response(response)
            logger.error("Error refreshing token: %s", error)
            raise error

        body = _decode_body(response)
        if not isinstance(body, dict) or not body.get("token"):
            raise TokenRefreshError("Refresh response did not contain a token")
        return TokenOut.model_validate(body).token

    # ── Internals ──────────────────────────────────────────────────────────

    async def _dispatch(self, attempt: RequestAttempt) -> httpx.Response:
        guarded = not is_auth_endpoint(attempt.path)

        token = self.store.get_token()
        if token and guarded and is_token_expired(token, self.leeway):
            attempt.advance(RequestState.REFRESHING)
            token = await self.guard.refresh(stale_token=token)
        attempt.token = token
        attempt.advance(RequestState.ATTACHED)

        response = await self._send(attempt)

        if response.status_code == 401 and guarded and not attempt.retried:
            attempt.retried = True
            attempt.advance(
                RequestState.RETRY_QUEUED if self.guard.is_refreshing else RequestState.REFRESHING
            )
            attempt.token = await self.guard.refresh(stale_token=attempt.token)
            attempt.advance(RequestState.RETRIED)
            response = await self._send(attempt)

        if response.is_error:
            raise _error_from_response(response)
        return response

    async def _send(self, attempt: RequestAttempt) -> httpx.Response:
        headers = {}
        if attempt.token:
            headers["Authorization"] = f"Bearer {attempt.token}"
        try:
            response = await self._http.request(
                attempt.method,
                attempt.path,
                json=attempt.json,
                params=attempt.params,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            raise TransportError(str(exc)) from exc
        attempt.advance(RequestState.SENT)
        return response
