"""High-level ResearchConnect client.

Bundles one :class:`~research_connect.api.client.ApiClient` with a service
per backend resource::

    async with ResearchConnect.from_config(load_config()) as rc:
        await rc.auth.login("ada@uni.edu", "secret")
        page = await rc.projects.list_for_student(page=1)
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from research_connect.api.client import DEFAULT_BASE_URL, ApiClient
from research_connect.api.refresh import DEFAULT_LOGIN_PATH, SessionExpiredHook
from research_connect.auth.storage import CredentialStore, FileCredentialStore
from research_connect.auth.tokens import DEFAULT_LEEWAY_SECONDS
from research_connect.services import (
    ApplicationService,
    AuthService,
    ProfileService,
    ProjectService,
    RoadmapService,
)

logger = logging.getLogger(__name__)


class ResearchConnect:
    """Entry point for library users and the CLI."""

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
    ) -> None:
        self.api = ApiClient(
            base_url,
            store=store,
            timeout=timeout,
            leeway=leeway,
            login_path=login_path,
            on_session_expired=on_session_expired,
            transport=transport,
        )
        self.auth = AuthService(self.api)
        self.projects = ProjectService(self.api)
        self.applications = ApplicationService(self.api)
        self.profile = ProfileService(self.api)
        self.roadmap = RoadmapService(self.api)

    @classmethod
    def from_config(
        cls,
        config: dict[str, Any],
        *,
        store: CredentialStore | None = None,
        on_session_expired: SessionExpiredHook | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ResearchConnect:
        """Build a client from a :func:`~research_connect.utils.config.load_config` dict."""
        api_cfg = config.get("api", {})
        auth_cfg = config.get("auth", {})
        if store is None:
            store = FileCredentialStore(
                auth_cfg.get("credentials_file", "~/.research_connect/credentials.json")
            )
        logger.debug("Using backend %s", api_cfg.get("base_url", DEFAULT_BASE_URL))
        return cls(
            api_cfg.get("base_url", DEFAULT_BASE_URL),
            store=store,
            timeout=api_cfg.get("timeout"),
            leeway=auth_cfg.get("expiry_leeway_seconds", DEFAULT_LEEWAY_SECONDS),
            login_path=auth_cfg.get("login_path", DEFAULT_LOGIN_PATH),
            on_session_expired=on_session_expired,
            transport=transport,
        )

    async def __aenter__(self) -> ResearchConnect:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.api.aclose()
