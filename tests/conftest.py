"""Shared pytest fixtures for the test suite.

Import any of these in a test file by simply declaring the fixture name as a
parameter; pytest discovers them automatically from this conftest.py.

Fixture overview
----------------
backend_app  : fresh in-process fake backend (see fake_backend.py)
backend      : its BackendState, for seeding data and inspecting calls
transport    : httpx ASGI transport wired to backend_app
make_client  : factory for ResearchConnect clients on that transport
student      : the seeded student account
professor    : the seeded faculty account

The tests drive coroutines with ``asyncio.run`` so no pytest plugin is
needed; build clients *inside* the coroutine with ``make_client``.
"""

from __future__ import annotations

import httpx
import pytest
from fake_backend import BASE_URL, BackendState, create_app
from fastapi import FastAPI

from research_connect.auth.storage import CredentialStore, MemoryCredentialStore
from research_connect.client import ResearchConnect

# ── Backend ──────────────────────────────────────────────────────────────────


@pytest.fixture
def backend_app() -> FastAPI:
    return create_app()


@pytest.fixture
def backend(backend_app: FastAPI) -> BackendState:
    return backend_app.state.backend


@pytest.fixture
def transport(backend_app: FastAPI) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=backend_app)


@pytest.fixture
def student(backend: BackendState) -> dict:
    return backend.users["ada@uni.edu"]


@pytest.fixture
def professor(backend: BackendState) -> dict:
    return backend.users["grace@uni.edu"]


# ── Client ───────────────────────────────────────────────────────────────────


@pytest.fixture
def make_client(transport: httpx.ASGITransport):
    """
    Return a factory building a client against the fake backend.

    Keyword arguments are passed through to :class:`ResearchConnect`; the
    credential store defaults to a fresh in-memory one.
    """

    def _make(store: CredentialStore | None = None, **kwargs) -> ResearchConnect:
        return ResearchConnect(
            BASE_URL,
            store=store if store is not None else MemoryCredentialStore(),
            transport=transport,
            **kwargs,
        )

    return _make
