"""Top-level research_connect package.

Sub-packages
------------
research_connect.api
    Async HTTP client (httpx) with the single-flight token-refresh guard
research_connect.auth
    Token claim decoding (PyJWT) and credential storage
research_connect.schemas
    Pydantic view-models mirroring the REST payloads
research_connect.services
    One service per backend resource (auth, projects, applications, ...)
research_connect.cli
    ``research-connect`` command-line front end (click + rich)
"""

from __future__ import annotations

from research_connect.client import ResearchConnect

__version__ = "0.1.0"

__all__ = ["ResearchConnect", "__version__"]
