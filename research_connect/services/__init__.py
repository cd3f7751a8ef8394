"""Services package – one service per backend resource."""

from __future__ import annotations

from research_connect.services.applications import ApplicationService
from research_connect.services.auth import AuthService
from research_connect.services.profile import ProfileService
from research_connect.services.projects import ProjectService
from research_connect.services.roadmap import RoadmapService

__all__ = [
    "ApplicationService",
    "AuthService",
    "ProfileService",
    "ProjectService",
    "RoadmapService",
]
