"""Schema package – re-exports all public symbols for convenient imports."""

from __future__ import annotations

from research_connect.schemas.applications import (
    Application,
    ApplicationIn,
    ApplicationStatus,
    InterviewSchedule,
)
from research_connect.schemas.auth import (
    LoginIn,
    RegisterUserIn,
    TokenClaims,
    UserType,
)
from research_connect.schemas.base import RequestModel, ResponseModel, as_payload
from research_connect.schemas.profile import (
    EducationEntry,
    ExperienceEntry,
    ExploreFilters,
    ExploreUser,
    ProjectEntry,
    PublicationEntry,
    StudentProfile,
    UserProfile,
)
from research_connect.schemas.projects import (
    Project,
    ProjectCreate,
    ProjectPage,
    ProjectUpdate,
    WorkingUser,
)
from research_connect.schemas.roadmap import (
    PlacementPreferences,
    ResearchPreferences,
    RoadmapNode,
    RoadmapStructure,
)

# Name used by the onboarding questionnaire.
RoadmapPreferences = ResearchPreferences

__all__ = [
    "Application",
    "ApplicationIn",
    "ApplicationStatus",
    "EducationEntry",
    "ExperienceEntry",
    "ExploreFilters",
    "ExploreUser",
    "InterviewSchedule",
    "LoginIn",
    "PlacementPreferences",
    "Project",
    "ProjectCreate",
    "ProjectEntry",
    "ProjectPage",
    "ProjectUpdate",
    "PublicationEntry",
    "RegisterUserIn",
    "RequestModel",
    "ResearchPreferences",
    "ResponseModel",
    "RoadmapNode",
    "RoadmapPreferences",
    "RoadmapStructure",
    "StudentProfile",
    "TokenClaims",
    "UserProfile",
    "UserType",
    "WorkingUser",
    "as_payload",
]
