"""Project payloads."""

from __future__ import annotations

from pydantic import Field, field_validator

from research_connect.schemas.base import RequestModel, ResponseModel

# ── Request models ──────────────────────────────────────────────────────────


class ProjectCreate(RequestModel):
    name: str
    sdesc: str
    ldesc: str
    is_active: bool = Field(default=True, alias="isActive")
    tags: list[str] | None = None
    working_users: list[str] | None = Field(default=None, alias="workingUsers")
    field_of_study: str | None = Field(default=None, alias="fieldOfStudy")
    specialization: str | None = None
    duration: str | None = None
    position_type: list[str] | None = Field(default=None, alias="positionType")
    deadline: str | None = None


class ProjectUpdate(RequestModel):
    """Partial update; only the fields that are set are sent."""

    name: str | None = None
    sdesc: str | None = None
    ldesc: str | None = None
    is_active: bool | None = Field(default=None, alias="isActive")
    tags: list[str] | None = None
    working_users: list[str] | None = Field(default=None, alias="workingUsers")
    field_of_study: str | None = Field(default=None, alias="fieldOfStudy")
    specialization: str | None = None
    duration: str | None = None
    position_type: list[str] | None = Field(default=None, alias="positionType")
    deadline: str | None = None


# ── Response models ─────────────────────────────────────────────────────────


class ProjectOwner(ResponseModel):
    uid: str | None = None
    name: str | None = None
    email: str | None = None
    type: str | None = None


class Project(ResponseModel):
    id: int | None = Field(default=None, alias="ID")
    pid: str = ""
    name: str = ""
    sdesc: str = ""
    ldesc: str = ""
    tags: list[str] = Field(default_factory=list)
    is_active: bool = Field(default=False, alias="isActive")
    uid: str | None = None
    user: ProjectOwner | None = None
    field_of_study: str | None = Field(default=None, alias="fieldOfStudy")
    specialization: str | None = None
    duration: str | None = None
    position_type: list[str] | None = Field(default=None, alias="positionType")
    deadline: str | None = None

    @field_validator("is_active", mode="before")
    @classmethod
    def _coerce_active(cls, value: object) -> bool:
        # Older rows store the flag as the strings "true" / "false".
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return bool(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _none_tags(cls, value: object) -> object:
        return [] if value is None else value


class ProjectPage(ResponseModel):
    projects: list[Project] = Field(default_factory=list)
    count: int = 0
    total: int = 0
    page: int = 1
    page_size: int = Field(default=20, alias="pageSize")
    total_pages: int = Field(default=0, alias="totalPages")

    @field_validator("projects", mode="before")
    @classmethod
    def _none_projects(cls, value: object) -> object:
        return [] if value is None else value

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


class WorkingUser(ResponseModel):
    uid: str
    name: str | None = None
    email: str | None = None
    type: str | None = None
