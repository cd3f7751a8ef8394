"""Student profile / CV payloads and public profile views."""

from __future__ import annotations

from pydantic import Field

from research_connect.schemas.base import RequestModel, ResponseModel

# ── CV sections ─────────────────────────────────────────────────────────────


class EducationEntry(RequestModel):
    institution: str
    degree: str
    field: str
    start_date: str = Field(alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    current: bool | None = None
    description: str | None = None


class ExperienceEntry(RequestModel):
    title: str
    company: str
    location: str | None = None
    start_date: str = Field(alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    current: bool | None = None
    description: str | None = None


class PublicationEntry(RequestModel):
    title: str
    authors: str
    journal: str | None = None
    date: str | None = None
    link: str | None = None


class ProjectEntry(RequestModel):
    title: str
    description: str
    technologies: list[str] | None = None
    link: str | None = None


# ── Profile ─────────────────────────────────────────────────────────────────


class StudentProfile(RequestModel):
    uid: str | None = None
    institution: str | None = None
    degree: str | None = None
    location: str | None = None
    dates: str | None = None
    work_ex: str | None = Field(default=None, alias="workEx")
    projects: list[str] | None = None
    platform_projects: list[int] | None = Field(default=None, alias="platformProjects")
    skills: list[str] | None = None
    activities: list[str] | None = None
    resume_link: str | None = Field(default=None, alias="resumeLink")
    publications_link: str | None = Field(default=None, alias="publicationsLink")
    research_interest: str | None = Field(default=None, alias="researchInterest")
    intention: str | None = None
    education_details: list[EducationEntry] | None = Field(default=None, alias="educationDetails")
    experience_details: list[ExperienceEntry] | None = Field(
        default=None, alias="experienceDetails"
    )
    publications_list: list[PublicationEntry] | None = Field(
        default=None, alias="publicationsList"
    )
    projects_details: list[ProjectEntry] | None = Field(default=None, alias="projectsDetails")
    summary: str | None = None
    # JSON string with phone, linkedin, github, ...
    personal_info: str | None = Field(default=None, alias="personalInfo")
    discovery_enabled: bool | None = Field(default=None, alias="discoveryEnabled")


class UserProfile(ResponseModel):
    uid: str
    name: str | None = None
    email: str | None = None
    type: str | None = None
    student: dict | None = None


class ExploreUser(ResponseModel):
    uid: str
    name: str | None = None
    email: str | None = None
    type: str | None = None
    institution: str | None = None
    degree: str | None = None
    location: str | None = None
    skills: list[str] | None = None
    research_interest: str | None = Field(default=None, alias="researchInterest")


class ExploreFilters(RequestModel):
    """Query for ``GET /profile/explore``; empty filters are not sent."""

    type: str | None = None
    search: str | None = None

    def to_params(self) -> dict[str, str] | None:
        params = {key: value for key, value in self.to_payload().items() if value}
        return params or None
