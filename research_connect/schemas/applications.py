"""Application payloads."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from research_connect.schemas.base import RequestModel, ResponseModel


class ApplicationStatus(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WAITLISTED = "waitlisted"
    INTERVIEW = "interview"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"


# ── Request models ──────────────────────────────────────────────────────────


class ApplicationIn(RequestModel):
    availability: str = ""
    motivation: str = ""
    prior_projects: str = Field(default="", alias="priorProjects")
    cv_link: str = Field(default="", alias="cvLink")
    publications_link: str = Field(default="", alias="publicationsLink")


class StatusUpdateIn(RequestModel):
    status: ApplicationStatus


class FeedbackIn(RequestModel):
    feedback: str


class InterviewSchedule(RequestModel):
    interview_date: str = Field(alias="interviewDate")
    interview_time: str = Field(alias="interviewTime")
    interview_details: str | None = Field(default=None, alias="interviewDetails")


# ── Response models ─────────────────────────────────────────────────────────


class ApplicationProjectRef(ResponseModel):
    project_name: str | None = None
    project_id: str | None = None


class Application(ResponseModel):
    id: int | None = Field(default=None, alias="ID")
    pid: str | None = Field(default=None, alias="PID")
    status: str = ""
    time_created: str | None = Field(default=None, alias="timeCreated")
    availability: str | None = None
    motivation: str | None = None
    prior_projects: str | None = Field(default=None, alias="priorProjects")
    cv_link: str | None = Field(default=None, alias="cvLink")
    publications_link: str | None = Field(default=None, alias="publicationsLink")
    interview_date: str | None = Field(default=None, alias="interviewDate")
    interview_time: str | None = Field(default=None, alias="interviewTime")
    interview_details: str | None = Field(default=None, alias="interviewDetails")
    project: ApplicationProjectRef | None = Field(default=None, alias="Project")
