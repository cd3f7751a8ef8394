"""Roadmap preference and roadmap structure payloads."""

from __future__ import annotations

from pydantic import Field

from research_connect.schemas.base import RequestModel, ResponseModel

# ── Request models ──────────────────────────────────────────────────────────


class ResearchPreferences(RequestModel):
    field_of_study: str
    experience_level: str
    current_year: int
    goals: str
    time_commitment: int = Field(description="Hours per week")
    interest_areas: str = Field(description="JSON array of interests")
    prior_experience: str | None = None


class PlacementPreferences(RequestModel):
    timeline_weeks: int
    time_commitment: int
    intensity_type: str = Field(description="regular, intense or weekend")
    prep_areas: str = Field(description="JSON array")
    current_levels: str = Field(description="JSON object {area: level}")
    resources_started: str | None = None
    target_companies: str | None = None
    special_needs: str | None = None
    goals: str


# ── Response models ─────────────────────────────────────────────────────────


class RoadmapNode(ResponseModel):
    id: str = ""
    title: str = ""
    description: str = ""
    category: str = ""
    duration: str = ""
    resources: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    next_nodes: list[str] = Field(default_factory=list)


class RoadmapStructure(ResponseModel):
    title: str = ""
    description: str = ""
    total_time: str = ""
    nodes: list[RoadmapNode] = Field(default_factory=list)
