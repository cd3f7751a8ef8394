"""Applying to projects and reviewing applications."""

from __future__ import annotations

import logging
from typing import Any

from research_connect.api.errors import ResearchConnectError
from research_connect.schemas import (
    Application,
    ApplicationIn,
    ApplicationStatus,
    InterviewSchedule,
    as_payload,
)
from research_connect.schemas.applications import FeedbackIn, StatusUpdateIn
from research_connect.services.base import BaseService, segment

logger = logging.getLogger(__name__)


class ApplicationService(BaseService):
    # ── Student side ───────────────────────────────────────────────────────

    async def apply(self, pid: str, data: ApplicationIn | dict[str, Any]) -> Any:
        return await self._client.post(
            f"/projects/{segment(pid)}/apply",
            json=as_payload(data),
            action="applying to project",
        )

    async def retract(self, pid: str) -> Any:
        return await self._client.delete(
            f"/projects/{segment(pid)}/retract", action="retracting application"
        )

    async def status_for_project(self, pid: str) -> Any:
        return await self._client.get(
            f"/projects/{segment(pid)}/application-status",
            action="fetching application status for project",
        )

    async def list_mine(self) -> Any:
        return await self._client.get("/applications/my", action="fetching applications")

    async def application_for_project(self, pid: str) -> Application | None:
        """
        Find the caller's application to ``pid`` in :meth:`list_mine`.

        Lookup failures are logged and reported as "no application", the
        way a project page treats a missing status.
        """
        try:
            body = await self.list_mine()
        except ResearchConnectError:
            logger.warning("Could not look up application for project %s", pid)
            return None

        applications = (body or {}).get("applications")
        if not isinstance(applications, list):
            return None
        for raw in applications:
            if isinstance(raw, dict) and raw.get("PID") == pid:
                return Application.model_validate(raw)
        return None

    async def applied_projects(self) -> Any:
        """Lightweight list of applied project IDs and their statuses."""
        return await self._client.get(
            "/applications/my/applied-projects", action="fetching applied projects"
        )

    # ── Faculty side ───────────────────────────────────────────────────────

    async def list_all(self) -> Any:
        """Applications across every project the professor owns."""
        return await self._client.get(
            "/applications/all", action="fetching all project applications"
        )

    async def past_applicants(self, pid: str) -> Any:
        return await self._client.get(
            f"/projects/{segment(pid)}/past-applicants", action="fetching past applicants"
        )

    async def update_status(
        self, pid: str, application_id: int, status: ApplicationStatus | str
    ) -> Any:
        payload = StatusUpdateIn(status=ApplicationStatus(status)).to_payload()
        return await self._client.put(
            f"/projects/{segment(pid)}/applications/{segment(application_id)}",
            json=payload,
            action="updating application status",
        )

    async def send_feedback(self, pid: str, application_id: int, feedback: str) -> Any:
        return await self._client.post(
            f"/projects/{segment(pid)}/applications/{segment(application_id)}/feedback",
            json=FeedbackIn(feedback=feedback).to_payload(),
            action="sending feedback",
        )

    async def schedule_interview(
        self, pid: str, application_id: int, data: InterviewSchedule | dict[str, Any]
    ) -> Any:
        return await self._client.post(
            f"/projects/{segment(pid)}/applications/{segment(application_id)}/schedule-interview",
            json=as_payload(data),
            action="scheduling interview",
        )
