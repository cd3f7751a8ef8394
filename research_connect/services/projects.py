"""Project listing and management."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

from research_connect.schemas import Project, ProjectCreate, ProjectPage, ProjectUpdate, as_payload
from research_connect.services.base import BaseService, segment

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class ProjectService(BaseService):
    async def list_active(self) -> Any:
        """All projects with their owners (``GET /projects``)."""
        return await self._client.get("/projects", action="fetching projects")

    async def create(self, data: ProjectCreate | dict[str, Any]) -> Any:
        return await self._client.post("/projects", json=as_payload(data), action="creating project")

    async def list_for_student(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Any:
        """Active projects plus the ones the student applied to, one page at a time."""
        return await self._client.get(
            "/projects/student",
            params={"page": page, "pageSize": page_size},
            action="fetching projects for student",
        )

    async def iter_for_student(self, page_size: int = DEFAULT_PAGE_SIZE) -> AsyncIterator[Project]:
        """Walk every page of :meth:`list_for_student`."""
        page_size = max(1, min(page_size, MAX_PAGE_SIZE))
        page = 1
        while True:
            result = ProjectPage.model_validate(await self.list_for_student(page, page_size) or {})
            for project in result.projects:
                yield project
            if not result.projects or not result.has_next:
                return
            page += 1

    async def list_mine(self) -> Any:
        return await self._client.get("/projects/my", action="fetching my projects")

    async def get(self, pid: str) -> Any:
        return await self._client.get(f"/projects/{segment(pid)}", action="fetching project by pid")

    async def update(self, pid: str, data: ProjectUpdate | dict[str, Any]) -> Any:
        return await self._client.put(
            f"/projects/{segment(pid)}", json=as_payload(data), action="updating project by pid"
        )

    async def delete(self, pid: str) -> Any:
        return await self._client.delete(f"/projects/{segment(pid)}", action="deleting project")

    async def working_users(self, pid: str) -> Any:
        return await self._client.get(
            f"/projects/{segment(pid)}/working-users",
            action="fetching project working users",
        )

    async def remove_working_user(self, pid: str, uid: str) -> Any:
        return await self._client.delete(
            f"/projects/{segment(pid)}/working-users/{segment(uid)}",
            action="removing working user",
        )
