"""Student profile, public profiles and user discovery."""

from __future__ import annotations

from typing import Any

from research_connect.schemas import ExploreFilters, StudentProfile, as_payload
from research_connect.services.base import BaseService, segment


class ProfileService(BaseService):
    async def get_student(self) -> Any:
        return await self._client.get("/profile/student", action="fetching student profile")

    async def update_student(self, data: StudentProfile | dict[str, Any]) -> Any:
        return await self._client.put(
            "/profile/student", json=as_payload(data), action="updating student profile"
        )

    async def recommendations(self) -> Any:
        return await self._client.get(
            "/profile/student/recommendations", action="fetching recommended projects"
        )

    async def get_user(self, uid: str) -> Any:
        return await self._client.get(
            f"/profile/user/{segment(uid)}", action="fetching user profile"
        )

    async def explore(self, type: str | None = None, search: str | None = None) -> Any:
        filters = ExploreFilters(type=type, search=search)
        return await self._client.get(
            "/profile/explore", params=filters.to_params(), action="fetching users"
        )
