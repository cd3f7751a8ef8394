"""Research and placement roadmaps."""

from __future__ import annotations

from typing import Any

from research_connect.schemas import PlacementPreferences, ResearchPreferences, as_payload
from research_connect.services.base import BaseService


class RoadmapService(BaseService):
    # ── Research roadmap ───────────────────────────────────────────────────

    async def save_preferences(self, data: ResearchPreferences | dict[str, Any]) -> Any:
        return await self._client.post(
            "/roadmap/preferences", json=as_payload(data), action="saving preferences"
        )

    async def get_preferences(self) -> Any:
        return await self._client.get("/roadmap/preferences", action="fetching preferences")

    async def generate(self) -> Any:
        return await self._client.post("/roadmap/generate", json={}, action="generating roadmap")

    async def history(self) -> Any:
        return await self._client.get("/roadmap/history", action="fetching roadmap history")

    # ── Placement roadmap ──────────────────────────────────────────────────

    async def save_placement_preferences(self, data: PlacementPreferences | dict[str, Any]) -> Any:
        return await self._client.post(
            "/roadmap/placement/preferences",
            json=as_payload(data),
            action="saving placement preferences",
        )

    async def get_placement_preferences(self) -> Any:
        return await self._client.get(
            "/roadmap/placement/preferences", action="fetching placement preferences"
        )

    async def generate_placement(self) -> Any:
        return await self._client.post(
            "/roadmap/placement/generate", json={}, action="generating placement roadmap"
        )
