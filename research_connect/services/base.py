"""Common base for the resource services."""

from __future__ import annotations

from urllib.parse import quote

from research_connect.api.client import ApiClient


def segment(value: object) -> str:
    """Quote a path parameter so IDs can never escape their segment."""
    return quote(str(value), safe="")


class BaseService:
    def __init__(self, client: ApiClient) -> None:
        self._client = client
