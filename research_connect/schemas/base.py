"""Shared pydantic base classes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class RequestModel(BaseModel):
    """Outgoing payload: python names in code, backend keys on the wire."""

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ResponseModel(BaseModel):
    """Incoming payload: unknown keys are kept, nothing is enforced."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


def as_payload(data: RequestModel | dict[str, Any] | None) -> dict[str, Any]:
    """Accept either a request model or a ready-made dict."""
    if data is None:
        return {}
    if isinstance(data, RequestModel):
        return data.to_payload()
    return dict(data)
