"""Form models for design sessions and operation results."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from formengine.kernel.types import FieldDefinition, OperationResult


class FieldResponse(BaseModel):
    """One field as the API returns it."""

    id: int
    name: str
    type: str
    options: list[str] = Field(default_factory=list)

    @classmethod
    def from_field(cls, field: FieldDefinition) -> FieldResponse:
        return cls(id=field.id, name=field.name, type=field.type, options=list(field.options))


class DesignResponse(BaseModel):
    """A design session and its current schema."""

    session_id: str
    fields: list[FieldResponse]
    created_at: datetime
    updated_at: datetime


class OperationResponse(BaseModel):
    """What save-template and submit return to API callers."""

    ok: bool
    item: dict[str, Any] | None = None
    error: str | None = None

    @classmethod
    def from_result(cls, result: OperationResult) -> OperationResponse:
        return cls(ok=result.ok, item=result.value, error=result.error)


class SaveTemplateRequest(BaseModel):
    """What an API client sends to save a design as a template."""

    model_config = {"extra": "forbid"}

    name: str = Field(default="", max_length=255)
