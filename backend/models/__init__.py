"""
Pydantic models for dynamic forms.

All API data shapes defined here. No imports from repos or routes.
"""

from backend.models.form import (
    DesignResponse,
    FieldResponse,
    OperationResponse,
    SaveTemplateRequest,
)

__all__ = [
    "FieldResponse",
    "DesignResponse",
    "OperationResponse",
    "SaveTemplateRequest",
]
