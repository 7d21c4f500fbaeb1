"""
Form Kernel: Shared Types

Data classes used across primitives, reducer, builder, renderer and assembly.
These are the contracts that bind the kernel together.

A schema is an ordered list of field dicts:
  {"id": int, "name": str, "type": str, "options": list[str]}

The reducer works on plain dicts (cheap to deep-copy, JSON-ready);
FieldDefinition is the typed view handed to callers.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------

PRIMITIVE_TYPES: set[str] = {
    "field.add",
    "field.update",
    "field.remove",
    "field.move",
}

# Base field kinds. The set is open: unknown kinds are accepted and rendered
# with the default (selection) template.
FIELD_TYPES: set[str] = {"text", "choice"}

# Properties field.update may touch. id and type are fixed at creation.
UPDATABLE_PROPERTIES: set[str] = {"name", "options"}

OPTION_SEPARATOR = ","

# Host display modes → kernel modes
FILL_MODES: set[str] = {"new", "edit"}
DESIGN_MODES: set[str] = {"view", "display"}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class FormError(Exception):
    """Base class for form kernel errors."""

    pass


class ResolutionError(FormError):
    """Template lookup chain failed (missing record, bad template id, bad fields)."""

    pass


class PersistenceError(FormError):
    """Creating a template or a record failed."""

    pass


class ValidationError(FormError):
    """A primitive payload is structurally invalid."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class FieldDefinition:
    """One schema entry."""

    id: int
    name: str = ""
    type: str = "text"
    options: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "options": list(self.options),
        }

    def to_template_dict(self) -> dict[str, Any]:
        """Persisted shape. The id is a session-local key and stays behind."""
        return {
            "name": self.name,
            "type": self.type,
            "options": list(self.options),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> FieldDefinition:
        # A missing type stays empty and renders as a selection control
        field_id = d.get("id")
        return cls(
            id=field_id if isinstance(field_id, int) else next_field_id(),
            name=d.get("name") or "",
            type=d.get("type") or "",
            options=[str(o) for o in (d.get("options") or [])],
        )


@dataclass
class Template:
    """A named, persisted schema."""

    title: str
    fields: list[FieldDefinition]

    def to_dict(self) -> dict[str, Any]:
        return {
            "Title": self.title,
            "fields": [f.to_template_dict() for f in self.fields],
        }


@dataclass
class Event:
    """
    Wraps a primitive with metadata.
    The reducer reads only `type` and `payload`.
    """

    sequence: int
    type: str
    payload: dict[str, Any]
    timestamp: str = ""


@dataclass
class Warning:
    """A non-fatal issue encountered during reduction."""

    code: str
    message: str
    details: dict[str, Any] | None = None


@dataclass
class ReduceResult:
    """
    Result of applying one event to a schema.
    The reducer never throws; it always returns one of these.
    """

    schema: list[dict[str, Any]]
    applied: bool
    warnings: list[Warning] = field(default_factory=list)
    error: str | None = None


@dataclass
class FormState:
    """
    What the renderer draws.

    loading: fill mode, template not resolved yet
    ready:   fill mode, schema resolved
    idle:    design mode, schema held by the builder
    error:   fill mode, resolution failed (reason set)
    """

    status: str
    mode: str
    fields: list[FieldDefinition] = field(default_factory=list)
    item_id: int | None = None
    reason: str | None = None

    @classmethod
    def loading(cls, item_id: int | None) -> FormState:
        return cls(status="loading", mode="fill", item_id=item_id)

    @classmethod
    def ready(cls, fields: list[FieldDefinition], item_id: int | None) -> FormState:
        return cls(status="ready", mode="fill", fields=fields, item_id=item_id)

    @classmethod
    def idle(cls, fields: list[FieldDefinition]) -> FormState:
        return cls(status="idle", mode="design", fields=fields)

    @classmethod
    def failed(cls, reason: str, item_id: int | None) -> FormState:
        return cls(status="error", mode="fill", item_id=item_id, reason=reason)


@dataclass
class OperationResult:
    """Discriminated success/failure of a save or submit."""

    ok: bool
    value: dict[str, Any] | None = None
    error: str | None = None


@dataclass
class RenderOptions:
    """Options controlling what the renderer includes in output."""

    title: str = "Dynamic Form"
    # URL prefix the design-mode forms post to, e.g. "/designs/abc123"
    action_base: str = ""
    # URL the fill-mode form posts to; empty means "same page"
    submit_action: str = ""
    notice: str | None = None
    include_stylesheet: bool = True


@dataclass
class HostContext:
    """
    What the host page hands to the kernel. Passed explicitly into every
    operation that needs it, never held globally.
    """

    site_url: str
    display_mode: str
    item_id: int | None = None

    @property
    def mode(self) -> str:
        return form_mode(self.display_mode)


HostCallback = Callable[[], Awaitable[None] | None]


@dataclass
class HostCallbacks:
    """Intent signals back to the host. The host decides what they mean."""

    on_save: HostCallback | None = None
    on_close: HostCallback | None = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_last_id = 0


def next_field_id() -> int:
    """
    Millisecond clock id, bumped to stay strictly increasing within the
    process when two fields are added in the same millisecond.
    """
    global _last_id
    candidate = time.time_ns() // 1_000_000
    if candidate <= _last_id:
        candidate = _last_id + 1
    _last_id = candidate
    return candidate


def form_mode(display_mode: str) -> str:
    """Map a host display mode (new/edit/view/display) to fill or design."""
    mode = (display_mode or "").strip().lower()
    if mode in FILL_MODES:
        return "fill"
    if mode in DESIGN_MODES:
        return "design"
    raise ValueError(f"Unknown display mode: {display_mode}")


def split_options(raw: str) -> list[str]:
    """
    "a,b,c" → ["a", "b", "c"]. No trimming, no de-duplication.
    The empty string yields an empty list.
    """
    if raw == "":
        return []
    return raw.split(OPTION_SEPARATOR)


def join_options(options: list[str]) -> str:
    return OPTION_SEPARATOR.join(options)


def is_known_field_type(value: str) -> bool:
    return value in FIELD_TYPES


def now_iso() -> str:
    """Current UTC time as ISO 8601 string."""
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
