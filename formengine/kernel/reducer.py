"""
Form Kernel: Reducer

Pure function: (schema, event) → ReduceResult
No side effects. No IO. Deterministic when field.add events carry their id;
an add without one draws a fresh id from the clock.

The schema is an ordered list of field dicts. Order is insertion order,
changed only by field.move. Every handler leaves fields it does not
address untouched.
"""

from __future__ import annotations

import copy
from typing import Any

from formengine.kernel.types import (
    Event,
    ReduceResult,
    Warning,
    next_field_id,
    split_options,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def empty_schema() -> list[dict[str, Any]]:
    """The schema before any field is added."""
    return []


def reduce(schema: list[dict[str, Any]], event: Event) -> ReduceResult:
    """
    Apply one event to the current schema.
    Returns new schema + applied flag + warnings/errors.

    The input schema is never modified.
    """
    handler = _HANDLERS.get(event.type)
    if handler is None:
        return ReduceResult(
            schema=schema,
            applied=False,
            error=f"UNKNOWN_PRIMITIVE: {event.type}",
        )

    fields = copy.deepcopy(schema)
    return handler(fields, event)


def replay(events: list[Event]) -> list[dict[str, Any]]:
    """
    Rebuild a schema from scratch by reducing over all events.
    Events for field.add must carry their id for the replay to be exact.
    """
    schema = empty_schema()
    for event in events:
        result = reduce(schema, event)
        if result.applied:
            schema = result.schema
    return schema


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _reject(schema: list, code: str, msg: str) -> ReduceResult:
    return ReduceResult(schema=schema, applied=False, error=f"{code}: {msg}")


def _ok(schema: list, warnings: list[Warning] | None = None) -> ReduceResult:
    return ReduceResult(schema=schema, applied=True, warnings=warnings or [])


def _index_of(schema: list[dict[str, Any]], field_id: int) -> int | None:
    for i, f in enumerate(schema):
        if f["id"] == field_id:
            return i
    return None


def _not_found(schema: list, field_id: int, primitive: str) -> ReduceResult:
    return _ok(
        schema,
        [
            Warning(
                code="FIELD_NOT_FOUND",
                message=f"{primitive}: no field with id {field_id}",
                details={"id": field_id},
            )
        ],
    )


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_field_add(schema: list, event: Event) -> ReduceResult:
    p = event.payload
    field_id = p.get("id")
    if field_id is None:
        field_id = next_field_id()

    if _index_of(schema, field_id) is not None:
        return _reject(schema, "DUPLICATE_ID", f"field {field_id} already exists")

    schema.append({"id": field_id, "name": "", "type": p["type"], "options": []})
    return _ok(schema)


def _handle_field_update(schema: list, event: Event) -> ReduceResult:
    p = event.payload
    idx = _index_of(schema, p["id"])
    if idx is None:
        return _not_found(schema, p["id"], "field.update")

    prop = p["property"]
    value = p["value"]
    field_type = schema[idx]["type"]
    if prop == "options" and field_type != "choice":
        # Options stay empty on non-choice fields
        warning = Warning(
            code="OPTIONS_IGNORED",
            message=f"field.update: field {p['id']} is {field_type!r}, not a choice field",
            details={"id": p["id"], "type": field_type},
        )
        return _ok(schema, [warning])
    if prop == "options":
        value = split_options(value) if isinstance(value, str) else list(value)

    schema[idx] = {**schema[idx], prop: value}
    return _ok(schema)


def _handle_field_remove(schema: list, event: Event) -> ReduceResult:
    idx = _index_of(schema, event.payload["id"])
    if idx is None:
        return _not_found(schema, event.payload["id"], "field.remove")

    del schema[idx]
    return _ok(schema)


def _handle_field_move(schema: list, event: Event) -> ReduceResult:
    p = event.payload
    idx = _index_of(schema, p["id"])
    if idx is None:
        return _not_found(schema, p["id"], "field.move")

    moved = schema.pop(idx)
    target = max(0, min(p["index"], len(schema)))
    schema.insert(target, moved)
    return _ok(schema)


_HANDLERS: dict[str, Any] = {
    "field.add": _handle_field_add,
    "field.update": _handle_field_update,
    "field.remove": _handle_field_remove,
    "field.move": _handle_field_move,
}
