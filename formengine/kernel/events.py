"""
Form Kernel: Event Construction

Factory functions for creating well-formed events.
Used by the builder to wrap primitives before feeding them to the reducer,
and by tests to build events concisely.
"""

from __future__ import annotations

from typing import Any

from formengine.kernel.types import Event, now_iso


def make_event(
    seq: int,
    type: str,
    payload: dict[str, Any],
    *,
    timestamp: str | None = None,
) -> Event:
    """Build a complete Event from minimal inputs."""
    return Event(
        sequence=seq,
        type=type,
        payload=payload,
        timestamp=timestamp or now_iso(),
    )


def add_field_event(seq: int, field_type: str, field_id: int | None = None) -> Event:
    payload: dict[str, Any] = {"type": field_type}
    if field_id is not None:
        payload["id"] = field_id
    return make_event(seq, "field.add", payload)


def update_field_event(seq: int, field_id: int, prop: str, value: Any) -> Event:
    return make_event(seq, "field.update", {"id": field_id, "property": prop, "value": value})


def remove_field_event(seq: int, field_id: int) -> Event:
    return make_event(seq, "field.remove", {"id": field_id})


def move_field_event(seq: int, field_id: int, index: int) -> Event:
    return make_event(seq, "field.move", {"id": field_id, "index": index})
