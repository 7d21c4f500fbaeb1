"""
Form Kernel: Schema Builder

Holds the in-memory schema of one design session. Every change is
validated → reduced → recorded, and subscribed observers are told about
the new field list. The builder owns no IO.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from formengine.kernel.events import (
    add_field_event,
    move_field_event,
    remove_field_event,
    update_field_event,
)
from formengine.kernel.primitives import validate_primitive
from formengine.kernel.reducer import empty_schema, reduce
from formengine.kernel.types import (
    Event,
    FieldDefinition,
    FormError,
    ValidationError,
    Warning,
    is_known_field_type,
    next_field_id,
)

logger = logging.getLogger(__name__)

Observer = Callable[[list[FieldDefinition]], None]


class SchemaBuilder:
    """
    Mutable collection of field definitions, ordered by insertion.

    Calls apply in call order and each one sees the result of the previous
    one; there is a single event loop, so no interleaving.
    """

    def __init__(self, fields: list[FieldDefinition] | None = None):
        self._schema: list[dict[str, Any]] = empty_schema()
        self._events: list[Event] = []
        self._observers: list[Observer] = []
        self.warnings: list[Warning] = []
        for f in fields or []:
            self._schema.append(f.to_dict())

    # -- reads --

    @property
    def fields(self) -> list[FieldDefinition]:
        return [FieldDefinition.from_dict(f) for f in self._schema]

    @property
    def events(self) -> list[Event]:
        return list(self._events)

    def get(self, field_id: int) -> FieldDefinition | None:
        for f in self._schema:
            if f["id"] == field_id:
                return FieldDefinition.from_dict(f)
        return None

    def __len__(self) -> int:
        return len(self._schema)

    # -- observers --

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer. Returns a function that unsubscribes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # -- operations --

    def add_field(self, field_type: str) -> FieldDefinition:
        """Append a new field with a fresh id, empty name and no options."""
        field_id = next_field_id()
        self._apply(add_field_event(self._next_seq(), field_type, field_id))
        if not is_known_field_type(field_type):
            logger.info("schema builder: field %s has unrecognized type %r", field_id, field_type)
        added = self.get(field_id)
        if added is None:
            raise FormError(f"field {field_id} missing after field.add")
        return added

    def update_field(self, field_id: int, prop: str, value: Any) -> list[FieldDefinition]:
        """
        Replace `name` or `options` on the field with this id.
        A string options value is split on commas; options on a non-choice
        field are ignored with a warning. Unknown id is a no-op.
        """
        self._apply(update_field_event(self._next_seq(), field_id, prop, value))
        return self.fields

    def remove_field(self, field_id: int) -> list[FieldDefinition]:
        self._apply(remove_field_event(self._next_seq(), field_id))
        return self.fields

    def move_field(self, field_id: int, index: int) -> list[FieldDefinition]:
        """Move a field to `index`; out-of-range indexes clamp to the ends."""
        self._apply(move_field_event(self._next_seq(), field_id, index))
        return self.fields

    # -- internals --

    def _next_seq(self) -> int:
        return len(self._events) + 1

    def _apply(self, event: Event) -> None:
        errors = validate_primitive(event.type, event.payload)
        if errors:
            raise ValidationError(errors)

        result = reduce(self._schema, event)
        if not result.applied:
            raise FormError(result.error or "Unknown error")

        for w in result.warnings:
            logger.warning("schema builder: %s", w.message)
        self.warnings.extend(result.warnings)

        self._schema = result.schema
        self._events.append(event)

        snapshot = self.fields
        for observer in list(self._observers):
            observer(snapshot)
