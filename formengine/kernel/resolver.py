"""
Form Kernel: Template Resolver

Two-hop lookup: host record → template id → template fields.

The record store and the template store are separate arguments. Whether
they are the same backing list read by two ids, or two lists, is the
caller's choice; the resolver does not assume either.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from formengine.kernel.types import FieldDefinition, ResolutionError

if TYPE_CHECKING:
    from formengine.kernel.assembly import ListStorage

DEFAULT_TEMPLATE_ID_FIELD = "TemplateId"


class TemplateResolver:
    """Resolves the schema attached to a host item."""

    def __init__(
        self,
        records: ListStorage,
        templates: ListStorage,
        *,
        template_id_field: str = DEFAULT_TEMPLATE_ID_FIELD,
    ):
        self._records = records
        self._templates = templates
        self._template_id_field = template_id_field

    async def template_id_for(self, item_id: int) -> int:
        """Hop 1: read the host record and pull its template id."""
        record = await self._records.get(item_id)
        if record is None:
            raise ResolutionError(f"Record {item_id} not found")

        raw = record.get(self._template_id_field)
        if raw is None:
            raise ResolutionError(f"Record {item_id} has no {self._template_id_field}")
        try:
            return _as_template_id(raw)
        except (TypeError, ValueError) as e:
            raise ResolutionError(f"Record {item_id} has malformed {self._template_id_field}: {raw!r}") from e

    async def fields_for_template(self, template_id: int) -> list[FieldDefinition]:
        """Hop 2: read the template and parse its fields."""
        template = await self._templates.get(template_id)
        if template is None:
            raise ResolutionError(f"Template {template_id} not found")
        return parse_fields(template.get("fields"), template_id)

    async def resolve(self, item_id: int) -> list[FieldDefinition]:
        template_id = await self.template_id_for(item_id)
        return await self.fields_for_template(template_id)


def _as_template_id(raw: Any) -> int:
    """Integer ids, or digit strings. Booleans and fractional floats are refused."""
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise ValueError(f"not an integer id: {raw!r}")
    return int(raw)


def parse_fields(raw: Any, template_id: int | None = None) -> list[FieldDefinition]:
    """
    Accept a list of field dicts, or a JSON string holding one (list columns
    often store structured values as text).
    """
    where = f"Template {template_id}" if template_id is not None else "Template"
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ResolutionError(f"{where} has unparseable fields: {e}") from e

    if not isinstance(raw, list):
        raise ResolutionError(f"{where} has no fields list")

    fields: list[FieldDefinition] = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ResolutionError(f"{where} field {i} is not an object")
        fields.append(FieldDefinition.from_dict(entry))
    return fields
