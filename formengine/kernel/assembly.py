"""
Form Kernel: Assembly Layer

Sits between the pure functions (reducer, renderer, submission mapper) and
the outside world (list storage, the host). Coordinates the form lifecycle.

Operations: load, save_template, submit, close

This is where IO happens. Every storage failure is caught here, logged,
and handed back as a FormState or an OperationResult; nothing raises out
to the host.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from formengine.kernel.builder import SchemaBuilder
from formengine.kernel.resolver import DEFAULT_TEMPLATE_ID_FIELD, TemplateResolver
from formengine.kernel.submission import map_submission
from formengine.kernel.types import (
    FieldDefinition,
    FormState,
    HostCallback,
    HostCallbacks,
    HostContext,
    OperationResult,
    PersistenceError,
    ResolutionError,
    Template,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Storage protocol
# ---------------------------------------------------------------------------


class ListStorage:
    """
    Abstract key-value list storage with create/read.
    Implement over HTTP for production, or in-memory for tests.
    """

    async def get(self, item_id: int) -> dict[str, Any] | None:
        """Fetch one item. Returns None if not found."""
        raise NotImplementedError

    async def create(self, data: dict[str, Any]) -> dict[str, Any]:
        """Create an item. Returns the created item, including its assigned Id."""
        raise NotImplementedError


class MemoryStorage(ListStorage):
    """In-memory storage for testing."""

    def __init__(self, items: dict[int, dict[str, Any]] | None = None) -> None:
        self.items: dict[int, dict[str, Any]] = dict(items or {})
        self.created: list[dict[str, Any]] = []

    async def get(self, item_id: int) -> dict[str, Any] | None:
        return self.items.get(item_id)

    async def create(self, data: dict[str, Any]) -> dict[str, Any]:
        new_id = max(self.items, default=0) + 1
        item = {**data, "Id": new_id}
        self.items[new_id] = item
        self.created.append(data)
        return item


# ---------------------------------------------------------------------------
# Assembly class
# ---------------------------------------------------------------------------


class FormAssembly:
    """
    Manages one host form: resolving its schema, saving templates,
    submitting records, and signalling the host.
    """

    def __init__(
        self,
        records: ListStorage,
        templates: ListStorage | None = None,
        *,
        callbacks: HostCallbacks | None = None,
        template_id_field: str = DEFAULT_TEMPLATE_ID_FIELD,
    ):
        self._records = records
        # One list backs both unless told otherwise
        self._templates = templates if templates is not None else records
        self._callbacks = callbacks or HostCallbacks()
        self.resolver = TemplateResolver(
            self._records,
            self._templates,
            template_id_field=template_id_field,
        )

    # -- load --

    async def load(self, context: HostContext, builder: SchemaBuilder | None = None) -> FormState:
        """
        Design mode → idle state over the builder's fields.
        Fill mode → resolve the item's template → ready, or error with a reason.
        """
        if context.mode == "design":
            return FormState.idle(builder.fields if builder else [])

        if context.item_id is None:
            return FormState.failed("No item reference for fill mode", None)

        try:
            fields = await self.resolver.resolve(context.item_id)
        except ResolutionError as e:
            logger.warning("form load: item %s: %s", context.item_id, e)
            return FormState.failed(str(e), context.item_id)
        except Exception as e:
            logger.exception("form load: item %s failed", context.item_id)
            return FormState.failed(f"Template lookup failed: {e}", context.item_id)

        return FormState.ready(fields, context.item_id)

    # -- save --

    async def save_template(self, fields: list[FieldDefinition], name: str | None) -> OperationResult:
        """
        Persist the schema as a template named `name`.
        A blank name aborts with no side effect.
        """
        if not name or not name.strip():
            return OperationResult(ok=False, error="cancelled")

        template = Template(title=name, fields=fields)
        try:
            created = await self._templates.create(template.to_dict())
        except Exception as e:
            err = PersistenceError(f"Failed to save template {name!r}: {e}")
            logger.exception("save template: %s", err)
            return OperationResult(ok=False, error=str(err))

        logger.info("saved template %r with %d fields", name, len(fields))
        await self._signal(self._callbacks.on_save)
        return OperationResult(ok=True, value=created)

    # -- submit --

    async def submit(
        self,
        pairs: Iterable[tuple[str, Any]] | Mapping[str, Any],
        *,
        multi: bool = False,
    ) -> OperationResult:
        """Map submitted pairs to a record and create it."""
        record = map_submission(pairs, multi=multi)
        try:
            created = await self._records.create(record)
        except Exception as e:
            err = PersistenceError(f"Failed to submit record: {e}")
            logger.exception("submit: %s", err)
            return OperationResult(ok=False, error=str(err))

        logger.info("submitted record with %d fields", len(record))
        await self._signal(self._callbacks.on_save)
        return OperationResult(ok=True, value=created)

    # -- close --

    async def close(self) -> None:
        """Tell the host this form is done."""
        await self._signal(self._callbacks.on_close)

    async def _signal(self, callback: HostCallback | None) -> None:
        if callback is None:
            return
        result = callback()
        if inspect.isawaitable(result):
            await result
