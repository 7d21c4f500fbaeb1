"""
Form Kernel: dynamic form schemas, built at design time and filled later.

Components:
  primitives  validation layer for the field.* operations
  reducer     (schema, event) → schema  (pure)
  builder     stateful schema holder for a design session
  renderer    form state → HTML  (pure)
  submission  submitted pairs → flat record  (pure)
  resolver    item → template id → fields  (IO through ListStorage)
  assembly    coordinates all of the above with storage and the host
"""

from formengine.kernel.assembly import FormAssembly, ListStorage, MemoryStorage
from formengine.kernel.builder import SchemaBuilder
from formengine.kernel.primitives import validate_primitive
from formengine.kernel.reducer import empty_schema, reduce, replay
from formengine.kernel.renderer import render, render_field
from formengine.kernel.resolver import TemplateResolver
from formengine.kernel.submission import map_submission
from formengine.kernel.types import (
    FieldDefinition,
    FormState,
    HostCallbacks,
    HostContext,
    OperationResult,
    form_mode,
)

__all__ = [
    "validate_primitive",
    "reduce",
    "replay",
    "empty_schema",
    "SchemaBuilder",
    "render",
    "render_field",
    "map_submission",
    "TemplateResolver",
    "FormAssembly",
    "ListStorage",
    "MemoryStorage",
    "FieldDefinition",
    "FormState",
    "HostCallbacks",
    "HostContext",
    "OperationResult",
    "form_mode",
]
