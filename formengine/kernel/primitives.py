"""
Form Kernel: Primitive Validation

Validates primitive payloads before they reach the reducer.
Every schema change goes through one of four primitive types.
Validation is structural (well-formed?) not semantic (will it apply?).
The reducer handles semantic checks (does the field exist? etc.).
"""

from __future__ import annotations

from typing import Any

from formengine.kernel.types import PRIMITIVE_TYPES, UPDATABLE_PROPERTIES

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_primitive(type: str, payload: dict[str, Any]) -> list[str]:
    """
    Validate a primitive's type and payload structure.
    Returns a list of error strings. Empty list = valid.

    Field types are NOT checked against the known set; any non-empty
    string is a legal type tag.
    """
    errors: list[str] = []

    if type not in PRIMITIVE_TYPES:
        errors.append(f"Unknown primitive type: {type}")
        return errors

    if not isinstance(payload, dict):
        errors.append("Payload must be a non-null object")
        return errors

    validator = _VALIDATORS.get(type)
    if validator:
        errors.extend(validator(payload))

    return errors


# ---------------------------------------------------------------------------
# Per-primitive validators
# ---------------------------------------------------------------------------


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_id(p: dict, primitive: str, errors: list[str]) -> None:
    if "id" not in p:
        errors.append(f"{primitive} requires 'id'")
    elif not _is_int(p["id"]):
        errors.append(f"Invalid field id: {p['id']!r}")


def _validate_field_add(p: dict) -> list[str]:
    errors: list[str] = []
    if "type" not in p:
        errors.append("field.add requires 'type'")
    elif not isinstance(p["type"], str) or not p["type"]:
        errors.append("'type' must be a non-empty string")

    if "id" in p and p["id"] is not None and not _is_int(p["id"]):
        errors.append(f"Invalid field id: {p['id']!r}")
    return errors


def _validate_field_update(p: dict) -> list[str]:
    errors: list[str] = []
    _check_id(p, "field.update", errors)

    prop = p.get("property")
    if prop is None:
        errors.append("field.update requires 'property'")
        return errors
    if prop not in UPDATABLE_PROPERTIES:
        errors.append(f"Property not updatable: {prop}")
        return errors

    if "value" not in p:
        errors.append("field.update requires 'value'")
        return errors

    value = p["value"]
    if prop == "name" and not isinstance(value, str):
        errors.append("'name' must be a string")
    if prop == "options":
        if isinstance(value, str):
            pass
        elif isinstance(value, list):
            if not all(isinstance(o, str) for o in value):
                errors.append("'options' entries must be strings")
        else:
            errors.append("'options' must be a string or a list of strings")
    return errors


def _validate_field_remove(p: dict) -> list[str]:
    errors: list[str] = []
    _check_id(p, "field.remove", errors)
    return errors


def _validate_field_move(p: dict) -> list[str]:
    errors: list[str] = []
    _check_id(p, "field.move", errors)
    if "index" not in p:
        errors.append("field.move requires 'index'")
    elif not _is_int(p["index"]):
        errors.append("'index' must be an integer")
    return errors


_VALIDATORS: dict[str, Any] = {
    "field.add": _validate_field_add,
    "field.update": _validate_field_update,
    "field.remove": _validate_field_remove,
    "field.move": _validate_field_move,
}
