"""
Form Kernel: Submission Mapper

Turns the name → value pairs of a filled form into a flat record.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def map_submission(
    pairs: Iterable[tuple[str, Any]] | Mapping[str, Any],
    *,
    multi: bool = False,
) -> dict[str, Any]:
    """
    Build a record from submitted pairs, in submission order.

    Repeated names: the last value wins. With multi=True repeated names
    collect into a list instead (a name seen once stays a plain value).
    """
    items = pairs.items() if isinstance(pairs, Mapping) else pairs

    record: dict[str, Any] = {}
    for key, value in items:
        if multi and key in record:
            existing = record[key]
            if isinstance(existing, list):
                existing.append(value)
            else:
                record[key] = [existing, value]
        else:
            record[key] = value
    return record
