"""Reusable post-extraction checks for ``validate()`` hooks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import FieldError

if TYPE_CHECKING:
    from collections.abc import Sized
    from datetime import datetime


def non_empty(field: str, values: Sized) -> FieldError | None:
    if len(values) == 0:
        return FieldError(field, "must not be empty")
    return None


def not_before(
    field: str,
    end: datetime | None,
    start: datetime | None,
    *,
    start_field: str,
) -> FieldError | None:
    if end is not None and start is not None and end < start:
        return FieldError(field, f"must not be before '{start_field}'")
    return None


def first_violation(*checks: FieldError | None) -> FieldError | None:
    return next((check for check in checks if check is not None), None)
