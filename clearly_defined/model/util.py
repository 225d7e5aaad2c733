from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from clearly_defined.errors import DeserializerError


def parse_date(value) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if len(value) > 10:
            return datetime.fromisoformat(value).date()
        return date.fromisoformat(value)
    raise ValueError("cannot parse date")


def as_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise DeserializerError(f"expected an object for {what}, got: {type(value).__name__}")
    return value


def as_int(value: Any) -> int:
    # bool is an int too, but never a valid count or score
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected an integer, got: {value!r}")
    return value


def as_str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"expected a list of strings, got: {value!r}")
    return list(value)


def as_str(value: Any, optional: bool = False) -> str | None:
    if value is None and optional:
        return None
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got: {value!r}")
    return value
