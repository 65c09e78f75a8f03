"""Helpers for reading plain JSON records coming from the dashboard client.

Keys are accepted in camelCase (as the client sends them) or snake_case.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def pick(data: dict, *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _norm(text: str) -> str:
    return "".join(ch for ch in text.lower() if ch.isalnum())


def parse_enum(cls: Type[E], value: Any, default: Optional[E] = None) -> Optional[E]:
    """Match an enum by value or name, ignoring case, spaces and underscores."""
    if value is None or value == "":
        return default
    if isinstance(value, cls):
        return value
    wanted = _norm(str(value))
    for member in cls:
        if wanted in (_norm(member.name), _norm(str(member.value))):
            return member
    raise ValidationError(f"Unknown {cls.__name__}: {value!r}")


def as_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def as_optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def as_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default
