"""Argument shape checks applied before any store call is made."""

from __future__ import annotations

from typing import Any, Optional


def _kind(value: Any) -> str:
    return type(value).__name__


def require_int(value: Any, name: str) -> int:
    # bool is an int subclass but never a valid MAC, port or id.
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} ({_kind(value)}) is required to be an int")
    return value


def require_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} ({_kind(value)}) is required to be a str")
    if not value:
        raise ValueError(f"{name} must not be empty")
    return value


def optional_int(value: Any, name: str) -> Optional[int]:
    if value is None:
        return None
    return require_int(value, name)


def optional_str(value: Any, name: str) -> Optional[str]:
    if value is None:
        return None
    return require_str(value, name)


def optional_bool(value: Any, name: str) -> Optional[bool]:
    if value is not None and not isinstance(value, bool):
        raise TypeError(f"{name} ({_kind(value)}) is required to be a bool")
    return value


def require_str_list(value: Any, name: str) -> list[str]:
    if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
        raise TypeError(f"{name} ({_kind(value)}) is required to be a sequence")
    items = list(value)
    for index, item in enumerate(items):
        require_str(item, f"{name}[{index}]")
    return items
