"""Utility helpers shared by the docnav configuration loader."""

from __future__ import annotations

import typing as typ

from .models import ConfigError


def _section(raw: typ.Mapping[str, typ.Any], name: str) -> dict[str, typ.Any]:
    """Return the mapping stored under ``name`` or an empty dict."""
    value = raw.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"Section '{name}' must be a mapping."
        raise ConfigError(msg)
    return dict(value)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(payload: typ.Mapping[str, typ.Any], key: str, default: str) -> str:
    value = payload.get(key, default)
    if not isinstance(value, str):
        msg = f"'{key}' must be a string, got {type(value).__name__}."
        raise ConfigError(msg)
    return value


def _require_bool(payload: typ.Mapping[str, typ.Any], key: str, default: bool) -> bool:
    value = payload.get(key, default)
    if not isinstance(value, bool):
        msg = f"'{key}' must be true or false."
        raise ConfigError(msg)
    return value


def _require_number(
    payload: typ.Mapping[str, typ.Any], key: str, default: float, *, minimum: float = 0
) -> float:
    value = payload.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"'{key}' must be a number."
        raise ConfigError(msg)
    if value < minimum:
        msg = f"'{key}' must be at least {minimum}."
        raise ConfigError(msg)
    return float(value)


def _require_int(
    payload: typ.Mapping[str, typ.Any], key: str, default: int, *, minimum: int = 0
) -> int:
    value = payload.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"'{key}' must be an integer."
        raise ConfigError(msg)
    if value < minimum:
        msg = f"'{key}' must be at least {minimum}."
        raise ConfigError(msg)
    return value


def _milliseconds(
    payload: typ.Mapping[str, typ.Any], key: str, default_seconds: float
) -> float:
    """Read a millisecond setting and return it in seconds."""
    return _require_number(payload, key, default_seconds * 1000) / 1000


__all__ = [
    "_milliseconds",
    "_optional_str",
    "_require_bool",
    "_require_int",
    "_require_number",
    "_require_str",
    "_section",
]
