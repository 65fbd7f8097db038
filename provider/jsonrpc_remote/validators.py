"""Parameter checks shared by all handlers."""

from __future__ import annotations

from enum import Enum
from typing import Any

from .errors import InvalidParams


class ParamKind(str, Enum):
    """Kinds of JSON values a parameter can be required to have."""

    INTEGER = "integer"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: Any) -> ParamKind | None:
    """Return the kind of a decoded JSON value, or None for null/bool/float."""
    # bool is a subclass of int and must never pass as an integer
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return ParamKind.INTEGER
    if isinstance(value, str):
        return ParamKind.STRING
    if isinstance(value, list):
        return ParamKind.ARRAY
    if isinstance(value, dict):
        return ParamKind.OBJECT
    return None


def require_field(params: Any, key: str, kind: ParamKind) -> Any:
    """Return ``params[key]`` if present and of exactly the given kind.

    Raises:
        InvalidParams: if params is not an object, the key is missing, or the
            value has a different kind.
    """
    if not isinstance(params, dict) or key not in params:
        raise InvalidParams(key)
    value = params[key]
    if kind_of(value) is not kind:
        raise InvalidParams(key, f"parameter '{key}' must be of kind {kind.value}")
    return value


def require_int_list(params: Any, key: str) -> list[int]:
    """Return ``params[key]`` as a list of integers, validating every element."""
    values = require_field(params, key, ParamKind.ARRAY)
    for value in values:
        if kind_of(value) is not ParamKind.INTEGER:
            raise InvalidParams(key, f"parameter '{key}' must contain only integers")
    return list(values)


def optional_field(params: Any, key: str, kind: ParamKind, default: Any = None) -> Any:
    """Return ``params[key]`` when present (validated), else ``default``."""
    if not isinstance(params, dict) or key not in params:
        return default
    return require_field(params, key, kind)
