"""Fill a dataclass of options from ``--name value`` command-line arguments."""

from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from .errors import LambdaError

T = TypeVar("T")

_TYPE_NAMES: dict[str, type] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
}


def _resolve_type(field: dataclasses.Field, defaults: Any) -> Any:
    """Find the type of a field, whether its annotation is a type or a name."""
    if isinstance(field.type, type):
        return field.type
    if isinstance(field.type, str) and field.type in _TYPE_NAMES:
        return _TYPE_NAMES[field.type]
    default = getattr(defaults, field.name, None)
    if default is not None:
        return type(default)
    return field.type


def _convert(value: str, member_type: Any) -> Any:
    if member_type is str:
        return value
    if member_type is bool:
        if value == "1":
            return True
        if value == "0":
            return False
        raise ValueError(value)
    if not callable(member_type):
        raise TypeError(member_type)
    return member_type(value)


def parse_options(options_type: type[T], arguments: Sequence[str]) -> T:
    """Build ``options_type`` with defaults, overridden by ``--field value`` pairs.

    For each field the first matching ``--field`` argument is used; the
    argument after it is its value.
    """
    if not (isinstance(options_type, type) and dataclasses.is_dataclass(options_type)):
        raise TypeError("parse_options needs a dataclass type")

    defaults = options_type()
    arguments = list(arguments)
    changes: dict[str, Any] = {}

    for field in dataclasses.fields(options_type):
        flag = f"--{field.name}"
        try:
            position = arguments.index(flag)
        except ValueError:
            continue

        if position + 1 == len(arguments):
            raise LambdaError(f"Missing option value for {flag}")

        value = arguments[position + 1]
        member_type = _resolve_type(field, defaults)
        try:
            changes[field.name] = _convert(value, member_type)
        except (TypeError, ValueError) as exc:
            type_name = getattr(member_type, "__name__", str(member_type))
            raise LambdaError(f"Failed to parse option {flag} to {type_name}") from exc

    return dataclasses.replace(defaults, **changes)