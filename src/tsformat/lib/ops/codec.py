"""Payload coercion between untyped tool inputs and operation dataclasses."""

from __future__ import annotations

import inspect
import types
from collections.abc import Mapping
from dataclasses import MISSING, Field, fields, is_dataclass
from typing import Any, TypeVar, Union, cast, get_args, get_origin, get_type_hints

PayloadT = TypeVar("PayloadT")

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})


def normalize_optional(annotation: Any) -> tuple[Any, bool]:
    """Unwrap `T | None`; return the inner type and whether None was allowed."""

    origin = get_origin(annotation)
    if origin is types.UnionType or origin is Union:
        args = get_args(annotation)
        non_none = [arg for arg in args if arg is not type(None)]
        if len(non_none) == 1 and len(non_none) != len(args):
            return non_none[0], True
    return annotation, False


def coerce_scalar(annotation: Any, value: object) -> object:
    normalized, _ = normalize_optional(annotation)
    if value is None:
        return None
    if normalized is str:
        return str(value)
    if normalized is bool:
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return bool(value)
    if normalized is int:
        return int(cast("Any", value))
    if normalized is float:
        return float(cast("Any", value))
    return value


def _coerce_field(annotation: Any, value: object) -> object:
    normalized, _ = normalize_optional(annotation)
    origin = get_origin(normalized)
    if origin in {list, tuple} and isinstance(value, list | tuple):
        item_type = get_args(normalized)[0] if get_args(normalized) else Any
        items = [coerce_scalar(item_type, item) for item in cast("list[object]", value)]
        return tuple(items) if origin is tuple else items
    return coerce_scalar(annotation, value)


def _field_default(field: Field[Any]) -> object:
    if field.default is not MISSING:
        return field.default
    if field.default_factory is not MISSING:
        return field.default_factory()
    return MISSING


def coerce_input_payload(payload_type: type[PayloadT], raw_input: object) -> PayloadT:
    """Build `payload_type` from a mapping of loosely typed values."""

    if not is_dataclass(payload_type):
        return payload_type()

    if raw_input is None:
        data: dict[str, object] = {}
    elif isinstance(raw_input, Mapping):
        data = {str(key): item for key, item in cast("Mapping[object, object]", raw_input).items()}
    else:
        raise TypeError(f"Tool input must be an object, got {type(raw_input).__name__}")

    hints = get_type_hints(payload_type)
    kwargs: dict[str, object] = {}
    for field in fields(payload_type):
        annotation = hints.get(field.name, Any)
        if field.name in data:
            kwargs[field.name] = _coerce_field(annotation, data[field.name])
            continue
        default = _field_default(field)
        if default is MISSING:
            raise TypeError(f"Missing required field '{field.name}'")
        kwargs[field.name] = default

    return cast("PayloadT", payload_type(**kwargs))


def signature_from_dataclass(payload_type: type[object]) -> inspect.Signature:
    """Keyword-only signature mirroring the dataclass fields, for MCP tool schemas."""

    if not is_dataclass(payload_type):
        return inspect.Signature(parameters=[])

    hints = get_type_hints(payload_type, include_extras=True)
    parameters: list[inspect.Parameter] = []
    for field in fields(payload_type):
        default = _field_default(field)
        parameters.append(
            inspect.Parameter(
                name=field.name,
                kind=inspect.Parameter.KEYWORD_ONLY,
                default=inspect.Parameter.empty if default is MISSING else default,
                annotation=hints.get(field.name, field.type),
            )
        )
    return inspect.Signature(parameters=parameters)
