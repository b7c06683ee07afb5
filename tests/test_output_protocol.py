"""Every registered operation output must render as text and as JSON.

A new output type without format_text() would silently fall back to
pretty-printed JSON in text mode.
"""

from __future__ import annotations

import dataclasses
import inspect
import json
import types
from typing import Any, get_args, get_origin, get_type_hints

import pytest

from tsformat.lib.formatting import FormatContext, TextFormattable
from tsformat.lib.ops.registry import OperationSpec, get_all_operations
from tsformat.lib.serialization import to_jsonable

_PLACEHOLDERS: dict[Any, Any] = {str: "", int: 0, float: 0.0, bool: False, object: None}


def _placeholder(annotation: Any) -> Any:
    if annotation in _PLACEHOLDERS:
        return _PLACEHOLDERS[annotation]
    origin = get_origin(annotation)
    if origin is types.UnionType:
        args = get_args(annotation)
        return None if type(None) in args else _placeholder(args[0])
    if origin is tuple:
        return ()
    if origin is list:
        return []
    if origin is dict:
        return {}
    return ""


def _minimal_instance(output_type: type[Any]) -> Any:
    """Fill only the required fields of an output dataclass."""

    hints = get_type_hints(output_type)
    kwargs = {
        item.name: _placeholder(hints.get(item.name))
        for item in dataclasses.fields(output_type)
        if item.default is dataclasses.MISSING and item.default_factory is dataclasses.MISSING
    }
    return output_type(**kwargs)


_OPERATIONS = sorted(get_all_operations(), key=lambda spec: spec.name)


@pytest.mark.parametrize("spec", _OPERATIONS, ids=lambda spec: spec.name)
def test_output_type_is_text_formattable(spec: OperationSpec[Any, Any]) -> None:
    assert dataclasses.is_dataclass(spec.output_type)
    instance = _minimal_instance(spec.output_type)

    assert isinstance(instance, TextFormattable), (
        f"{spec.output_type.__name__} (from {spec.name}) does not implement format_text()"
    )


@pytest.mark.parametrize("spec", _OPERATIONS, ids=lambda spec: spec.name)
def test_format_text_accepts_format_context(spec: OperationSpec[Any, Any]) -> None:
    params = list(inspect.signature(spec.output_type.format_text).parameters)

    assert params[:2] == ["self", "ctx"]


@pytest.mark.parametrize("spec", _OPERATIONS, ids=lambda spec: spec.name)
def test_minimal_output_renders_text_and_json(spec: OperationSpec[Any, Any]) -> None:
    instance = _minimal_instance(spec.output_type)

    assert isinstance(instance.format_text(FormatContext()), str)
    assert isinstance(json.dumps(to_jsonable(instance)), str)
