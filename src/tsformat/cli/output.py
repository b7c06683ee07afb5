"""Output modes for command results: text, json and porcelain."""

from __future__ import annotations

import json
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Literal, TextIO, cast

from tsformat.lib.formatting import FormatContext, TextFormattable
from tsformat.lib.serialization import to_jsonable

OutputFormat = Literal["text", "json", "porcelain"]
OUTPUT_FORMATS: frozenset[str] = frozenset({"text", "json", "porcelain"})

type JSONScalar = str | int | float | bool | None
type JSONValue = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]


@dataclass(frozen=True, slots=True)
class OutputConfig:
    format: OutputFormat
    context: FormatContext = FormatContext()


def normalize_output_format(
    *,
    requested: str | None,
    json_mode: bool,
    porcelain_mode: bool,
) -> OutputFormat:
    """Resolve the output mode; `--json` wins over `--porcelain` over `--format`."""

    if json_mode:
        return "json"
    if porcelain_mode:
        return "porcelain"
    normalized = (requested or "text").strip().lower()
    if normalized not in OUTPUT_FORMATS:
        raise SystemExit("--format must be one of: text, json, porcelain")
    return cast("OutputFormat", normalized)


def _porcelain_field(key: str, value: JSONValue) -> str:
    if isinstance(value, dict | list):
        return f"{key}={json.dumps(value, sort_keys=True)}"
    return f"{key}={value}"


def porcelain_lines(payload: JSONValue) -> Iterator[str]:
    """One tab-separated `key=value` line per object, keys sorted."""

    items = payload if isinstance(payload, list) else [payload]
    for item in items:
        if isinstance(item, dict):
            yield "\t".join(_porcelain_field(key, item[key]) for key in sorted(item))
        else:
            yield str(item)


def render_output(value: Any, config: OutputConfig) -> str:
    """Render one command result in the configured mode, without a trailing newline."""

    if config.format == "text" and isinstance(value, TextFormattable):
        return value.format_text(config.context)
    payload = cast("JSONValue", to_jsonable(value))
    if config.format == "porcelain":
        return "\n".join(porcelain_lines(payload))
    if config.format == "json":
        return json.dumps(payload, sort_keys=True)
    # Text mode for results without format_text().
    return json.dumps(payload, sort_keys=True, indent=2)


def emit(value: Any, config: OutputConfig, stream: TextIO | None = None) -> None:
    print(render_output(value, config), file=stream if stream is not None else sys.stdout)
