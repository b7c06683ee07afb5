"""Configuration inspection operations."""

from __future__ import annotations

import asyncio
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal, cast

from tsformat.lib.config._paths import config_path, resolve_project_root
from tsformat.lib.config.settings import load_config, read_config_file
from tsformat.lib.ops.registry import OperationSpec, operation
from tsformat.lib.serialization import to_jsonable

if TYPE_CHECKING:
    from tsformat.lib.formatting import FormatContext

type ConfigSource = Literal["builtin", "file", "env var"]


@dataclass(frozen=True, slots=True)
class _ConfigKeySpec:
    section: str
    file_key: str
    field_name: str
    env_var: str

    @property
    def canonical_key(self) -> str:
        return f"{self.section}.{self.file_key}"


_CONFIG_KEY_SPECS: tuple[_ConfigKeySpec, ...] = (
    _ConfigKeySpec("defaults", "policy", "policy", "TSFORMAT_POLICY"),
    _ConfigKeySpec("output", "newline", "newline", "TSFORMAT_NEWLINE"),
    _ConfigKeySpec("output", "flush", "flush", "TSFORMAT_FLUSH"),
    _ConfigKeySpec("arguments", "typed_arguments", "typed_arguments", "TSFORMAT_TYPED_ARGUMENTS"),
    _ConfigKeySpec("arguments", "locale", "locale", "TSFORMAT_LOCALE"),
)


@dataclass(frozen=True, slots=True)
class ConfigShowInput:
    project_root: str | None = None


@dataclass(frozen=True, slots=True)
class ConfigResolvedValue:
    key: str
    value: object
    source: ConfigSource
    env_var: str | None = None


@dataclass(frozen=True, slots=True)
class ConfigShowOutput:
    path: str
    values: tuple[ConfigResolvedValue, ...]

    def format_text(self, ctx: FormatContext | None = None) -> str:
        _ = ctx
        lines = [f"path: {self.path}"]
        for item in self.values:
            source_note = item.source
            if item.env_var is not None:
                source_note = f"{source_note} ({item.env_var})"
            value = _format_value_for_text(item.value)
            lines.append(f"{item.key}: {value} [source: {source_note}]")
        return "\n".join(lines)


def _format_value_for_text(value: object) -> str:
    payload = to_jsonable(value)
    if isinstance(payload, str):
        return payload
    return json.dumps(payload)


def _source_for_key(
    spec: _ConfigKeySpec, payload: dict[str, object]
) -> tuple[ConfigSource, str | None]:
    if os.getenv(spec.env_var) is not None:
        return "env var", spec.env_var
    section = payload.get(spec.section)
    if isinstance(section, dict) and spec.file_key in cast("dict[str, object]", section):
        return "file", None
    return "builtin", None


def config_show_sync(payload: ConfigShowInput) -> ConfigShowOutput:
    explicit = Path(payload.project_root) if payload.project_root else None
    project_root = resolve_project_root(explicit)
    resolved = load_config(project_root)
    file_payload = read_config_file(project_root)

    values: list[ConfigResolvedValue] = []
    for spec in _CONFIG_KEY_SPECS:
        source, env_var = _source_for_key(spec, file_payload)
        values.append(
            ConfigResolvedValue(
                key=spec.canonical_key,
                value=getattr(resolved, spec.field_name),
                source=source,
                env_var=env_var,
            )
        )
    return ConfigShowOutput(path=config_path(project_root).as_posix(), values=tuple(values))


async def config_show(payload: ConfigShowInput) -> ConfigShowOutput:
    return await asyncio.to_thread(config_show_sync, payload)


operation(
    OperationSpec[ConfigShowInput, ConfigShowOutput](
        name="config.show",
        handler=config_show,
        sync_handler=config_show_sync,
        input_type=ConfigShowInput,
        output_type=ConfigShowOutput,
        cli_group="config",
        cli_name="show",
        mcp_name="config_show",
        description="Show resolved config values with their sources.",
    )
)
