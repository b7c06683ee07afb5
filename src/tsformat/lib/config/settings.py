"""Project-level defaults for the command line and MCP surfaces."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Literal, cast

from tsformat.lib.config._paths import config_path

logger = logging.getLogger(__name__)

type PolicyName = Literal["report", "abort"]

POLICY_NAMES: frozenset[str] = frozenset({"report", "abort"})
_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class TsformatConfig:
    """Resolved configuration for tsformat surfaces."""

    policy: PolicyName = "report"
    newline: bool = True
    flush: bool = False
    typed_arguments: bool = True
    locale: str | None = None


_SECTION_KEY_MAP: dict[str, dict[str, str]] = {
    "defaults": {
        "policy": "policy",
    },
    "output": {
        "newline": "newline",
        "flush": "flush",
    },
    "arguments": {
        "typed_arguments": "typed_arguments",
        "typed": "typed_arguments",
        "locale": "locale",
    },
}

_ENV_OVERRIDE_MAP: dict[str, str] = {
    "TSFORMAT_POLICY": "policy",
    "TSFORMAT_NEWLINE": "newline",
    "TSFORMAT_FLUSH": "flush",
    "TSFORMAT_TYPED_ARGUMENTS": "typed_arguments",
    "TSFORMAT_LOCALE": "locale",
}

_BOOL_FIELDS = frozenset({"newline", "flush", "typed_arguments"})


def _coerce_policy(raw_value: str, source: str) -> PolicyName:
    normalized = raw_value.strip().lower()
    if normalized not in POLICY_NAMES:
        raise ValueError(
            f"Invalid value for '{source}': expected one of {sorted(POLICY_NAMES)}, "
            f"got {raw_value!r}."
        )
    return cast("PolicyName", normalized)


def _coerce_file_value(*, field_name: str, raw_value: object, source: str) -> object:
    if field_name in _BOOL_FIELDS:
        if not isinstance(raw_value, bool):
            raise ValueError(
                f"Invalid value for '{source}': expected bool, got "
                f"{type(raw_value).__name__} ({raw_value!r})."
            )
        return raw_value

    if not isinstance(raw_value, str):
        raise ValueError(
            f"Invalid value for '{source}': expected str, got "
            f"{type(raw_value).__name__} ({raw_value!r})."
        )
    if field_name == "policy":
        return _coerce_policy(raw_value, source)
    normalized = raw_value.strip()
    if not normalized:
        raise ValueError(f"Invalid value for '{source}': expected non-empty string.")
    return normalized


def _coerce_env_value(*, field_name: str, raw_value: str, env_name: str) -> object:
    if field_name in _BOOL_FIELDS:
        normalized = raw_value.strip().lower()
        if normalized in _TRUE_STRINGS:
            return True
        if normalized in _FALSE_STRINGS:
            return False
        raise ValueError(
            f"Invalid environment override '{env_name}': expected bool, got {raw_value!r}."
        )
    if field_name == "policy":
        return _coerce_policy(raw_value, env_name)

    normalized = raw_value.strip()
    # An empty locale override means "no locale".
    return normalized or None


def _default_values() -> dict[str, object]:
    defaults = TsformatConfig()
    return {field.name: getattr(defaults, field.name) for field in fields(TsformatConfig)}


def _apply_toml_payload(
    *,
    values: dict[str, object],
    payload: dict[str, object],
    path: Path,
) -> None:
    for key, raw_value in payload.items():
        section_map = _SECTION_KEY_MAP.get(key)
        if section_map is None:
            logger.warning("Ignoring unknown tsformat config key '%s'.", key)
            continue
        if not isinstance(raw_value, dict):
            raise ValueError(f"Invalid value for '{key}' in '{path}': expected table.")
        for section_key, section_value in cast("dict[str, object]", raw_value).items():
            field_name = section_map.get(section_key)
            if field_name is None:
                logger.warning(
                    "Ignoring unknown tsformat config key '%s.%s'.",
                    key,
                    section_key,
                )
                continue
            values[field_name] = _coerce_file_value(
                field_name=field_name,
                raw_value=section_value,
                source=f"{key}.{section_key}",
            )


def _apply_env_overrides(values: dict[str, object]) -> None:
    for env_name, field_name in _ENV_OVERRIDE_MAP.items():
        raw_value = os.getenv(env_name)
        if raw_value is None:
            continue
        values[field_name] = _coerce_env_value(
            field_name=field_name,
            raw_value=raw_value,
            env_name=env_name,
        )


def _build_config(values: dict[str, object]) -> TsformatConfig:
    return TsformatConfig(
        policy=cast("PolicyName", values["policy"]),
        newline=cast("bool", values["newline"]),
        flush=cast("bool", values["flush"]),
        typed_arguments=cast("bool", values["typed_arguments"]),
        locale=cast("str | None", values["locale"]),
    )


def read_config_file(project_root: Path) -> dict[str, object]:
    """Return the raw TOML payload, or an empty mapping when there is no file."""

    path = config_path(project_root)
    if not path.is_file():
        return {}
    return cast("dict[str, object]", tomllib.loads(path.read_text(encoding="utf-8")))


def load_config(project_root: Path) -> TsformatConfig:
    """Load `.tsformat/config.toml` and apply environment overrides."""

    values = _default_values()
    payload = read_config_file(project_root)
    if payload:
        _apply_toml_payload(values=values, payload=payload, path=config_path(project_root))

    _apply_env_overrides(values)
    return _build_config(values)
