"""Configuration discovery and parsing helpers."""

from tsformat.lib.config._paths import config_path, resolve_project_root
from tsformat.lib.config.settings import TsformatConfig, load_config

__all__ = ["TsformatConfig", "config_path", "load_config", "resolve_project_root"]
