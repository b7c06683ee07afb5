"""Path resolution for project-scoped config files."""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_DIR = ".tsformat"
CONFIG_FILE = "config.toml"


def resolve_project_root(explicit: Path | None = None) -> Path:
    """Resolve the project root that owns `.tsformat/config.toml`.

    Precedence:
    1. Explicit function argument.
    2. `TSFORMAT_PROJECT_ROOT` environment variable.
    3. Current directory / ancestors containing `.tsformat/` or `.git`.
    4. Current working directory.
    """

    if explicit is not None:
        return explicit.expanduser().resolve()

    env_root = os.getenv("TSFORMAT_PROJECT_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()

    cwd = Path.cwd().resolve()
    candidate = cwd
    while True:
        if (candidate / CONFIG_DIR).is_dir():
            return candidate
        # A .git file (worktree) or directory marks a repository boundary.
        if (candidate / ".git").exists():
            return candidate

        parent = candidate.parent
        if parent == candidate:
            break
        candidate = parent

    return cwd


def config_path(project_root: Path) -> Path:
    return project_root / CONFIG_DIR / CONFIG_FILE
