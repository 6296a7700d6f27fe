"""Application configuration and env loading."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from tilepuzzle.core.models import DEFAULT_COLUMNS, DEFAULT_ROWS


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = _resolve_env_path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files left-to-right; later files win.

    Default order: ``appdata/config/.env.app``, its ``.local`` override, then
    ``.env.app`` and ``.env.app.local`` in the working directory.
    """
    to_load = (
        tuple(paths)
        if paths is not None
        else (
            "appdata/config/.env.app",
            "appdata/config/.env.app.local",
            ".env.app",
            ".env.app.local",
        )
    )
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


@dataclass(frozen=True, slots=True)
class PuzzleSettings:
    """Immutable puzzle settings sourced from environment."""

    columns: int = DEFAULT_COLUMNS
    rows: int = DEFAULT_ROWS
    frame_interval_seconds: float = 1.0 / 60.0
    notify_delay_seconds: float = 0.5
    seed: int | None = None
    background: str = "#ffffff"


def load_puzzle_settings() -> PuzzleSettings:
    """Read ``TILEPUZZLE_*`` variables; malformed values fall back to defaults."""
    defaults = PuzzleSettings()
    return PuzzleSettings(
        columns=max(1, _int("TILEPUZZLE_COLUMNS", defaults.columns)),
        rows=max(1, _int("TILEPUZZLE_ROWS", defaults.rows)),
        frame_interval_seconds=max(
            0.0, _float("TILEPUZZLE_FRAME_INTERVAL_MS", defaults.frame_interval_seconds * 1000.0)
        )
        / 1000.0,
        notify_delay_seconds=max(
            0.0, _float("TILEPUZZLE_NOTIFY_DELAY_MS", defaults.notify_delay_seconds * 1000.0)
        )
        / 1000.0,
        seed=_optional_int("TILEPUZZLE_SEED"),
        background=os.getenv("TILEPUZZLE_BACKGROUND", defaults.background).strip()
        or defaults.background,
    )


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _resolve_env_path(path: str) -> Path:
    """Resolve env path from cwd, frozen exe dir, then project root."""
    candidate = Path(path)
    if candidate.exists():
        return candidate

    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            frozen_dir_candidate = Path(executable).resolve().parent / path
            if frozen_dir_candidate.exists():
                return frozen_dir_candidate

    # Fallback for IDE run configs with different working directory.
    project_root = Path(__file__).resolve().parents[2]
    return project_root / path
