"""App-data paths for runtime output."""

from __future__ import annotations

import os
import sys
from pathlib import Path


def resolve_app_root() -> Path:
    """Resolve the directory the app runs from."""
    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            return Path(executable).resolve().parent
    return Path(__file__).resolve().parents[2]


def resolve_app_data_root() -> Path:
    """Resolve app-data root; relative overrides are anchored at the app root."""
    configured = os.getenv("TILEPUZZLE_APP_DATA_DIR", "").strip()
    if configured:
        candidate = Path(configured)
        if candidate.is_absolute():
            return candidate
        return resolve_app_root() / candidate
    return resolve_app_root() / "appdata"


def resolve_logs_dir() -> Path:
    """Resolve logs directory, honouring ``TILEPUZZLE_LOG_DIR``."""
    configured = os.getenv("TILEPUZZLE_LOG_DIR", "").strip()
    if configured:
        candidate = Path(configured)
        if candidate.is_absolute():
            return candidate
        return resolve_app_data_root() / candidate
    return resolve_app_data_root() / "logs"
