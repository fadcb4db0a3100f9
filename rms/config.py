"""Runtime configuration defaults for persistence and logging."""

from __future__ import annotations

import os

SNAPSHOT_PATH = "data/rms_data.db"
# Bump when the snapshot layout changes; older files then load as empty.
SNAPSHOT_FORMAT = 1

LOG_LEVEL = "INFO"
LOG_DIR = "logs"

_SNAPSHOT_PATH_ENV = "RMS_SNAPSHOT_PATH"
_LOG_LEVEL_ENV = "RMS_LOG_LEVEL"


def resolve_snapshot_path() -> str:
    """Return RMS_SNAPSHOT_PATH if set, else SNAPSHOT_PATH."""
    return os.environ.get(_SNAPSHOT_PATH_ENV, "").strip() or SNAPSHOT_PATH


def resolve_log_level() -> str:
    return os.environ.get(_LOG_LEVEL_ENV, "").strip().upper() or LOG_LEVEL
