"""Environment-variable-based configuration for the CLI and weekly scheduler."""

from __future__ import annotations

import os
from pathlib import Path

LOG_LEVEL: str = os.environ.get("PLAN_LOG_LEVEL", "INFO").upper()
OUTPUT_DIR: Path = Path(os.environ.get("PLAN_OUTPUT_DIR", "plans")).expanduser()
REQUEST_PATH: Path = Path(
    os.environ.get("PLAN_REQUEST_PATH", "plan_request.json")
).expanduser()
SCHEDULER_DAY: str = os.environ.get("PLAN_SCHEDULER_DAY", "sun")
SCHEDULER_HOUR: int = int(os.environ.get("PLAN_SCHEDULER_HOUR", "18"))
SCHEDULER_MINUTE: int = int(os.environ.get("PLAN_SCHEDULER_MINUTE", "0"))
