"""Environment-variable-based configuration for the nightly scheduler."""

from __future__ import annotations

import os
from pathlib import Path

STORE_DIR: Path = Path(os.environ.get("PERIODIZATION_STORE_DIR", "~/.periodization")).expanduser()
NIGHTLY_HOUR: int = int(os.environ.get("SCHEDULER_HOUR", "3"))
NIGHTLY_MINUTE: int = int(os.environ.get("SCHEDULER_MINUTE", "0"))
MASS_UNIT: str = os.environ.get("PERIODIZATION_MASS_UNIT", "kg")
BASE_INCREMENT: float = float(os.environ.get("PERIODIZATION_BASE_INCREMENT", "2.5"))
LOOKBACK_DAYS: int = int(os.environ.get("PERIODIZATION_LOOKBACK_DAYS", "42"))
MAX_CONFLICT_RETRIES: int = int(os.environ.get("PERIODIZATION_MAX_RETRIES", "3"))
