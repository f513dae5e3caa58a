"""Engine settings: defaults, then {data_dir}/config.json, then environment.

config.json is a partial override; keys it doesn't name keep their
default and unknown keys are ignored. Environment variables win over
both. The .env file is loaded by the app factory and the launcher, not
here, so tests control the environment explicitly.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from buddy_pocket.caps import CapLimits

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path("data")

# field → environment variable
_ENV_VARS: dict[str, str] = {
    "data_dir": "BUDDY_DATA_DIR",
    "shared_dir": "BUDDY_SHARED_DIR",
    "dev_code": "BUDDY_DEV_CODE",
    "save_debounce_seconds": "BUDDY_SAVE_DEBOUNCE_SECONDS",
    "decay_rate_per_minute": "BUDDY_DECAY_RATE",
    "sync_url": "BUDDY_SYNC_URL",
    "sync_api_key": "BUDDY_SYNC_API_KEY",
}


class Settings(BaseModel):
    data_dir: Path = DEFAULT_DATA_DIR
    shared_dir: Path | None = None  # None = {data_dir}/shared
    dev_code: str = "ZETA_DEV_2026"
    save_debounce_seconds: float = 2.0
    decay_rate_per_minute: float = 0.002
    max_rewarded_sessions: int = 5
    max_rewarded_battles: int = 10
    max_gems_per_day: int = 15
    sync_url: str = ""
    sync_api_key: str = ""

    @property
    def resolved_shared_dir(self) -> Path:
        return self.shared_dir or self.data_dir / "shared"

    @property
    def cap_limits(self) -> CapLimits:
        return CapLimits(
            max_rewarded_sessions=self.max_rewarded_sessions,
            max_rewarded_battles=self.max_rewarded_battles,
            max_gems_per_day=self.max_gems_per_day,
        )


def _read_config_file(data_dir: Path) -> dict[str, Any]:
    path = data_dir / "config.json"
    if not path.is_file():
        return {}
    try:
        stored = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("ignoring unreadable config file %s: %s", path, e)
        return {}
    if not isinstance(stored, dict):
        logger.warning("ignoring config file %s: expected an object", path)
        return {}
    return {k: v for k, v in stored.items() if k in Settings.model_fields and k != "data_dir"}


def load_settings(
    data_dir: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    environ = os.environ if env is None else env

    resolved_dir = data_dir or Path(environ.get(_ENV_VARS["data_dir"], str(DEFAULT_DATA_DIR)))
    values: dict[str, Any] = {"data_dir": resolved_dir}
    values.update(_read_config_file(resolved_dir))
    for field, var in _ENV_VARS.items():
        if field == "data_dir":
            continue
        if environ.get(var):
            values[field] = environ[var]
    return Settings.model_validate(values)
