"""Engine configuration loaded from the environment.

Hook commands are written into the assistant's settings file, so the
environment is the only channel for per-user overrides. Nothing here is
read from disk.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import get_args

import pydantic

from vocal_lib.paths import StatePaths
from vocal_lib.schemas import StrictModel
from vocal_lib.types import LogLevel

__all__ = [
    'DEBUG_LOG_ENV',
    'LOG_LEVEL_ENV',
    'STATE_DIR_ENV',
    'EngineConfig',
    'load_config',
]

STATE_DIR_ENV = 'VOCAL_STATE_DIR'
LOG_LEVEL_ENV = 'VOCAL_LOG_LEVEL'
DEBUG_LOG_ENV = 'VOCAL_DEBUG_LOG'


class EngineConfig(StrictModel):
    """Resolved engine settings."""

    state_dir: Path
    log_level: LogLevel = 'INFO'
    debug_log_path: Path | None = None

    @property
    def paths(self) -> StatePaths:
        return StatePaths.from_state_dir(self.state_dir)


def load_config(environ: Mapping[str, str] | None = None) -> EngineConfig:
    """Build config from environment variables.

    Raises:
        ValueError: If a variable is set to an unusable value.
    """
    env = os.environ if environ is None else environ

    state_dir = env.get(STATE_DIR_ENV, '').strip()
    log_level = env.get(LOG_LEVEL_ENV, 'INFO').strip().upper() or 'INFO'
    debug_log = env.get(DEBUG_LOG_ENV, '').strip()

    if log_level not in get_args(LogLevel.__value__):
        raise ValueError(f'Invalid {LOG_LEVEL_ENV}: {log_level!r}')

    try:
        return EngineConfig(
            state_dir=Path(state_dir).expanduser() if state_dir else Path.home(),
            log_level=log_level,
            debug_log_path=Path(debug_log).expanduser() if debug_log else None,
        )
    except pydantic.ValidationError as e:
        raise ValueError(f'Invalid engine configuration: {e}') from e
