"""Centralized file paths for hands-free state.

Every hook invocation is a fresh process, so these files are the only
state shared between them. Hook processes and the desktop app resolve the
same locations from the same state directory.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

__all__ = [
    'CYCLE_TRIGGER_NAME',
    'EMERGENCY_STOP_NAME',
    'HANDS_FREE_FLAG_NAME',
    'SESSION_REGISTRY_NAME',
    'StatePaths',
]

# Names stay stable so `touch ~/.vocal-emergency-stop` works as a manual kill switch
HANDS_FREE_FLAG_NAME = '.vocal-hands-free-active'
EMERGENCY_STOP_NAME = '.vocal-emergency-stop'
CYCLE_TRIGGER_NAME = '.vocal-cycle-trigger'
SESSION_REGISTRY_NAME = '.vocal-session-registry.json'


@dataclass(frozen=True, slots=True)
class StatePaths:
    """Persisted locations under one per-user state directory."""

    hands_free_flag: Path
    emergency_stop: Path
    cycle_trigger: Path
    session_registry: Path

    @classmethod
    def from_state_dir(cls, state_dir: Path) -> StatePaths:
        return cls(
            hands_free_flag=state_dir / HANDS_FREE_FLAG_NAME,
            emergency_stop=state_dir / EMERGENCY_STOP_NAME,
            cycle_trigger=state_dir / CYCLE_TRIGGER_NAME,
            session_registry=state_dir / SESSION_REGISTRY_NAME,
        )
