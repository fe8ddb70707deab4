"""File-backed activation flags shared across hook processes.

Each flag is a marker file: existence is the value, the content is an
advisory epoch timestamp. Writes are whole-file and removals tolerate a
missing file, so concurrent hook processes can race on the same marker
without locking. A lost update only delays a transition by one event.
"""

from __future__ import annotations

import time
from pathlib import Path

from vocal_lib.paths import StatePaths

__all__ = [
    'ActivationState',
    'MarkerFlag',
]


class MarkerFlag:
    """Boolean flag persisted as the presence of a file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def __repr__(self) -> str:
        return f'MarkerFlag({str(self.path)!r})'

    def exists(self) -> bool:
        return self.path.exists()

    def set(self, timestamp: int | None = None) -> None:
        """Create or overwrite the marker. Idempotent."""
        if timestamp is None:
            timestamp = int(time.time())
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(str(timestamp))

    def clear(self) -> None:
        """Remove the marker. No-op if already absent."""
        self.path.unlink(missing_ok=True)

    def consume(self) -> bool:
        """Remove the marker, reporting whether this call removed it.

        ``unlink`` succeeds for exactly one of several racing processes, so
        each ``set`` is observed at most once.
        """
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        return True

    def timestamp(self) -> int | None:
        """Timestamp written at creation, or None if absent or unparseable.

        Raises:
            OSError: If the marker exists but cannot be read.
        """
        try:
            content = self.path.read_text()
        except FileNotFoundError:
            return None
        try:
            return int(content.strip())
        except ValueError:
            return None


class ActivationState:
    """The three activation markers and the rules that combine them.

    Nothing is cached: every property reads the file system, so a change
    made by another process is visible on the next read.
    """

    def __init__(self, paths: StatePaths) -> None:
        self.hands_free = MarkerFlag(paths.hands_free_flag)
        self.emergency = MarkerFlag(paths.emergency_stop)
        self.cycle_trigger = MarkerFlag(paths.cycle_trigger)

    @property
    def hands_free_active(self) -> bool:
        # Emergency stop dominates unconditionally
        return self.hands_free.exists() and not self.emergency.exists()

    @property
    def emergency_stop_active(self) -> bool:
        return self.emergency.exists()

    @property
    def cycle_trigger_pending(self) -> bool:
        return self.cycle_trigger.exists()
