"""Single-slot registry of the most recent coding-assistant session.

Written by the Stop hook, read when injecting the next prompt so the text
lands in the right terminal. Each save overwrites the previous record.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from collections.abc import Mapping
from pathlib import Path

import psutil
import pydantic

from vocal_lib.schemas import SessionInfo

__all__ = [
    'SessionRegistry',
    'find_assistant_pid',
]

logger = logging.getLogger(__name__)

# Parent-chain depth searched for the assistant process
_MAX_PROCESS_DEPTH = 20


class SessionRegistry:
    """JSON-file registry holding one SessionInfo record."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def capture(
        self,
        session_id: str,
        cwd: str,
        environ: Mapping[str, str] | None = None,
    ) -> SessionInfo:
        """Describe the current session from the hook's environment."""
        env = os.environ if environ is None else environ
        return SessionInfo(
            session_id=session_id,
            terminal_pid=find_assistant_pid(),
            term_session=env.get('TERM_SESSION_ID', ''),
            iterm_session=env.get('ITERM_SESSION_ID', ''),
            tmux=env.get('TMUX', ''),
            tmux_pane=env.get('TMUX_PANE', ''),
            cwd=cwd,
            timestamp=int(time.time()),
        )

    def save(self, info: SessionInfo) -> None:
        """Overwrite the registry using temp file + rename.

        Raises:
            OSError: If the registry cannot be written.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)

        # Temp file in the same directory so the rename is atomic
        temp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(mode='w', dir=self.path.parent, delete=False, suffix='.tmp') as f:
                temp_path = Path(f.name)
                json.dump(info.model_dump(mode='json'), f, indent=2)
            temp_path.replace(self.path)
        except BaseException:
            # No partial record left next to the registry
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            raise

    def load(self) -> SessionInfo | None:
        """Load the last saved session.

        Missing, unreadable or corrupt records all read as None.
        """
        try:
            return SessionInfo.model_validate_json(self.path.read_text())
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError, pydantic.ValidationError) as e:
            logger.warning(f'Ignoring unreadable session registry {self.path}: {e}')
            return None


def find_assistant_pid() -> int | None:
    """Find the coding assistant's PID by walking up the process tree.

    Falls back to the direct parent when no ``claude`` process is found.
    """
    try:
        process = psutil.Process().parent()
        fallback = process.pid if process is not None else None
        for _ in range(_MAX_PROCESS_DEPTH):
            if process is None:
                break
            if 'claude' in process.name().lower():
                return process.pid
            process = process.parent()
    except psutil.Error as e:
        logger.debug(f'Process tree walk failed: {e}')
        return os.getppid()
    return fallback
