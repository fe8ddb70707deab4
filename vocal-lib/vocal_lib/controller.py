"""Hands-free mode transitions, emergency stop and cycle triggers.

All transitions go through the marker files in ``vocal_lib.state``, so the
desktop app, the CLI and hook processes all see the same mode.
"""

from __future__ import annotations

import logging
import time

from vocal_lib.config import EngineConfig, load_config
from vocal_lib.schemas import HandsFreeStatus
from vocal_lib.session_registry import SessionRegistry
from vocal_lib.state import ActivationState

__all__ = [
    'CYCLE_STALENESS_SECONDS',
    'MAX_CYCLES',
    'HandsFreeController',
]

logger = logging.getLogger(__name__)

CYCLE_STALENESS_SECONDS = 300
MAX_CYCLES = 10


class HandsFreeController:
    """Entry point for every state change the engine makes.

    Usage:
        controller = HandsFreeController.from_config(load_config())
        controller.activate()
        if controller.state.hands_free_active:
            ...
    """

    def __init__(self, state: ActivationState, registry: SessionRegistry) -> None:
        self.state = state
        self.registry = registry

    @classmethod
    def from_config(cls, config: EngineConfig | None = None) -> HandsFreeController:
        config = config or load_config()
        paths = config.paths
        return cls(ActivationState(paths), SessionRegistry(paths.session_registry))

    # -- Mode transitions --

    def activate(self) -> None:
        """Turn hands-free mode on. Idempotent.

        Reads as inactive until any emergency stop is cleared.
        """
        self.state.hands_free.set()
        if self.state.emergency_stop_active:
            logger.warning('Hands-free marker written but emergency stop is set; mode stays inactive')
        else:
            logger.info('Hands-free mode activated')

    def deactivate(self) -> None:
        """Turn hands-free mode off and drop any pending cycle trigger.

        Both markers are cleared even if the first removal fails; the first
        error is re-raised afterwards.
        """
        try:
            self.state.hands_free.clear()
        finally:
            self.state.cycle_trigger.clear()
        logger.info('Hands-free mode deactivated')

    def emergency_stop(self) -> None:
        """Latch the emergency stop, then fully deactivate.

        Deactivation runs even when the stop marker cannot be written.

        Raises:
            OSError: If the stop marker or a deactivation step failed.
        """
        try:
            self.state.emergency.set()
        except OSError as e:
            logger.error(f'Could not write emergency stop marker: {e}')
            raise
        finally:
            self.deactivate()
        logger.warning('Emergency stop triggered; hands-free mode disabled')

    def clear_emergency_stop(self) -> None:
        """Release the emergency stop. Does not re-activate."""
        self.state.emergency.clear()
        logger.info('Emergency stop cleared')

    # -- Cycle triggers --

    def trigger_cycle(self) -> None:
        """Ask the capture loop to restart once."""
        self.state.cycle_trigger.set()

    def consume_cycle_trigger(self) -> bool:
        """Read-and-clear the cycle trigger. True at most once per trigger."""
        return self.state.cycle_trigger.consume()

    def cycle_count(self, now: float | None = None) -> int:
        """Approximate cycle count derived from the trigger's age.

        Not a real counter: 1 while the trigger is younger than the staleness
        window, 0 when it is absent, stale or unparseable.

        Raises:
            OSError: If the trigger exists but cannot be read.
        """
        written_at = self.state.cycle_trigger.timestamp()
        if written_at is None:
            return 0
        elapsed = (time.time() if now is None else now) - written_at
        if elapsed > CYCLE_STALENESS_SECONDS:
            return 0
        return 1

    def is_cycle_limit_exceeded(self) -> bool:
        """True when the automation loop should be forcibly halted."""
        try:
            return self.cycle_count() >= MAX_CYCLES
        except OSError as e:
            logger.warning(f'Could not read cycle trigger: {e}')
            return False

    # -- Reporting --

    def status(self) -> HandsFreeStatus:
        try:
            cycle_count = self.cycle_count()
        except OSError:
            cycle_count = 0
        try:
            activated_at = self.state.hands_free.timestamp()
        except OSError:
            activated_at = None
        return HandsFreeStatus(
            active=self.state.hands_free_active,
            emergency_stop=self.state.emergency_stop_active,
            cycle_pending=self.state.cycle_trigger_pending,
            cycle_count=cycle_count,
            activated_at=activated_at,
        )
