"""Delivering the next prompt into the assistant's terminal.

The engine does not drive terminals itself. A ``TextInjector`` (AppleScript,
tmux send-keys, clipboard paste, ...) does the typing; this module decides
whether injection is allowed and which session to aim at.
"""

from __future__ import annotations

import logging
from typing import Protocol

from vocal_lib.controller import HandsFreeController
from vocal_lib.schemas import SessionInfo

__all__ = [
    'HandsFreeInactiveError',
    'TextInjector',
    'check_cycle_trigger',
    'inject_prompt',
]

logger = logging.getLogger(__name__)


class HandsFreeInactiveError(RuntimeError):
    """Raised when injection is requested while hands-free mode is off."""

    def __init__(self) -> None:
        super().__init__('Hands-free mode is not active')


class TextInjector(Protocol):
    """Terminal-text-injection collaborator.

    Any object with a compatible ``inject`` method satisfies this protocol.
    """

    def inject(self, text: str, session: SessionInfo | None) -> bool:
        """Type ``text`` into the session's terminal and submit it.

        Args:
            text: Prompt to deliver.
            session: Last recorded session, or None to target the frontmost
                terminal.

        Returns:
            True if the text was delivered.
        """
        ...


def inject_prompt(text: str, injector: TextInjector, controller: HandsFreeController) -> bool:
    """Deliver a prompt to the most recent session.

    Raises:
        HandsFreeInactiveError: If hands-free mode is off or emergency-stopped.
    """
    if not controller.state.hands_free_active:
        raise HandsFreeInactiveError()

    session = controller.registry.load()
    if session is not None and not session.is_alive():
        logger.info(f'Session {session.session_id} process is gone; targeting frontmost terminal')
        session = None

    logger.info(f'Injecting prompt ({len(text)} chars)')
    delivered = injector.inject(text, session)
    if not delivered:
        logger.warning('Prompt injection failed')
    return delivered


def check_cycle_trigger(controller: HandsFreeController) -> bool:
    """Consume a pending cycle trigger; True means restart the capture loop."""
    if controller.consume_cycle_trigger():
        logger.info('Cycle trigger detected; restarting recording')
        return True
    return False
