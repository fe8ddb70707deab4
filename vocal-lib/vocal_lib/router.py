"""Hook event routing for hands-free mode.

One hook process handles one event. Every handler is a no-op unless
hands-free mode is active. Only PreToolUse produces machine-readable output;
everything else is diagnostic logging on stderr plus, for Stop, arming the
next capture cycle.

State I/O failures never abort a handler: a hook that crashes or hangs
stalls the assistant, so failures are logged and the handler returns.

See: https://code.claude.com/docs/en/hooks
"""

from __future__ import annotations

__all__ = [
    'EVENT_NAMES',
    'HANDLERS',
    'dispatch',
    'handle_post_tool_use',
    'handle_pre_tool_use',
    'handle_stop',
    'handle_user_prompt_submit',
]

import logging
from collections.abc import Callable, Mapping

from typing_extensions import TypeAliasType

from vocal_lib import safety
from vocal_lib.controller import HandsFreeController
from vocal_lib.safety import PermissionLevel
from vocal_lib.schemas import HookInput, PreToolUseDecision, PreToolUseHookOutput
from vocal_lib.types import HookEventName, HookKind

logger = logging.getLogger(__name__)

HookHandler = TypeAliasType('HookHandler', Callable[[HookInput, HandsFreeController], PreToolUseHookOutput | None])


def handle_pre_tool_use(hook: HookInput, controller: HandsFreeController) -> PreToolUseHookOutput | None:
    """Evaluate the proposed tool use; return a decision for ALLOW or BLOCK.

    VALIDATE returns None so the assistant's own confirmation prompt runs.
    """
    tool_name = hook.tool_name
    level = safety.evaluate(tool_name, hook.tool_input)

    if level is PermissionLevel.VALIDATE:
        logger.info(f'Hands-free mode: {tool_name} operation requires user validation')
        return None

    if level is PermissionLevel.ALLOW:
        return PreToolUseHookOutput(
            hook_specific_output=PreToolUseDecision(
                permission_decision='allow',
                permission_decision_reason=f'Hands-free mode: {tool_name} operation auto-approved',
            ),
            suppress_output=safety.should_suppress_output(tool_name, level),
        )

    logger.info(f'Hands-free mode: {tool_name} operation blocked')
    return PreToolUseHookOutput(
        hook_specific_output=PreToolUseDecision(
            permission_decision='block',
            permission_decision_reason=f'Hands-free mode: {tool_name} operation blocked for safety',
        ),
    )


def handle_post_tool_use(hook: HookInput, controller: HandsFreeController) -> None:
    logger.info(f'Hands-free mode: {hook.tool_name} operation completed')


def handle_stop(hook: HookInput, controller: HandsFreeController) -> None:
    """Record the session for prompt targeting and arm the next cycle."""
    # Re-entrant Stop: arming again would loop forever
    if hook.stop_hook_active:
        logger.debug('Stop hook already active; skipping cycle')
        return

    try:
        controller.registry.save(controller.registry.capture(hook.session_id, hook.cwd))
    except OSError as e:
        logger.warning(f'Failed to save session info: {e}')

    if controller.is_cycle_limit_exceeded():
        logger.warning('Hands-free mode: cycle limit reached; not arming another cycle')
        return

    try:
        controller.trigger_cycle()
    except OSError as e:
        logger.warning(f'Failed to trigger recording restart: {e}')
        return
    logger.info('Hands-free mode: Triggered recording restart for next cycle')


def handle_user_prompt_submit(hook: HookInput, controller: HandsFreeController) -> None:
    logger.info('Hands-free mode: User prompt submitted, preparing for Claude Code processing')


HANDLERS: Mapping[HookKind, HookHandler] = {
    'pre-tool-use': handle_pre_tool_use,
    'post-tool-use': handle_post_tool_use,
    'stop': handle_stop,
    'user-prompt-submit': handle_user_prompt_submit,
}

EVENT_NAMES: Mapping[HookKind, HookEventName] = {
    'pre-tool-use': 'PreToolUse',
    'post-tool-use': 'PostToolUse',
    'stop': 'Stop',
    'user-prompt-submit': 'UserPromptSubmit',
}


def dispatch(kind: HookKind, hook: HookInput, controller: HandsFreeController) -> PreToolUseHookOutput | None:
    """Route one event to its handler if hands-free mode is active."""
    if not _is_active(controller):
        return None

    expected = EVENT_NAMES[kind]
    if hook.hook_event_name and hook.hook_event_name != expected:
        logger.warning(f'Handling {hook.hook_event_name!r} payload as {expected}')

    return HANDLERS[kind](hook, controller)


def _is_active(controller: HandsFreeController) -> bool:
    # Unreadable state counts as inactive: the assistant falls back to asking
    try:
        return controller.state.hands_free_active
    except OSError as e:
        logger.warning(f'Could not read hands-free state, treating as inactive: {e}')
        return False
