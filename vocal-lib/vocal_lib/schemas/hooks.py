"""Claude Code hook input/output schemas for the hands-free engine.

See: https://code.claude.com/docs/en/hooks
"""

from __future__ import annotations

from typing import Any, Literal

import psutil
import pydantic

from vocal_lib.types import PermissionDecision


class StrictModel(pydantic.BaseModel):
    """Base model with strict validation."""

    model_config = pydantic.ConfigDict(
        extra='forbid',  # Reject unknown fields (fail-fast)
        strict=True,  # Strict type coercion
        frozen=True,  # Immutable after creation
    )


# --- Hook input ---


class HookInput(pydantic.BaseModel):
    """Payload read from stdin for every hook event kind.

    Deliberately lenient: the assistant adds fields between releases and the
    shape of ``tool_input`` depends on the tool. Missing strings read as ``''``
    and a missing or non-object ``tool_input`` reads as ``{}``. Only invalid
    JSON (or a non-object payload) fails validation.
    """

    model_config = pydantic.ConfigDict(extra='allow', frozen=True)

    session_id: str = ''
    transcript_path: str = ''
    cwd: str = ''
    hook_event_name: str = ''
    tool_name: str = ''
    tool_input: dict[str, Any] = pydantic.Field(default_factory=dict)
    stop_hook_active: bool = False

    @pydantic.field_validator(
        'session_id', 'transcript_path', 'cwd', 'hook_event_name', 'tool_name', mode='before'
    )
    @classmethod
    def _string_or_empty(cls, value: object) -> str:
        return value if isinstance(value, str) else ''

    @pydantic.field_validator('tool_input', mode='before')
    @classmethod
    def _object_or_empty(cls, value: object) -> dict[str, Any]:
        return value if isinstance(value, dict) else {}

    @pydantic.field_validator('stop_hook_active', mode='before')
    @classmethod
    def _only_true_counts(cls, value: object) -> bool:
        return value is True


# --- PreToolUse output ---


class PreToolUseDecision(StrictModel):
    """Permission decision within a PreToolUse hook output."""

    model_config = pydantic.ConfigDict(populate_by_name=True)

    hook_event_name: Literal['PreToolUse'] = pydantic.Field(default='PreToolUse', alias='hookEventName')
    permission_decision: PermissionDecision = pydantic.Field(alias='permissionDecision')
    permission_decision_reason: str = pydantic.Field(alias='permissionDecisionReason')


class PreToolUseHookOutput(StrictModel):
    """PreToolUse hook output. Serialize with ``to_json()``.

    ``suppress_output`` is only set on allow records; block records omit it.

    See: https://code.claude.com/docs/en/hooks#pretooluse
    """

    model_config = pydantic.ConfigDict(populate_by_name=True)

    hook_specific_output: PreToolUseDecision = pydantic.Field(alias='hookSpecificOutput')
    suppress_output: bool | None = pydantic.Field(default=None, alias='suppressOutput')

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


# --- Persisted records ---


class SessionInfo(StrictModel):
    """Most recent coding-assistant session, used to target prompt injection.

    ``term_session`` and ``iterm_session`` come from the two terminal
    ecosystems (Terminal.app and iTerm2); ``tmux`` and ``tmux_pane`` from tmux.
    """

    session_id: str
    terminal_pid: int | None = None
    term_session: str = ''
    iterm_session: str = ''
    tmux: str = ''
    tmux_pane: str = ''
    cwd: str = ''
    timestamp: int

    def is_alive(self) -> bool:
        """True if the originating process still exists."""
        return self.terminal_pid is not None and psutil.pid_exists(self.terminal_pid)


class HandsFreeStatus(StrictModel):
    """Point-in-time snapshot of the persisted activation state."""

    active: bool
    emergency_stop: bool
    cycle_pending: bool
    cycle_count: int
    activated_at: int | None = None
