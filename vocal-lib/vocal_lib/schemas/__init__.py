"""Pydantic schemas for the hands-free hook engine."""

from __future__ import annotations

from vocal_lib.schemas.hooks import (
    HandsFreeStatus,
    HookInput,
    PreToolUseDecision,
    PreToolUseHookOutput,
    SessionInfo,
    StrictModel,
)

__all__ = [
    'HandsFreeStatus',
    'HookInput',
    'PreToolUseDecision',
    'PreToolUseHookOutput',
    'SessionInfo',
    'StrictModel',
]
