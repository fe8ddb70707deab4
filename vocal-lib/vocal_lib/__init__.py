"""Hands-free mode safety engine for Claude Code hooks."""

from __future__ import annotations

from vocal_lib.controller import HandsFreeController
from vocal_lib.error_boundary import ErrorBoundary, ErrorHandler
from vocal_lib.injection import HandsFreeInactiveError, TextInjector, check_cycle_trigger, inject_prompt
from vocal_lib.router import dispatch
from vocal_lib.safety import PermissionLevel, evaluate, should_suppress_output
from vocal_lib.session_registry import SessionRegistry
from vocal_lib.state import ActivationState, MarkerFlag

__all__ = [
    'ActivationState',
    'ErrorBoundary',
    'ErrorHandler',
    'HandsFreeController',
    'HandsFreeInactiveError',
    'MarkerFlag',
    'PermissionLevel',
    'SessionRegistry',
    'TextInjector',
    'check_cycle_trigger',
    'dispatch',
    'evaluate',
    'inject_prompt',
    'should_suppress_output',
]
