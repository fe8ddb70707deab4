"""Shared type aliases for the hands-free hook engine."""

from typing import Literal

from typing_extensions import TypeAliasType

HookKind = TypeAliasType('HookKind', Literal['pre-tool-use', 'post-tool-use', 'stop', 'user-prompt-submit'])
HookEventName = TypeAliasType('HookEventName', Literal['PreToolUse', 'PostToolUse', 'Stop', 'UserPromptSubmit'])
PermissionDecision = TypeAliasType('PermissionDecision', Literal['allow', 'block'])
LogLevel = TypeAliasType('LogLevel', Literal['DEBUG', 'INFO', 'WARNING', 'ERROR'])
