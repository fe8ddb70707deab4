"""Safety policy for hands-free tool use.

Maps a proposed tool invocation to one of three permission levels. The
evaluator is a pure function of ``(tool_name, tool_input)``: no I/O, no
state, and it returns a level for every input including unknown tools and
empty or malformed ``tool_input`` shapes.

Classification, first match wins:

    ==========================  ============================
    Tool class                  Decision
    ==========================  ============================
    information retrieval       ALLOW
    file mutation               file-operation sub-policy
    shell command               command sub-policy
    agentic / network helpers   VALIDATE
    anything else               BLOCK
    ==========================  ============================

Both sub-policies check their block lists before their allow lists, so an
input matching both is blocked. Matching is plain substring/prefix matching
over the literal strings and deliberately over-blocks: ``curl`` inside a
file name or ``format`` inside ``git log --format`` still blocks.
"""

from __future__ import annotations

__all__ = [
    'COMMAND_TOOLS',
    'DANGEROUS_COMMAND_PATTERNS',
    'DELEGATED_TOOLS',
    'FILE_MUTATION_TOOLS',
    'INFORMATION_TOOLS',
    'MAX_INLINE_CONTENT_BYTES',
    'PermissionLevel',
    'SAFE_COMMAND_PREFIXES',
    'evaluate',
    'evaluate_command',
    'evaluate_file_operation',
    'should_suppress_output',
]

import enum
from collections.abc import Mapping, Set
from typing import Any


class PermissionLevel(enum.IntEnum):
    """Outcome of policy evaluation, ordered by caution (BLOCK is highest)."""

    ALLOW = 0
    VALIDATE = 1  # Defer to the assistant's normal human-confirmation flow
    BLOCK = 2


# --- Tool classes ---

INFORMATION_TOOLS: Set[str] = frozenset({'Read', 'Glob', 'Grep', 'LS'})
FILE_MUTATION_TOOLS: Set[str] = frozenset({'Edit', 'Write', 'MultiEdit', 'NotebookEdit'})
COMMAND_TOOLS: Set[str] = frozenset({'Bash'})
DELEGATED_TOOLS: Set[str] = frozenset({'Task', 'WebFetch', 'WebSearch'})

# --- File-operation tables ---

# Absolute system, package and binary directories (prefix match)
BLOCKED_PATH_PREFIXES = (
    '/System/',
    '/usr/',
    '/etc/',
    '/bin/',
    '/sbin/',
)

# Credential stores anywhere in the path (substring match)
BLOCKED_PATH_FRAGMENTS = (
    '/.ssh/',
    '/keychain/',
)

# Shell and SSH configuration, only checked when the path has a hidden segment
HIDDEN_CONFIG_NAMES = (
    'bashrc',
    'zshrc',
    'profile',
    'ssh/config',
)

ALLOWED_PATH_PREFIXES = (
    './',
    '../',
    '/Users/',
    '/home/',
)

MAX_INLINE_CONTENT_BYTES = 1_000_000

# --- Command tables (matched against the lower-cased command) ---

DANGEROUS_COMMAND_PATTERNS = (
    'rm -rf',
    'sudo',
    'chmod +x',
    'curl',
    'wget',
    'dd if=',
    'mkfs',
    'fdisk',
    'format',
    '> /dev/',
    'shutdown',
    'reboot',
    'killall',
    'kill -9',
)

SAFE_COMMAND_PREFIXES = (
    'ls',
    'pwd',
    'echo',
    'cat',
    'head',
    'tail',
    'grep',
    'find',
    'which',
    'whereis',
    'git status',
    'git log',
    'git diff',
    'npm list',
    'yarn list',
    'cargo check',
    'cargo build',
    'python --version',
    'node --version',
)


def evaluate(tool_name: str, tool_input: Mapping[str, Any]) -> PermissionLevel:
    """Classify a tool invocation. Total and deterministic."""
    if tool_name in INFORMATION_TOOLS:
        return PermissionLevel.ALLOW
    if tool_name in FILE_MUTATION_TOOLS:
        return evaluate_file_operation(tool_input)
    if tool_name in COMMAND_TOOLS:
        return evaluate_command(tool_input)
    if tool_name in DELEGATED_TOOLS:
        return PermissionLevel.VALIDATE
    return PermissionLevel.BLOCK


def evaluate_file_operation(tool_input: Mapping[str, Any]) -> PermissionLevel:
    """File-mutation sub-policy keyed on ``file_path``.

    Without a usable path the request is left to human confirmation.
    """
    file_path = _optional_str(tool_input, 'file_path')
    if file_path is None:
        return PermissionLevel.VALIDATE

    if file_path.startswith(BLOCKED_PATH_PREFIXES):
        return PermissionLevel.BLOCK
    if any(fragment in file_path for fragment in BLOCKED_PATH_FRAGMENTS):
        return PermissionLevel.BLOCK

    if '/.' in file_path and any(name in file_path for name in HIDDEN_CONFIG_NAMES):
        return PermissionLevel.BLOCK

    if file_path.startswith(ALLOWED_PATH_PREFIXES):
        content = _optional_str(tool_input, 'content')
        if content is not None and _byte_length(content) > MAX_INLINE_CONTENT_BYTES:
            return PermissionLevel.VALIDATE
        return PermissionLevel.ALLOW

    return PermissionLevel.VALIDATE


def evaluate_command(tool_input: Mapping[str, Any]) -> PermissionLevel:
    """Shell-command sub-policy keyed on ``command``.

    A missing or non-string command is treated as maximally suspicious.
    """
    command = _optional_str(tool_input, 'command')
    if command is None:
        return PermissionLevel.BLOCK

    lowered = command.lower()
    if any(pattern in lowered for pattern in DANGEROUS_COMMAND_PATTERNS):
        return PermissionLevel.BLOCK

    if lowered.strip().startswith(SAFE_COMMAND_PREFIXES):
        return PermissionLevel.ALLOW

    return PermissionLevel.VALIDATE


def should_suppress_output(tool_name: str, level: PermissionLevel) -> bool:
    """Silence console chatter only for allowed, side-effect-free lookups."""
    return level is PermissionLevel.ALLOW and tool_name in INFORMATION_TOOLS


def _optional_str(tool_input: Mapping[str, Any], key: str) -> str | None:
    if not isinstance(tool_input, Mapping):
        return None
    value = tool_input.get(key)
    return value if isinstance(value, str) else None


def _byte_length(text: str) -> int:
    # Lone surrogates can arrive through JSON escapes
    return len(text.encode('utf-8', errors='surrogatepass'))
