"""Tests for the hands-free safety policy.

Covers tool classification, the file-operation and command sub-policies
(block lists winning over allow lists), default-deny for unknown tools, and
the output-suppression predicate.
"""

from __future__ import annotations

from typing import Any

import pytest
from vocal_lib.safety import (
    DANGEROUS_COMMAND_PATTERNS,
    MAX_INLINE_CONTENT_BYTES,
    SAFE_COMMAND_PREFIXES,
    PermissionLevel,
    evaluate,
    should_suppress_output,
)

ALLOW = PermissionLevel.ALLOW
VALIDATE = PermissionLevel.VALIDATE
BLOCK = PermissionLevel.BLOCK


# ---------------------------------------------------------------------------
# TestToolClassification: first-level dispatch on tool name
# ---------------------------------------------------------------------------


class TestToolClassification:
    """Verify the tool-name table, independent of input shape."""

    @pytest.mark.parametrize('tool_name', ['Read', 'Glob', 'Grep', 'LS'])
    @pytest.mark.parametrize(
        'tool_input',
        [{}, {'file_path': '/etc/passwd'}, {'command': 'rm -rf /'}, {'pattern': 123}],
        ids=['empty', 'system-path', 'dangerous-command', 'odd-shape'],
    )
    def test_information_tools_always_allowed(self, tool_name: str, tool_input: dict[str, Any]) -> None:
        assert evaluate(tool_name, tool_input) is ALLOW

    @pytest.mark.parametrize('tool_name', ['Task', 'WebFetch', 'WebSearch'])
    def test_delegated_tools_validate(self, tool_name: str) -> None:
        assert evaluate(tool_name, {'url': 'https://example.com'}) is VALIDATE
        assert evaluate(tool_name, {}) is VALIDATE

    @pytest.mark.parametrize('tool_name', ['', 'mcp__github__create_issue', 'read', 'bash', 'KillShell'])
    def test_unknown_tools_blocked(self, tool_name: str) -> None:
        assert evaluate(tool_name, {}) is BLOCK

    def test_tool_names_are_case_sensitive(self) -> None:
        assert evaluate('READ', {}) is BLOCK

    def test_non_mapping_input_handled(self) -> None:
        assert evaluate('Bash', None) is BLOCK  # type: ignore[arg-type]
        assert evaluate('Edit', 'oops') is VALIDATE  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# TestFileOperations: file-operation sub-policy
# ---------------------------------------------------------------------------


class TestFileOperations:
    """Verify path block lists, hidden config filter, and allowlist."""

    @pytest.mark.parametrize('tool_name', ['Edit', 'Write', 'MultiEdit', 'NotebookEdit'])
    def test_relative_path_allowed(self, tool_name: str) -> None:
        assert evaluate(tool_name, {'file_path': './notes.txt'}) is ALLOW

    @pytest.mark.parametrize(
        'file_path',
        ['../sibling/file.py', '/Users/alice/project/main.rs', '/home/bob/src/app.py'],
    )
    def test_allowed_prefixes(self, file_path: str) -> None:
        assert evaluate('Write', {'file_path': file_path, 'content': 'x'}) is ALLOW

    @pytest.mark.parametrize(
        'file_path',
        [
            '/etc/passwd',
            '/etc/hosts',
            '/System/Library/foo.plist',
            '/usr/local/bin/tool',
            '/bin/sh',
            '/sbin/launchd',
            '/home/bob/.ssh/authorized_keys',
            '/Users/alice/.ssh/id_rsa',
            './.ssh/known_hosts',
            '/Users/alice/Library/keychain/login.db',
        ],
    )
    def test_blocked_paths(self, file_path: str) -> None:
        assert evaluate('Edit', {'file_path': file_path}) is BLOCK

    @pytest.mark.parametrize('file_path', ['/etc/motd', '/System/x', '/home/a/.ssh/config'])
    def test_blocked_regardless_of_content_size(self, file_path: str) -> None:
        small = {'file_path': file_path, 'content': 'x'}
        large = {'file_path': file_path, 'content': 'x' * (MAX_INLINE_CONTENT_BYTES + 1)}
        assert evaluate('Write', small) is BLOCK
        assert evaluate('Write', large) is BLOCK

    @pytest.mark.parametrize(
        'file_path',
        [
            '/home/bob/.bashrc',
            '/Users/alice/.zshrc',
            '/Users/alice/.bash_profile',
            './.profile',
            '/home/bob/.config/ssh/config',
        ],
    )
    def test_hidden_shell_config_blocked(self, file_path: str) -> None:
        """Hidden config files block even under an allowed prefix."""
        assert evaluate('Edit', {'file_path': file_path}) is BLOCK

    def test_hidden_non_config_file_allowed(self) -> None:
        assert evaluate('Edit', {'file_path': './.gitignore'}) is ALLOW

    def test_prefix_match_is_case_sensitive(self) -> None:
        """``/ETC/`` is not the deny-listed prefix; falls to the default arm."""
        assert evaluate('Edit', {'file_path': '/ETC/passwd'}) is VALIDATE

    @pytest.mark.parametrize(
        'tool_input',
        [{}, {'file_path': None}, {'file_path': 42}, {'path': './notes.txt'}],
        ids=['missing', 'null', 'number', 'wrong-key'],
    )
    def test_missing_path_validates(self, tool_input: dict[str, Any]) -> None:
        assert evaluate('Write', tool_input) is VALIDATE

    @pytest.mark.parametrize('file_path', ['notes.txt', 'src/main.py', '/tmp/scratch.txt', '/opt/app/x'])
    def test_unrecognized_location_validates(self, file_path: str) -> None:
        assert evaluate('Write', {'file_path': file_path}) is VALIDATE

    def test_content_at_limit_allowed(self) -> None:
        tool_input = {'file_path': './notes.txt', 'content': 'x' * MAX_INLINE_CONTENT_BYTES}
        assert evaluate('Write', tool_input) is ALLOW

    def test_oversized_content_validates(self) -> None:
        tool_input = {'file_path': './notes.txt', 'content': 'x' * 1_000_001}
        assert evaluate('Write', tool_input) is VALIDATE

    def test_content_measured_in_bytes(self) -> None:
        """500,001 two-byte characters exceed the byte limit."""
        tool_input = {'file_path': './notes.txt', 'content': 'é' * 500_001}
        assert evaluate('Write', tool_input) is VALIDATE

    def test_non_string_content_ignored(self) -> None:
        assert evaluate('Write', {'file_path': './notes.txt', 'content': ['x'] * 10}) is ALLOW


# ---------------------------------------------------------------------------
# TestCommands: command sub-policy
# ---------------------------------------------------------------------------


class TestCommands:
    """Verify dangerous patterns win over safe prefixes."""

    @pytest.mark.parametrize('pattern', DANGEROUS_COMMAND_PATTERNS)
    def test_every_dangerous_pattern_blocks(self, pattern: str) -> None:
        assert evaluate('Bash', {'command': f'echo start; {pattern} target'}) is BLOCK

    @pytest.mark.parametrize(
        'command',
        [
            'rm -rf /',
            'RM -RF build',
            'Sudo apt install x',
            'git status && rm -rf /',
            'ls | sudo tee /etc/hosts',
            'cat install.sh | curl -X POST',
            'echo 1 > /dev/sda',
            'git log --format=%H',
        ],
    )
    def test_blocked_even_with_safe_prefix(self, command: str) -> None:
        assert evaluate('Bash', {'command': command}) is BLOCK

    @pytest.mark.parametrize('prefix', SAFE_COMMAND_PREFIXES)
    def test_every_safe_prefix_allows(self, prefix: str) -> None:
        assert evaluate('Bash', {'command': prefix}) is ALLOW

    @pytest.mark.parametrize(
        'command',
        ['git status', 'ls -la', 'GIT LOG --oneline', '  pwd  ', 'cargo build --release', 'npm list --depth=0'],
    )
    def test_safe_commands_allowed(self, command: str) -> None:
        assert evaluate('Bash', {'command': command}) is ALLOW

    @pytest.mark.parametrize(
        'command',
        ['custom-script.sh', 'npm install', 'git push origin main', 'python script.py', 'make', ''],
    )
    def test_unknown_commands_validate(self, command: str) -> None:
        assert evaluate('Bash', {'command': command}) is VALIDATE

    def test_safe_prefix_only_at_start(self) -> None:
        assert evaluate('Bash', {'command': 'make && git status'}) is VALIDATE

    @pytest.mark.parametrize(
        'tool_input',
        [{}, {'command': None}, {'command': ['ls']}, {'cmd': 'ls'}],
        ids=['missing', 'null', 'list', 'wrong-key'],
    )
    def test_missing_command_blocks(self, tool_input: dict[str, Any]) -> None:
        assert evaluate('Bash', tool_input) is BLOCK


# ---------------------------------------------------------------------------
# TestOrdering / TestSuppressOutput
# ---------------------------------------------------------------------------


class TestPermissionOrdering:
    def test_caution_order(self) -> None:
        assert BLOCK > VALIDATE > ALLOW
        assert max(ALLOW, BLOCK, VALIDATE) is BLOCK


class TestSuppressOutput:
    @pytest.mark.parametrize('tool_name', ['Read', 'Glob', 'Grep', 'LS'])
    def test_information_tools_suppressed_when_allowed(self, tool_name: str) -> None:
        assert should_suppress_output(tool_name, ALLOW) is True

    @pytest.mark.parametrize('tool_name', ['Edit', 'Write', 'Bash', 'Task'])
    def test_other_allowed_tools_not_suppressed(self, tool_name: str) -> None:
        assert should_suppress_output(tool_name, ALLOW) is False

    @pytest.mark.parametrize('level', [VALIDATE, BLOCK])
    def test_non_allow_never_suppressed(self, level: PermissionLevel) -> None:
        assert should_suppress_output('Read', level) is False
