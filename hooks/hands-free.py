#!/usr/bin/env -S uv run --quiet --script
"""Hands-free hook entry for Claude Code settings.

Usage in settings.json (one entry per event kind)::

    {"type": "command", "command": "~/.claude/hooks/hands-free.py pre-tool-use"}

Kinds: pre-tool-use, post-tool-use, stop, user-prompt-submit.

See: https://code.claude.com/docs/en/hooks
"""

# /// script
# requires-python = ">=3.12"
# dependencies = [
#   "pydantic>=2.0.0",
#   "psutil",
#   "vocal-hands-free",
# ]
#
# [tool.uv.sources]
# vocal-hands-free = { path = "../", editable = true }
# ///
from __future__ import annotations

import sys
from collections.abc import Sequence

from vocal_lib.cli import main


def run(argv: Sequence[str]) -> int:
    """Handle one event; ``argv`` is the event kind."""
    return main(['hook', *argv])


if __name__ == '__main__':
    sys.exit(run(sys.argv[1:]))
