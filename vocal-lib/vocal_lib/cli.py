"""Command-line entry points: hook events and mode management.

The assistant's settings file runs ``vocal hook <kind>`` once per event with
the event payload on stdin. Decisions go to stdout as JSON; everything else
goes to stderr through ``logging``.

    vocal hook pre-tool-use < payload.json
    vocal activate
    vocal emergency-stop
    vocal status --json
"""

from __future__ import annotations

__all__ = [
    'build_parser',
    'configure_logging',
    'main',
]

import argparse
import logging
import sys
import time
from collections.abc import Sequence
from typing import get_args

import pydantic

from vocal_lib.config import EngineConfig, load_config
from vocal_lib.controller import HandsFreeController
from vocal_lib.error_boundary import ErrorBoundary
from vocal_lib.injection import check_cycle_trigger
from vocal_lib.router import dispatch
from vocal_lib.schemas import HookInput
from vocal_lib.types import HookKind
from vocal_lib.utils import format_age

logger = logging.getLogger(__name__)

# --- Error boundary (process-level) ---
# Bad input or config exits 1: a non-blocking error for the assistant

boundary = ErrorBoundary('vocal', exit_code=1)


@boundary.handler(pydantic.ValidationError)
def _invalid_input(exc: pydantic.ValidationError) -> str:
    return f'invalid hook input ({exc.error_count()} errors): {exc.errors()[0]["msg"]}'


@boundary.handler(ValueError)
def _config_error(exc: ValueError) -> str:
    return str(exc)


@boundary.handler(OSError)
def _state_error(exc: OSError) -> str:
    return f'cannot update hands-free state: {exc}'


# --- Logging ---


def configure_logging(config: EngineConfig) -> None:
    """Send diagnostics to stderr, and to the debug log file if configured."""
    logging.basicConfig(level=config.log_level, format='%(message)s', stream=sys.stderr)
    logging.getLogger().setLevel(config.log_level)

    if config.debug_log_path is None:
        return
    try:
        config.debug_log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.debug_log_path)
    except OSError as e:
        logger.warning(f'Debug log disabled, cannot open {config.debug_log_path}: {e}')
        return
    file_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s'))
    logging.getLogger().addHandler(file_handler)


# --- Commands ---


def _cmd_hook(args: argparse.Namespace, controller: HandsFreeController) -> int:
    started = time.perf_counter()
    kind: HookKind = args.kind
    hook = HookInput.model_validate_json(sys.stdin.read())

    output = dispatch(kind, hook, controller)
    if output is not None:
        print(output.to_json())

    logger.debug(f'{kind} handled in {(time.perf_counter() - started) * 1000:.1f} ms')
    return 0


def _cmd_activate(args: argparse.Namespace, controller: HandsFreeController) -> int:
    if controller.state.emergency_stop_active:
        print('Emergency stop is set; run `vocal clear-emergency-stop` first', file=sys.stderr)
        return 1
    controller.activate()
    return 0


def _cmd_deactivate(args: argparse.Namespace, controller: HandsFreeController) -> int:
    controller.deactivate()
    return 0


def _cmd_emergency_stop(args: argparse.Namespace, controller: HandsFreeController) -> int:
    controller.emergency_stop()
    return 0


def _cmd_clear_emergency_stop(args: argparse.Namespace, controller: HandsFreeController) -> int:
    controller.clear_emergency_stop()
    return 0


def _cmd_status(args: argparse.Namespace, controller: HandsFreeController) -> int:
    status = controller.status()
    if args.json_output:
        print(status.model_dump_json(indent=2))
        return 0

    if status.emergency_stop:
        mode = 'emergency-stopped'
    elif status.active and status.activated_at is not None:
        mode = f'active (for {format_age(time.time() - status.activated_at)})'
    elif status.active:
        mode = 'active'
    else:
        mode = 'inactive'

    print(f'hands-free: {mode}')
    print(f'cycle pending: {"yes" if status.cycle_pending else "no"}')
    print(f'cycle count: {status.cycle_count}')
    return 0


def _cmd_check_cycle(args: argparse.Namespace, controller: HandsFreeController) -> int:
    print('true' if check_cycle_trigger(controller) else 'false')
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='vocal',
        description='Hands-free mode safety engine for Claude Code hooks.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    hook = subparsers.add_parser('hook', help='Handle one hook event read from stdin (used by settings.json)')
    hook.add_argument('kind', choices=get_args(HookKind.__value__))
    hook.set_defaults(func=_cmd_hook)

    subparsers.add_parser('activate', help='Turn hands-free mode on').set_defaults(func=_cmd_activate)
    subparsers.add_parser('deactivate', help='Turn hands-free mode off').set_defaults(func=_cmd_deactivate)
    subparsers.add_parser(
        'emergency-stop',
        help='Latch the emergency stop and deactivate',
    ).set_defaults(func=_cmd_emergency_stop)
    subparsers.add_parser(
        'clear-emergency-stop',
        help='Release the emergency stop (does not re-activate)',
    ).set_defaults(func=_cmd_clear_emergency_stop)

    status = subparsers.add_parser('status', help='Show the persisted hands-free state')
    status.add_argument('--json', action='store_true', dest='json_output', help='Output machine-readable JSON')
    status.set_defaults(func=_cmd_status)

    subparsers.add_parser(
        'check-cycle',
        help='Consume a pending cycle trigger; prints true if the capture loop should restart',
    ).set_defaults(func=_cmd_check_cycle)

    return parser


@boundary
def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config()
    configure_logging(config)
    controller = HandsFreeController.from_config(config)
    return args.func(args, controller)


if __name__ == '__main__':
    sys.exit(main())
