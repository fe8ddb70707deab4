"""Process-level error boundary for the ``vocal`` entry point.

A hook process gets one chance per event: whatever goes wrong, it reports a
single ``vocal: ...`` line on stderr and exits with a definite status, so
Claude Code shows a non-blocking hook error instead of a raw traceback.
Expected failures that the router handles locally (state I/O, corrupt
registry records) never reach this layer.

Handlers are looked up by exception type through ``functools.singledispatch``
and return the message to print::

    boundary = ErrorBoundary('vocal', exit_code=1)

    @boundary.handler(pydantic.ValidationError)
    def handle_bad_input(exc: pydantic.ValidationError) -> str:
        return f'invalid hook input: {exc}'

    @boundary
    def main() -> int:
        ...

Anything without a handler is reported as an unexpected error; its
traceback goes to the debug log. KeyboardInterrupt and SystemExit pass
through untouched.
"""

from __future__ import annotations

__all__ = [
    'ErrorBoundary',
    'ErrorHandler',
]

import functools
import logging
import sys
from collections.abc import Callable
from functools import singledispatch
from typing import Any, TypeVar, cast

from typing_extensions import TypeAliasType

logger = logging.getLogger(__name__)

ErrorHandler = TypeAliasType('ErrorHandler', Callable[[Exception], str])

_F = TypeVar('_F', bound=Callable[..., object])


def _unexpected(exc: Exception) -> str:
    return f'unexpected {type(exc).__name__}: {exc}'


class ErrorBoundary:
    """Turn uncaught exceptions into one stderr line plus a fixed exit status."""

    def __init__(self, prog: str, *, exit_code: int = 1) -> None:
        self.prog = prog
        self.exit_code = exit_code
        self._messages = singledispatch(_unexpected)

    def handler(self, exc_type: type[Exception]) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register a message formatter for ``exc_type`` (matched by MRO)."""
        return self._messages.register(exc_type)

    def report(self, exc: Exception) -> None:
        try:
            message = self._messages(exc)
        except Exception:
            logger.debug('Error handler failed', exc_info=True)
            message = _unexpected(exc)
        print(f'{self.prog}: {message}', file=sys.stderr)
        logger.debug(f'{self.prog} failed', exc_info=exc)

    def __call__(self, func: _F) -> _F:
        """Decorate an entry point. The original stays reachable as ``__wrapped__``."""

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception as exc:
                self.report(exc)
                sys.exit(self.exit_code)

        return cast(_F, wrapper)
