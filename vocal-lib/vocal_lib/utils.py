"""Formatting helpers for the CLI."""

from __future__ import annotations

__all__ = [
    'format_age',
]


def format_age(seconds: float) -> str:
    """Render a marker's age with its two largest units: ``45s``, ``2m 05s``, ``1h 03m``, ``3d 2h``.

    Negative ages (clock skew between writer and reader) render as ``0s``.
    """
    total = max(0, int(seconds))
    days, rem = divmod(total, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)

    if days:
        return f'{days}d {hours}h'
    if hours:
        return f'{hours}h {minutes:02d}m'
    if minutes:
        return f'{minutes}m {secs:02d}s'
    return f'{secs}s'
