"""Injectable sources of the current calendar date."""

from __future__ import annotations

from datetime import date
from typing import Callable

Clock = Callable[[], date]


def local_today() -> date:
    """Return the current date in the machine's local timezone."""
    return date.today()


def fixed_clock(day: date) -> Clock:
    """Return a clock that always reports ``day``."""

    def _clock() -> date:
        return day

    return _clock
