"""Tick source interface shared by the timer unit and the host loop."""

from __future__ import annotations

from typing import Protocol


class ClockSubscriber(Protocol):
    """Anything that can advance on clock ticks."""

    def tick(self, cycles: int = 1) -> None:
        """Advance the subscriber by the given number of cycles."""
        ...
