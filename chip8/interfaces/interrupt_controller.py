"""Keypad interrupt interface and event type."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class InterruptEvent:
    """A satisfied keypress wait: which key arrived for which register."""

    key: int
    register: int


class IKeypadLatch(ABC):
    """Single-slot latch for an instruction blocked on a keypress."""

    @property
    @abstractmethod
    def pending(self) -> bool:
        """True while a keypress wait is outstanding."""
        ...

    @abstractmethod
    def arm(self, register: int) -> None:
        """Start waiting for a key to store into ``register``."""
        ...

    @abstractmethod
    def poll(self, keypad: Sequence[bool]) -> Optional[InterruptEvent]:
        """Check the keypad; return an event and clear the latch if satisfied."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Drop any pending wait."""
        ...
