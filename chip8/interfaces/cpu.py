"""CPU interface for the host loop and debug tooling."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Mapping, Sequence

if TYPE_CHECKING:
    from chip8.core.framebuffer import Frame


class ICPU(ABC):
    """CPU abstraction used by the simulation engine and the GUI."""

    @abstractmethod
    def load(self, program: bytes, size: int, start: int) -> None:
        """Copy a program image into memory and point PC at it."""
        ...

    @abstractmethod
    def cycle(self, keypad: Sequence[bool]) -> "Frame":
        """Run one instruction cycle and return the framebuffer."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Reset CPU state."""
        ...

    @abstractmethod
    def get_snapshot(self) -> "CpuSnapshot":
        """Return a debug snapshot of CPU registers and flags."""
        ...

    def tick(self, cycles: int = 1, keypad: Sequence[bool] | None = None) -> None:
        """Advance the CPU by the given number of cycles with a fixed keypad."""
        keys = keypad if keypad is not None else (False,) * 16
        for _ in range(cycles):
            self.cycle(keys)


@dataclass(frozen=True)
class RegisterValue:
    """Single register value for UI/debug panels."""

    name: str
    value: int
    group: str = "core"
    width: int = 8


@dataclass(frozen=True)
class CpuSnapshot:
    """Snapshot of CPU state for UI/debug panels."""

    registers: Iterable[RegisterValue]
    flags: Mapping[str, bool]
    stack: Sequence[int] = ()
    state: str = "running"
