"""GUI backend interfaces and adapters."""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass
from typing import ContextManager, Protocol

from chip8.core.cpu import Chip8CPU
from chip8.core.framebuffer import Frame
from chip8.drivers.cartridge import CartridgeDriver
from chip8.drivers.keypad import KeypadState
from chip8.interfaces.cpu import CpuSnapshot


class EmulatorBackend(Protocol):
    """Minimal emulator backend required by the GUI."""

    @property
    def title(self) -> str:
        ...

    def step(self, cycles: int) -> Frame:
        ...

    def reset(self) -> None:
        ...

    def frame(self) -> Frame:
        ...

    def cpu_snapshot(self) -> CpuSnapshot:
        ...


@dataclass
class Chip8Backend(EmulatorBackend):
    """Adapter that runs a CPU against a keypad and a loaded cartridge."""

    cpu: Chip8CPU
    keypad: KeypadState
    cartridge: CartridgeDriver
    program_start: int = 0x200
    lock: ContextManager | None = None

    def __post_init__(self) -> None:
        if self.lock is None:
            self.lock = nullcontext()

    @property
    def title(self) -> str:
        return self.cartridge.path.name

    def step(self, cycles: int) -> Frame:
        assert self.lock is not None
        with self.lock:
            frame = self.cpu.framebuffer
            for _ in range(cycles):
                frame = self.cpu.cycle(self.keypad.poll())
            return frame

    def reset(self) -> None:
        assert self.lock is not None
        with self.lock:
            self.cpu.reset()
            self.cpu.load(self.cartridge.rom, self.cartridge.size, self.program_start)

    def frame(self) -> Frame:
        assert self.lock is not None
        with self.lock:
            return self.cpu.framebuffer

    def cpu_snapshot(self) -> CpuSnapshot:
        assert self.lock is not None
        with self.lock:
            return self.cpu.get_snapshot()
