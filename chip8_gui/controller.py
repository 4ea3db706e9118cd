"""Simulation controller (Presenter-ish, framework-agnostic)."""

from __future__ import annotations

import logging
from enum import Enum, auto

from chip8.core.exceptions import Chip8Error
from chip8.core.framebuffer import Frame
from chip8.drivers.keypad import KeypadState
from chip8.interfaces.cpu import CpuSnapshot
from chip8_gui.backend import EmulatorBackend

logger = logging.getLogger(__name__)


class SimulationState(Enum):
    RUNNING = auto()
    PAUSED = auto()
    HALTED = auto()


class SimulationController:
    """Coordinator for stepping the emulator and routing key events."""

    def __init__(self, backend: EmulatorBackend, keypad: KeypadState):
        self._backend = backend
        self._keypad = keypad
        self._state = SimulationState.PAUSED
        self._error: str | None = None

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def error(self) -> str | None:
        return self._error

    def set_running(self, running: bool) -> None:
        if self._state == SimulationState.HALTED:
            return
        self._state = SimulationState.RUNNING if running else SimulationState.PAUSED

    def toggle_running(self) -> None:
        self.set_running(self._state != SimulationState.RUNNING)

    def reset(self) -> None:
        self._backend.reset()
        self._keypad.release_all()
        self._error = None
        self._state = SimulationState.RUNNING

    def step(self, cycles: int) -> Frame:
        try:
            return self._backend.step(cycles)
        except Chip8Error as exc:
            # Fatal machine error: stop stepping until reset
            logger.error("Emulation halted: %s", exc)
            self._error = str(exc)
            self._state = SimulationState.HALTED
            return self._backend.frame()

    def key_pressed(self, name: str) -> bool:
        return self._keypad.press(name)

    def key_released(self, name: str) -> bool:
        return self._keypad.release(name)

    def frame(self) -> Frame:
        return self._backend.frame()

    def snapshot(self) -> CpuSnapshot:
        return self._backend.cpu_snapshot()
