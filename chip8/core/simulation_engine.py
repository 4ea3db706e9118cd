"""Simulation engine for driving the CPU from a host loop."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Optional

from chip8.utils.consts import ConstUtils

if TYPE_CHECKING:
    from chip8.core.framebuffer import Frame
    from chip8.interfaces.cpu import ICPU
    from chip8.interfaces.drivers import KeypadPoller, ProgramSource, Renderer

logger = logging.getLogger(__name__)


class SimulationEngine:
    """Minimal host loop.

    Each step polls the keypad, runs one CPU cycle and hands the frame to
    the renderer. Timer rate follows the step rate, so ``cycle_delay``
    is the only knob for program speed.
    """

    def __init__(self, cycle_delay: float = 0.0):
        if cycle_delay < 0:
            raise ValueError("cycle_delay must be >= 0")
        self.cycle_delay = cycle_delay

    def load(self, cpu: "ICPU", source: "ProgramSource", start: int = ConstUtils.PROGRAM_START) -> None:
        """Copy a program image into the CPU."""
        cpu.load(source.rom, source.size, start)

    def step(
        self,
        cpu: "ICPU",
        poller: "KeypadPoller",
        renderer: Optional["Renderer"] = None,
    ) -> "Frame":
        """Advance the CPU by one cycle."""
        frame = cpu.cycle(poller.poll())
        if renderer is not None:
            renderer.draw(frame)
        return frame

    def run(
        self,
        cpu: "ICPU",
        poller: "KeypadPoller",
        renderer: Optional["Renderer"] = None,
        cycles: int = 1,
    ) -> Optional["Frame"]:
        """Run the CPU for the given number of cycles; return the last frame."""
        if cycles < 0:
            raise ValueError("cycles must be >= 0")
        frame = None
        for _ in range(cycles):
            frame = self.step(cpu, poller, renderer)
            if self.cycle_delay:
                time.sleep(self.cycle_delay)
        logger.debug("Ran %d cycles", cycles)
        return frame

    def reset(self, cpu: "ICPU") -> None:
        """Reset the CPU."""
        cpu.reset()
