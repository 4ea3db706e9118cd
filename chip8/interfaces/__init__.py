"""Interface abstractions for the emulator.

Defines behavioral contracts that implementations must satisfy:
- ICPU: the instruction-cycle engine seen by host loops and debuggers
- IKeypadLatch: the single-slot "wait for key" interrupt
- ClockSubscriber: anything ticked once per cycle (timers)
- ProgramSource, Renderer, KeypadPoller: host-side collaborators
"""

from chip8.interfaces.clock import ClockSubscriber
from chip8.interfaces.cpu import ICPU, CpuSnapshot, RegisterValue
from chip8.interfaces.drivers import KeypadPoller, ProgramSource, Renderer
from chip8.interfaces.interrupt_controller import IKeypadLatch, InterruptEvent

__all__ = [
    "ICPU",
    "CpuSnapshot",
    "RegisterValue",
    "ClockSubscriber",
    "IKeypadLatch",
    "InterruptEvent",
    "KeypadPoller",
    "ProgramSource",
    "Renderer",
]
