"""Core modules for the emulator.

- memory: flat 4 KiB RAM with bounds-checked access
- register: V0-VF, I, PC and the call stack
- timers: delay and sound countdown counters
- interrupt_controller: keypad "wait for key" latch
- framebuffer: 64x32 monochrome pixel grid
- instructions: instruction word decoding
- cpu: the fetch-decode-execute engine
- simulation_engine: host loop helper
"""

from chip8.core.cpu import Chip8CPU, CpuState, DebugLevel
from chip8.core.exceptions import (
    CartridgeError,
    Chip8Error,
    ConfigurationError,
    MemoryAccessError,
    MemoryBoundsError,
    MemoryException,
    StackOverflowError,
)
from chip8.core.framebuffer import Frame, Framebuffer, render_text
from chip8.core.instructions import Instruction, Opcode, decode
from chip8.core.interrupt_controller import KeypadLatch
from chip8.core.memory import AddressRange, Memory
from chip8.core.register import CallStack, RegisterDescriptor, RegisterFile
from chip8.core.simulation_engine import SimulationEngine
from chip8.core.timers import TimerUnit

__all__ = [
    # CPU
    "Chip8CPU",
    "CpuState",
    "DebugLevel",
    # State
    "AddressRange",
    "Memory",
    "CallStack",
    "RegisterDescriptor",
    "RegisterFile",
    "TimerUnit",
    "KeypadLatch",
    "Frame",
    "Framebuffer",
    "render_text",
    # Decoding
    "Instruction",
    "Opcode",
    "decode",
    # Host loop
    "SimulationEngine",
    # Errors
    "Chip8Error",
    "ConfigurationError",
    "CartridgeError",
    "MemoryException",
    "MemoryAccessError",
    "MemoryBoundsError",
    "StackOverflowError",
]
