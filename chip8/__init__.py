"""CHIP-8 virtual machine emulator.

This package interprets CHIP-8 programs: a 4 KiB, sixteen-register 8-bit
machine with a 64x32 monochrome display and a 16-key hex keypad.

Architecture:
- core: CPU state and the fetch-decode-execute cycle (no I/O)
- drivers: program loading, keypad state and text rendering
- debug: stepping, breakpoints and state inspection
- utils: constants and YAML configuration

Getting started:
    from chip8 import Chip8CPU, CartridgeDriver

    cart = CartridgeDriver("roms/PONG")
    cpu = Chip8CPU()
    cpu.load(cart.rom, cart.size, 0x200)
    frame = cpu.cycle([False] * 16)
"""

from chip8.core.cpu import Chip8CPU, CpuState, DebugLevel
from chip8.core.exceptions import Chip8Error, ConfigurationError, StackOverflowError
from chip8.core.framebuffer import Frame, render_text
from chip8.core.simulation_engine import SimulationEngine
from chip8.drivers.cartridge import CartridgeDriver
from chip8.drivers.display import TextRenderer
from chip8.drivers.keypad import KeypadState
from chip8.utils.config_loader import EmulatorConfig, get_config, load_config

__all__ = [
    # Core
    "Chip8CPU",
    "CpuState",
    "DebugLevel",
    "Frame",
    "render_text",
    "SimulationEngine",
    # Errors
    "Chip8Error",
    "ConfigurationError",
    "StackOverflowError",
    # Drivers
    "CartridgeDriver",
    "KeypadState",
    "TextRenderer",
    # Configuration
    "EmulatorConfig",
    "get_config",
    "load_config",
]
