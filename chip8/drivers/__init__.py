"""Host-side collaborators: program loading, keypad input, text output."""

from chip8.drivers.cartridge import CartridgeDriver
from chip8.drivers.display import TextRenderer
from chip8.drivers.keypad import KeypadState

__all__ = [
    "CartridgeDriver",
    "KeypadState",
    "TextRenderer",
]
