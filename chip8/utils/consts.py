"""Constants and utility values for the emulator."""


class ConstUtils:
    """Bitwise masks and machine constants."""

    # Bitwise masks for different data widths
    MASK_4_BITS = 0xF
    """4-bit mask: 0xF (one nibble)"""

    MASK_8_BITS = 0xFF
    """8-bit mask: 0xFF"""

    MASK_12_BITS = 0xFFF
    """12-bit mask: 0xFFF (address operand)"""

    MASK_16_BITS = 0xFFFF
    """16-bit mask: 0xFFFF"""

    # Machine geometry
    MEMORY_SIZE = 4096
    """Addressable memory in bytes."""

    PROGRAM_START = 0x200
    """Conventional load offset for programs."""

    MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START
    """Largest program image that fits above the reserved area (3584 bytes)."""

    SCREEN_WIDTH = 64
    SCREEN_HEIGHT = 32

    REGISTER_COUNT = 16
    FLAG_REGISTER = 0xF
    """VF doubles as carry/borrow/collision output."""

    STACK_DEPTH = 16
    KEY_COUNT = 16

    INSTRUCTION_SIZE = 2
    """Every instruction word is two bytes, big-endian."""


# Hex digit sprites 0-F, five bytes each, resident at address 0
FONT_BASE = 0x000
FONT_GLYPH_SIZE = 5
FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])


def font_address(digit: int) -> int:
    """Return the memory address of the sprite for a hex digit (0-F)."""
    return FONT_BASE + (digit & ConstUtils.MASK_4_BITS) * FONT_GLYPH_SIZE
