"""Memory model.

The machine has one flat, byte-addressable RAM. The font table lives at the
bottom, the program is copied in at a fixed offset. Every access is checked
against the fixed capacity; there is no paging and no resize after load.
"""

from __future__ import annotations

from dataclasses import dataclass

from chip8.core.exceptions import ConfigurationError, MemoryAccessError, MemoryBoundsError
from chip8.utils.consts import FONT_BASE, FONT_SET, ConstUtils


@dataclass(frozen=True)
class AddressRange:
    """An immutable address range."""
    base: int
    size: int

    def contains(self, address: int) -> bool:
        return self.base <= address < self.base + self.size

    def contains_range(self, address: int, size: int) -> bool:
        return self.contains(address) and address + size <= self.base + self.size

    def __str__(self) -> str:
        return f"0x{self.base:04X}-0x{self.base + self.size:04X}"


class Memory:
    """Volatile, read-write storage of fixed capacity."""

    def __init__(self, size: int = ConstUtils.MEMORY_SIZE, name: str = "RAM"):
        self.range = AddressRange(0, size)
        self.name = name
        self._data = bytearray(size)

    @property
    def size(self) -> int:
        return self.range.size

    def read(self, address: int) -> int:
        """Read a single byte."""
        self._check(address, 1)
        return self._data[address]

    def write(self, address: int, value: int) -> None:
        """Write a single byte (value is masked to 8 bits)."""
        self._check(address, 1)
        self._data[address] = value & ConstUtils.MASK_8_BITS

    def read_word(self, address: int) -> int:
        """Read a big-endian 16-bit instruction word."""
        self._check(address, ConstUtils.INSTRUCTION_SIZE)
        return int.from_bytes(self._data[address:address + 2], "big")

    def read_block(self, address: int, size: int) -> bytes:
        """Read a contiguous block of memory."""
        self._check(address, size)
        return bytes(self._data[address:address + size])

    def write_block(self, address: int, data: bytes) -> None:
        """Write a contiguous block of memory."""
        self._check(address, len(data))
        self._data[address:address + len(data)] = data

    def load_image(self, data: bytes, size: int, start: int) -> None:
        """Copy the first ``size`` bytes of a program image to ``start``.

        Raises:
            ConfigurationError: if the image does not fit at ``start``.
        """
        if size < 0 or size > len(data):
            raise ConfigurationError(
                "program_size", f"size {size} invalid for a {len(data)}-byte buffer"
            )
        if start < 0 or start + size > self.size:
            raise ConfigurationError(
                "program_start",
                f"program of {size} bytes at 0x{start:04X} exceeds memory of {self.size} bytes",
            )
        self._data[start:start + size] = data[:size]

    def load_font(self) -> None:
        """Install the built-in hex digit sprites at the bottom of memory."""
        self.write_block(FONT_BASE, FONT_SET)

    def reset(self) -> None:
        """Zero out all memory."""
        self._data[:] = b"\x00" * len(self._data)

    # Private helpers -------------------------------------------------------

    def _check(self, address: int, size: int) -> None:
        if address < 0:
            raise MemoryAccessError(address)
        if not self.range.contains_range(address, size):
            raise MemoryBoundsError(address, size, self.name)
