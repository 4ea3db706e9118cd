"""Program image loader."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from chip8.core.exceptions import CartridgeError
from chip8.utils.consts import ConstUtils

logger = logging.getLogger(__name__)


class CartridgeDriver:
    """Reads a raw program file into a fixed-size, zero-padded buffer.

    ``size`` is the number of bytes actually read. Files longer than the
    program area are truncated to it.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        try:
            with self.path.open("rb") as fh:
                data = fh.read(ConstUtils.MAX_PROGRAM_SIZE)
                truncated = bool(fh.read(1))
        except OSError as exc:
            raise CartridgeError(str(self.path), exc.strerror or str(exc)) from exc

        if truncated:
            logger.warning(
                "%s is larger than %d bytes; truncating", self.path, ConstUtils.MAX_PROGRAM_SIZE
            )
        self._init_buffer(data)

    @classmethod
    def from_bytes(cls, data: bytes, name: str = "<memory>") -> "CartridgeDriver":
        """Build a cartridge from an in-memory image."""
        if len(data) > ConstUtils.MAX_PROGRAM_SIZE:
            raise CartridgeError(
                name, f"{len(data)} bytes exceeds {ConstUtils.MAX_PROGRAM_SIZE}-byte program area"
            )
        cart = cls.__new__(cls)
        cart.path = Path(name)
        cart._init_buffer(data)
        return cart

    @property
    def rom(self) -> bytes:
        return bytes(self._buffer)

    @property
    def size(self) -> int:
        return self._size

    def _init_buffer(self, data: bytes) -> None:
        self._buffer = bytearray(ConstUtils.MAX_PROGRAM_SIZE)
        self._buffer[:len(data)] = data
        self._size = len(data)
