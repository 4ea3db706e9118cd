import logging

import pytest

from chip8.core.exceptions import CartridgeError
from chip8.drivers.cartridge import CartridgeDriver


def test_reads_file_into_padded_buffer(tmp_path):
    rom_path = tmp_path / "pong.ch8"
    rom_path.write_bytes(b"\x6A\x02\x6B\x0C")
    cart = CartridgeDriver(rom_path)
    assert cart.size == 4
    assert len(cart.rom) == 3584
    assert cart.rom[:6] == b"\x6A\x02\x6B\x0C\x00\x00"


def test_empty_file(tmp_path):
    rom_path = tmp_path / "empty.ch8"
    rom_path.write_bytes(b"")
    cart = CartridgeDriver(str(rom_path))
    assert cart.size == 0
    assert cart.rom == bytes(3584)


def test_oversized_file_is_truncated(tmp_path, caplog):
    rom_path = tmp_path / "big.ch8"
    rom_path.write_bytes(b"\xAA" * 4000)
    with caplog.at_level(logging.WARNING):
        cart = CartridgeDriver(rom_path)
    assert cart.size == 3584
    assert "truncating" in caplog.text


def test_missing_file_raises(tmp_path):
    with pytest.raises(CartridgeError) as exc_info:
        CartridgeDriver(tmp_path / "nope.ch8")
    assert "nope.ch8" in exc_info.value.path


def test_from_bytes():
    cart = CartridgeDriver.from_bytes(b"\x00\xE0", name="cls")
    assert cart.size == 2
    assert cart.rom[:2] == b"\x00\xE0"
    assert cart.path.name == "cls"


def test_from_bytes_too_large():
    with pytest.raises(CartridgeError):
        CartridgeDriver.from_bytes(bytes(3585))
