"""
Pytest configuration and shared fixtures for the emulator test suite.
"""

import random
import sys
import tempfile
from pathlib import Path

import pytest

# Ensure project root is on PYTHONPATH so 'chip8' can be imported
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from chip8.core.cpu import Chip8CPU  # noqa: E402

NO_KEYS = (False,) * 16


def assemble(*words: int) -> bytes:
    """Pack instruction words big-endian."""
    return b"".join(w.to_bytes(2, "big") for w in words)


@pytest.fixture
def temp_yaml_file():
    """
    Fixture that provides a temporary YAML file.

    Yields:
        Path: Path to the temporary YAML file
    """
    with tempfile.NamedTemporaryFile(
        mode="w",
        suffix=".yaml",
        delete=False,
    ) as f:
        temp_path = Path(f.name)

    yield temp_path

    # Cleanup
    if temp_path.exists():
        temp_path.unlink()


@pytest.fixture
def make_cpu():
    """Factory: CPU with the given instruction words loaded at 0x200."""

    def _make(*words: int, debug_level: int = 0, seed: int | None = 1234) -> Chip8CPU:
        rng = random.Random(seed) if seed is not None else None
        cpu = Chip8CPU(debug_level=debug_level, rng=rng)
        program = assemble(*words)
        cpu.load(program, len(program), 0x200)
        return cpu

    return _make


@pytest.fixture
def run():
    """Run a CPU for n cycles with an optional keypad state."""

    def _run(cpu: Chip8CPU, cycles: int = 1, keypad=NO_KEYS):
        frame = None
        for _ in range(cycles):
            frame = cpu.cycle(keypad)
        return frame

    return _run
