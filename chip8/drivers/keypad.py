"""Logical 16-key keypad fed by named host keys."""

from __future__ import annotations

from typing import Mapping

from chip8.utils.consts import ConstUtils


class KeypadState:
    """Tracks which of the 16 keypad lines are held.

    Host keys are named by the configured keymap (e.g. "Q" -> 0x4). Names
    not in the map are ignored.
    """

    def __init__(self, keymap: Mapping[str, int]):
        self._keymap = {name.upper(): key for name, key in keymap.items()}
        self._lines = [False] * ConstUtils.KEY_COUNT

    def press(self, name: str) -> bool:
        """Mark the line mapped to ``name`` as held. Returns True if mapped."""
        return self._set(name, True)

    def release(self, name: str) -> bool:
        """Mark the line mapped to ``name`` as released. Returns True if mapped."""
        return self._set(name, False)

    def release_all(self) -> None:
        self._lines = [False] * ConstUtils.KEY_COUNT

    def poll(self) -> tuple[bool, ...]:
        return tuple(self._lines)

    def _set(self, name: str, pressed: bool) -> bool:
        key = self._keymap.get(name.upper())
        if key is None:
            return False
        self._lines[key] = pressed
        return True
