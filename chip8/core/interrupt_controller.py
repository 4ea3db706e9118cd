"""Keypad interrupt latch implementation."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from chip8.interfaces.interrupt_controller import IKeypadLatch, InterruptEvent

logger = logging.getLogger(__name__)


class KeypadLatch(IKeypadLatch):
    """Holds the one outstanding "wait for key" request.

    Keys are scanned in ascending order, so when several are held the
    lowest index wins.
    """

    def __init__(self):
        self._pending = False
        self._register = 0

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def register(self) -> int:
        return self._register

    def arm(self, register: int) -> None:
        if self._pending:
            logger.warning(
                "Keypad latch re-armed for V%X while waiting on V%X", register, self._register
            )
        self._pending = True
        self._register = register

    def poll(self, keypad: Sequence[bool]) -> Optional[InterruptEvent]:
        if not self._pending:
            return None
        for key, pressed in enumerate(keypad):
            if pressed:
                self._pending = False
                return InterruptEvent(key=key, register=self._register)
        return None

    def reset(self) -> None:
        self._pending = False
        self._register = 0
