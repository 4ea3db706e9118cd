"""Delay and sound countdown timers."""

from __future__ import annotations

from chip8.interfaces.clock import ClockSubscriber
from chip8.utils.consts import ConstUtils


class TimerUnit(ClockSubscriber):
    """Two independent byte counters that count down to zero on tick().

    The tick source is the instruction cycle, not a 60 Hz wall clock, so
    program timing follows however often the host calls ``cycle``.
    """

    def __init__(self):
        self._delay = 0
        self._sound = 0

    @property
    def delay(self) -> int:
        return self._delay

    @delay.setter
    def delay(self, value: int) -> None:
        self._delay = value & ConstUtils.MASK_8_BITS

    @property
    def sound(self) -> int:
        return self._sound

    @sound.setter
    def sound(self, value: int) -> None:
        self._sound = value & ConstUtils.MASK_8_BITS

    @property
    def sound_active(self) -> bool:
        """True while the sound timer is non-zero (no audio is produced)."""
        return self._sound > 0

    def tick(self, cycles: int = 1) -> None:
        if cycles < 0:
            raise ValueError("cycles must be >= 0")
        # Saturate at zero; never wrap
        self._delay = max(0, self._delay - cycles)
        self._sound = max(0, self._sound - cycles)

    def reset(self) -> None:
        self._delay = 0
        self._sound = 0
