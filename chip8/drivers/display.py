"""Text renderer for headless runs."""

from __future__ import annotations

from typing import Callable, Optional

from chip8.core.framebuffer import Frame, render_text


class TextRenderer:
    """Keeps the latest frame and renders it as text on demand.

    If ``sink`` is given, each changed frame is written to it.
    """

    def __init__(self, sink: Optional[Callable[[str], None]] = None, on: str = "#", off: str = "."):
        self._sink = sink
        self._on = on
        self._off = off
        self.frame: Optional[Frame] = None
        self.frames_drawn = 0

    def draw(self, frame: Frame) -> None:
        changed = frame != self.frame
        self.frame = frame
        self.frames_drawn += 1
        if changed and self._sink is not None:
            self._sink(self.render())

    def render(self) -> str:
        if self.frame is None:
            return ""
        return render_text(self.frame, on=self._on, off=self._off)
