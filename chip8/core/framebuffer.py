"""Monochrome 64x32 framebuffer."""

from __future__ import annotations

from typing import Iterable

from chip8.utils.consts import ConstUtils

Frame = tuple[tuple[bool, ...], ...]


def render_text(frame: Frame, on: str = "#", off: str = ".") -> str:
    """Render a frame as one text line per pixel row."""
    return "\n".join("".join(on if px else off for px in row) for row in frame)


class Framebuffer:
    """Row-major grid of pixels mutated by clear and sprite draws."""

    def __init__(
        self,
        width: int = ConstUtils.SCREEN_WIDTH,
        height: int = ConstUtils.SCREEN_HEIGHT,
    ):
        self.width = width
        self.height = height
        self._rows = [[False] * width for _ in range(height)]

    def clear(self) -> None:
        self._rows = [[False] * self.width for _ in range(self.height)]

    def pixel(self, x: int, y: int) -> bool:
        return self._rows[y][x]

    def draw_sprite(self, x: int, y: int, sprite: Iterable[int]) -> bool:
        """XOR an 8-pixel-wide sprite into the grid.

        The start position wraps around the screen; sprite rows and columns
        that fall past the right or bottom edge are dropped.

        Returns:
            True if any lit pixel was switched off.
        """
        x %= self.width
        y %= self.height
        collision = False

        for row_offset, bits in enumerate(sprite):
            row = y + row_offset
            if row >= self.height:
                break
            line = self._rows[row]
            for bit in range(8):
                col = x + bit
                if col >= self.width:
                    break
                if bits & (0x80 >> bit):
                    if line[col]:
                        collision = True
                    line[col] = not line[col]

        return collision

    def snapshot(self) -> Frame:
        """Return an immutable copy of the current pixels."""
        return tuple(tuple(row) for row in self._rows)

    def lit_count(self) -> int:
        return sum(sum(row) for row in self._rows)
