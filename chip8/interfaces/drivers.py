"""Collaborator contracts consumed by the host loop."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from chip8.core.framebuffer import Frame


class ProgramSource(Protocol):
    """A loaded program image: zero-padded buffer plus actual length."""

    @property
    def rom(self) -> bytes:
        ...

    @property
    def size(self) -> int:
        ...


class Renderer(Protocol):
    """Anything that can present a framebuffer."""

    def draw(self, frame: "Frame") -> None:
        ...


class KeypadPoller(Protocol):
    """Source of the 16-line logical keypad state."""

    def poll(self) -> Sequence[bool]:
        ...
