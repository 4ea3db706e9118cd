"""Framebuffer display widget."""

from __future__ import annotations

from PySide6 import QtCore, QtGui, QtWidgets

from chip8.core.framebuffer import Frame
from chip8.utils.config_loader import DisplayConfig
from chip8.utils.consts import ConstUtils


class ScreenCanvas(QtWidgets.QWidget):
    """Paints each pixel as a scale x scale block."""

    def __init__(self, config: DisplayConfig, parent: QtWidgets.QWidget | None = None):
        super().__init__(parent)
        self._scale = config.scale
        self._on = QtGui.QColor(*config.on_color)
        self._off = QtGui.QColor(*config.off_color)
        self._frame: Frame | None = None
        self.setFixedSize(
            ConstUtils.SCREEN_WIDTH * self._scale,
            ConstUtils.SCREEN_HEIGHT * self._scale,
        )

    def set_frame(self, frame: Frame) -> None:
        if frame != self._frame:
            self._frame = frame
            self.update()

    def paintEvent(self, _event: QtGui.QPaintEvent) -> None:  # type: ignore[override]
        painter = QtGui.QPainter(self)
        painter.fillRect(self.rect(), self._off)
        if self._frame is not None:
            scale = self._scale
            for y, row in enumerate(self._frame):
                for x, lit in enumerate(row):
                    if lit:
                        painter.fillRect(
                            QtCore.QRect(x * scale, y * scale, scale, scale), self._on
                        )
        painter.end()
