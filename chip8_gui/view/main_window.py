"""Main GUI window."""

from __future__ import annotations

from PySide6 import QtCore, QtGui, QtWidgets

from chip8.utils.config_loader import EmulatorConfig
from chip8_gui.controller import SimulationController, SimulationState
from chip8_gui.view.register_panel import RegisterPanel
from chip8_gui.view.screen_canvas import ScreenCanvas
from chip8_gui.view.top_bar import TopBar


class MainWindow(QtWidgets.QMainWindow):
    def __init__(
        self,
        controller: SimulationController,
        config: EmulatorConfig,
        title: str,
        cycles_per_tick: int | None = None,
        tick_ms: int | None = None,
    ):
        super().__init__()
        self._controller = controller
        self._cycles_per_tick = cycles_per_tick or config.cpu.cycles_per_tick

        self.setWindowTitle(f"CHIP-8 - {title}")

        central = QtWidgets.QWidget()
        self.setCentralWidget(central)

        self._top_bar = TopBar(title)
        self._screen = ScreenCanvas(config.display)
        self._register_panel = RegisterPanel()

        splitter = QtWidgets.QSplitter()
        splitter.addWidget(self._screen)
        splitter.addWidget(self._register_panel)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)

        layout = QtWidgets.QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._top_bar)
        layout.addWidget(splitter, 1)

        self._timer = QtCore.QTimer(self)
        self._timer.timeout.connect(self._tick)
        self._timer.start(tick_ms or config.cpu.tick_ms)

        self._controller.set_running(True)
        self._refresh_state()

    def _tick(self) -> None:
        if self._controller.state == SimulationState.RUNNING:
            self._screen.set_frame(self._controller.step(self._cycles_per_tick))

        self._register_panel.update_snapshot(self._controller.snapshot())
        self._refresh_state()

    def _refresh_state(self) -> None:
        self._top_bar.set_state(
            self._controller.state,
            self._controller.snapshot().state,
            self._controller.error,
        )

    def keyPressEvent(self, event: QtGui.QKeyEvent) -> None:  # type: ignore[override]
        if event.key() == QtCore.Qt.Key_Space:
            self._controller.toggle_running()
        elif event.key() == QtCore.Qt.Key_F5:
            self._controller.reset()
        elif not event.isAutoRepeat() and self._controller.key_pressed(event.text()):
            return
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QtGui.QKeyEvent) -> None:  # type: ignore[override]
        if not event.isAutoRepeat() and self._controller.key_released(event.text()):
            return
        super().keyReleaseEvent(event)
