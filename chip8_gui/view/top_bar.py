"""Top bar with program name and emulator state."""

from __future__ import annotations

from PySide6 import QtWidgets

from chip8_gui.controller import SimulationState


class TopBar(QtWidgets.QFrame):
    def __init__(self, title: str, parent: QtWidgets.QWidget | None = None):
        super().__init__(parent)
        self.setFrameShape(QtWidgets.QFrame.NoFrame)

        self._name_label = QtWidgets.QLabel(title)
        self._state_label = QtWidgets.QLabel("Paused")

        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(12, 6, 12, 6)
        layout.addWidget(self._name_label)
        layout.addStretch(1)
        layout.addWidget(self._state_label)

    def set_state(self, state: SimulationState, cpu_state: str = "", error: str | None = None) -> None:
        if state == SimulationState.RUNNING:
            label = "Running"
            if cpu_state == "waiting_for_key":
                label = "Waiting for key"
            elif cpu_state == "single_step_paused":
                label = "Step (press a key)"
        elif state == SimulationState.HALTED:
            label = f"Halted: {error}" if error else "Halted"
        else:
            label = "Paused"
        self._state_label.setText(label)
