"""PySide6 front end: window, framebuffer canvas and register panel."""

from chip8_gui.app import main, run_gui

__all__ = ["main", "run_gui"]
