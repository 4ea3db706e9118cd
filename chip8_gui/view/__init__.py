from chip8_gui.view.main_window import MainWindow
from chip8_gui.view.register_panel import RegisterPanel
from chip8_gui.view.screen_canvas import ScreenCanvas
from chip8_gui.view.top_bar import TopBar

__all__ = [
    "MainWindow",
    "RegisterPanel",
    "ScreenCanvas",
    "TopBar",
]
