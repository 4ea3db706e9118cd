"""GUI application entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from threading import RLock

from PySide6 import QtWidgets

from chip8.core.cpu import Chip8CPU
from chip8.drivers.cartridge import CartridgeDriver
from chip8.drivers.keypad import KeypadState
from chip8.utils.config_loader import load_config
from chip8_gui.backend import Chip8Backend
from chip8_gui.controller import SimulationController
from chip8_gui.view.main_window import MainWindow


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="CHIP-8 emulator GUI")
    parser.add_argument("rom", help="Path to a CHIP-8 program image")
    parser.add_argument("--config", default=None, help="Path to emulator config YAML")
    parser.add_argument("--debug", type=int, default=None, choices=range(4), help="Debug level 0-3")
    parser.add_argument("--cycles", type=int, default=None, help="Cycles per GUI tick")
    parser.add_argument("--tick-ms", type=int, default=None, help="GUI tick interval (ms)")
    return parser.parse_args(argv)


def run_gui(argv: list[str] | None = None) -> int:
    args = _parse_args(argv if argv is not None else sys.argv[1:])
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = load_config(args.config)
    debug_level = args.debug if args.debug is not None else config.cpu.debug_level

    cartridge = CartridgeDriver(args.rom)
    cpu = Chip8CPU(debug_level=debug_level)
    cpu.load(cartridge.rom, cartridge.size, config.cpu.program_start)

    keypad = KeypadState(config.keypad.keymap)
    backend = Chip8Backend(
        cpu=cpu,
        keypad=keypad,
        cartridge=cartridge,
        program_start=config.cpu.program_start,
        lock=RLock(),
    )
    controller = SimulationController(backend, keypad)

    app = QtWidgets.QApplication(sys.argv)
    window = MainWindow(
        controller,
        config,
        backend.title,
        cycles_per_tick=args.cycles,
        tick_ms=args.tick_ms,
    )
    window.show()
    return app.exec()


def main() -> None:
    raise SystemExit(run_gui())


if __name__ == "__main__":
    main()
