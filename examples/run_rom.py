import argparse
import logging
import sys
from pathlib import Path

# Ensure local repo package is used even if another "chip8" is on PYTHONPATH.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chip8 import CartridgeDriver, Chip8CPU, KeypadState, SimulationEngine, TextRenderer, load_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a CHIP-8 program headless and print the screen.")
    parser.add_argument("rom", help="Path to a CHIP-8 program image")
    parser.add_argument("--config", default=None, help="Path to emulator config YAML")
    parser.add_argument(
        "--cycles",
        type=int,
        default=2_000,
        help="Number of instruction cycles to run",
    )
    parser.add_argument("--debug", type=int, default=None, choices=range(3), help="Debug level 0-2")
    parser.add_argument("--listing", action="store_true", help="Print the program words before running")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = load_config(args.config)
    cart = CartridgeDriver(args.rom)
    cpu = Chip8CPU(debug_level=args.debug if args.debug is not None else min(config.cpu.debug_level, 2))
    engine = SimulationEngine()
    engine.load(cpu, cart, config.cpu.program_start)

    if args.listing:
        print("\n".join(cpu.program_listing()))

    keypad = KeypadState(config.keypad.keymap)
    renderer = TextRenderer()
    engine.run(cpu, keypad, renderer, cycles=args.cycles)

    print(renderer.render())
    print(f"PC=0x{cpu.pc:03X} state={cpu.state.value} cycles={cpu.cycle_count}")


if __name__ == "__main__":
    main()
