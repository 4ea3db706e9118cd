import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chip8_gui import run_gui


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python examples/run_gui.py <rom> [--debug N]")
        raise SystemExit(2)
    raise SystemExit(run_gui(sys.argv[1:]))
