import pytest

from chip8.interfaces.cpu import ICPU, CpuSnapshot, RegisterValue


class DummyCPU(ICPU):
    def __init__(self):
        self.cycles = 0
        self.last_keypad = None

    def load(self, program: bytes, size: int, start: int) -> None:
        pass

    def cycle(self, keypad):
        self.cycles += 1
        self.last_keypad = tuple(keypad)
        return ()

    def reset(self) -> None:
        self.cycles = 0

    def get_snapshot(self) -> CpuSnapshot:
        return CpuSnapshot(
            registers=[RegisterValue("V0", self.cycles)],
            flags={"VF": False},
        )


def test_icpu_default_tick_calls_cycle():
    cpu = DummyCPU()
    cpu.tick(3)
    assert cpu.cycles == 3
    assert cpu.last_keypad == (False,) * 16


def test_icpu_tick_passes_keypad():
    cpu = DummyCPU()
    keys = (True,) + (False,) * 15
    cpu.tick(1, keys)
    assert cpu.last_keypad == keys


def test_icpu_is_abstract():
    with pytest.raises(TypeError):
        ICPU()  # type: ignore[abstract]


def test_snapshot_defaults():
    snap = DummyCPU().get_snapshot()
    assert snap.stack == ()
    assert snap.state == "running"
    reg = next(iter(snap.registers))
    assert reg.group == "core"
    assert reg.width == 8
