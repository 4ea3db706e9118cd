from chip8.drivers.keypad import KeypadState

KEYMAP = {"1": 0x1, "Q": 0x4, "X": 0x0, "V": 0xF}


def test_starts_released():
    assert KeypadState(KEYMAP).poll() == (False,) * 16


def test_press_and_release_mapped_key():
    keypad = KeypadState(KEYMAP)
    assert keypad.press("q") is True
    assert keypad.poll()[0x4] is True
    assert keypad.release("Q") is True
    assert keypad.poll()[0x4] is False


def test_unmapped_key_ignored():
    keypad = KeypadState(KEYMAP)
    assert keypad.press("P") is False
    assert not any(keypad.poll())


def test_several_keys_held():
    keypad = KeypadState(KEYMAP)
    keypad.press("X")
    keypad.press("V")
    lines = keypad.poll()
    assert lines[0x0] and lines[0xF]
    assert sum(lines) == 2


def test_release_all():
    keypad = KeypadState(KEYMAP)
    keypad.press("1")
    keypad.release_all()
    assert not any(keypad.poll())


def test_keymap_names_are_case_insensitive():
    keypad = KeypadState({"w": 0x5})
    assert keypad.press("W") is True
