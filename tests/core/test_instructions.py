import pytest

from chip8.core.instructions import Instruction, Opcode, decode


def test_operand_fields():
    ins = decode(0xD12A)
    assert ins.opcode is Opcode.DRW
    assert (ins.op, ins.x, ins.y, ins.n) == (0xD, 1, 2, 0xA)
    assert ins.nn == 0x2A
    assert ins.nnn == 0x12A


@pytest.mark.parametrize(
    "word, opcode",
    [
        (0x00E0, Opcode.CLS),
        (0x00EE, Opcode.RET),
        (0x0123, Opcode.SYS),
        (0x1ABC, Opcode.JP),
        (0x2ABC, Opcode.CALL),
        (0x5120, Opcode.SE_REG),
        (0x812E, Opcode.SHL),
        (0x9120, Opcode.SNE_REG),
        (0xBABC, Opcode.JP_V0),
        (0xE59E, Opcode.SKP),
        (0xE5A1, Opcode.SKNP),
        (0xF50A, Opcode.LD_VX_K),
        (0xF555, Opcode.LD_I_VX),
        (0xF565, Opcode.LD_VX_I),
    ],
)
def test_decode_families(word, opcode):
    assert decode(word).opcode is opcode


@pytest.mark.parametrize("word", [0x5121, 0x9121, 0x8128, 0xE500, 0xF500, 0xF5FF])
def test_unassigned_encodings_decode_unknown(word):
    assert decode(word).opcode is Opcode.UNKNOWN


def test_decode_masks_to_16_bits():
    assert decode(0x100E0).word == 0x00E0


@pytest.mark.parametrize(
    "word, text",
    [
        (0x00E0, "CLS"),
        (0x6A42, "LD VA, 42"),
        (0xD015, "DRW V0, V1, 5"),
        (0xF233, "LD B, V2"),
        (0x5121, "??? 5121"),
    ],
)
def test_mnemonic(word, text):
    assert decode(word).mnemonic == text


def test_str_includes_word():
    assert str(Instruction(word=0xA123, opcode=Opcode.LD_I)) == "A123  LD I, 123"
