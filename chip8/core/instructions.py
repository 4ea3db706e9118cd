"""Instruction word decoding.

A 16-bit word is split once into its nibble fields and matched against the
opcode table, producing an ``Instruction`` tagged with an ``Opcode``. The CPU
dispatches on the tag, so no handler re-extracts operands.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from chip8.utils.consts import ConstUtils


class Opcode(Enum):
    CLS = auto()
    RET = auto()
    SYS = auto()
    JP = auto()
    CALL = auto()
    SE_BYTE = auto()
    SNE_BYTE = auto()
    SE_REG = auto()
    LD_BYTE = auto()
    ADD_BYTE = auto()
    LD_REG = auto()
    OR = auto()
    AND = auto()
    XOR = auto()
    ADD_REG = auto()
    SUB = auto()
    SHR = auto()
    SUBN = auto()
    SHL = auto()
    SNE_REG = auto()
    LD_I = auto()
    JP_V0 = auto()
    RND = auto()
    DRW = auto()
    SKP = auto()
    SKNP = auto()
    LD_VX_DT = auto()
    LD_VX_K = auto()
    LD_DT_VX = auto()
    LD_ST_VX = auto()
    ADD_I_VX = auto()
    LD_F_VX = auto()
    LD_B_VX = auto()
    LD_I_VX = auto()
    LD_VX_I = auto()
    UNKNOWN = auto()


# (mask, match, opcode), checked in order; first hit wins
_OPCODE_TABLE: tuple[tuple[int, int, Opcode], ...] = (
    (0xFFFF, 0x00E0, Opcode.CLS),
    (0xFFFF, 0x00EE, Opcode.RET),
    (0xF000, 0x0000, Opcode.SYS),
    (0xF000, 0x1000, Opcode.JP),
    (0xF000, 0x2000, Opcode.CALL),
    (0xF000, 0x3000, Opcode.SE_BYTE),
    (0xF000, 0x4000, Opcode.SNE_BYTE),
    (0xF00F, 0x5000, Opcode.SE_REG),
    (0xF000, 0x6000, Opcode.LD_BYTE),
    (0xF000, 0x7000, Opcode.ADD_BYTE),
    (0xF00F, 0x8000, Opcode.LD_REG),
    (0xF00F, 0x8001, Opcode.OR),
    (0xF00F, 0x8002, Opcode.AND),
    (0xF00F, 0x8003, Opcode.XOR),
    (0xF00F, 0x8004, Opcode.ADD_REG),
    (0xF00F, 0x8005, Opcode.SUB),
    (0xF00F, 0x8006, Opcode.SHR),
    (0xF00F, 0x8007, Opcode.SUBN),
    (0xF00F, 0x800E, Opcode.SHL),
    (0xF00F, 0x9000, Opcode.SNE_REG),
    (0xF000, 0xA000, Opcode.LD_I),
    (0xF000, 0xB000, Opcode.JP_V0),
    (0xF000, 0xC000, Opcode.RND),
    (0xF000, 0xD000, Opcode.DRW),
    (0xF0FF, 0xE09E, Opcode.SKP),
    (0xF0FF, 0xE0A1, Opcode.SKNP),
    (0xF0FF, 0xF007, Opcode.LD_VX_DT),
    (0xF0FF, 0xF00A, Opcode.LD_VX_K),
    (0xF0FF, 0xF015, Opcode.LD_DT_VX),
    (0xF0FF, 0xF018, Opcode.LD_ST_VX),
    (0xF0FF, 0xF01E, Opcode.ADD_I_VX),
    (0xF0FF, 0xF029, Opcode.LD_F_VX),
    (0xF0FF, 0xF033, Opcode.LD_B_VX),
    (0xF0FF, 0xF055, Opcode.LD_I_VX),
    (0xF0FF, 0xF065, Opcode.LD_VX_I),
)

_MNEMONICS = {
    Opcode.CLS: "CLS",
    Opcode.RET: "RET",
    Opcode.SYS: "SYS {nnn:03X}",
    Opcode.JP: "JP {nnn:03X}",
    Opcode.CALL: "CALL {nnn:03X}",
    Opcode.SE_BYTE: "SE V{x:X}, {nn:02X}",
    Opcode.SNE_BYTE: "SNE V{x:X}, {nn:02X}",
    Opcode.SE_REG: "SE V{x:X}, V{y:X}",
    Opcode.LD_BYTE: "LD V{x:X}, {nn:02X}",
    Opcode.ADD_BYTE: "ADD V{x:X}, {nn:02X}",
    Opcode.LD_REG: "LD V{x:X}, V{y:X}",
    Opcode.OR: "OR V{x:X}, V{y:X}",
    Opcode.AND: "AND V{x:X}, V{y:X}",
    Opcode.XOR: "XOR V{x:X}, V{y:X}",
    Opcode.ADD_REG: "ADD V{x:X}, V{y:X}",
    Opcode.SUB: "SUB V{x:X}, V{y:X}",
    Opcode.SHR: "SHR V{x:X}",
    Opcode.SUBN: "SUBN V{x:X}, V{y:X}",
    Opcode.SHL: "SHL V{x:X}",
    Opcode.SNE_REG: "SNE V{x:X}, V{y:X}",
    Opcode.LD_I: "LD I, {nnn:03X}",
    Opcode.JP_V0: "JP V0, {nnn:03X}",
    Opcode.RND: "RND V{x:X}, {nn:02X}",
    Opcode.DRW: "DRW V{x:X}, V{y:X}, {n:X}",
    Opcode.SKP: "SKP V{x:X}",
    Opcode.SKNP: "SKNP V{x:X}",
    Opcode.LD_VX_DT: "LD V{x:X}, DT",
    Opcode.LD_VX_K: "LD V{x:X}, K",
    Opcode.LD_DT_VX: "LD DT, V{x:X}",
    Opcode.LD_ST_VX: "LD ST, V{x:X}",
    Opcode.ADD_I_VX: "ADD I, V{x:X}",
    Opcode.LD_F_VX: "LD F, V{x:X}",
    Opcode.LD_B_VX: "LD B, V{x:X}",
    Opcode.LD_I_VX: "LD [I], V{x:X}",
    Opcode.LD_VX_I: "LD V{x:X}, [I]",
    Opcode.UNKNOWN: "??? {word:04X}",
}


@dataclass(frozen=True)
class Instruction:
    """A decoded instruction word and its operand fields."""

    word: int
    opcode: Opcode

    @property
    def op(self) -> int:
        return (self.word >> 12) & ConstUtils.MASK_4_BITS

    @property
    def x(self) -> int:
        return (self.word >> 8) & ConstUtils.MASK_4_BITS

    @property
    def y(self) -> int:
        return (self.word >> 4) & ConstUtils.MASK_4_BITS

    @property
    def n(self) -> int:
        return self.word & ConstUtils.MASK_4_BITS

    @property
    def nn(self) -> int:
        return self.word & ConstUtils.MASK_8_BITS

    @property
    def nnn(self) -> int:
        return self.word & ConstUtils.MASK_12_BITS

    @property
    def mnemonic(self) -> str:
        return _MNEMONICS[self.opcode].format(
            word=self.word, x=self.x, y=self.y, n=self.n, nn=self.nn, nnn=self.nnn
        )

    def __str__(self) -> str:
        return f"{self.word:04X}  {self.mnemonic}"


def decode(word: int) -> Instruction:
    """Decode a 16-bit instruction word.

    Words that match no table entry decode to ``Opcode.UNKNOWN``.
    """
    word &= ConstUtils.MASK_16_BITS
    for mask, match, opcode in _OPCODE_TABLE:
        if word & mask == match:
            return Instruction(word=word, opcode=opcode)
    return Instruction(word=word, opcode=Opcode.UNKNOWN)
