"""Register file and call stack.

Holds the sixteen general-purpose byte registers (V0-VF), the 16-bit index
register, the program counter and the bounded return-address stack.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from chip8.core.exceptions import StackOverflowError
from chip8.utils.consts import ConstUtils


@dataclass(frozen=True)
class RegisterDescriptor:
    """Metadata about a single register, used for debug views."""

    name: str
    width: int  # bits
    index: Optional[int] = None


V_REGISTERS = tuple(
    RegisterDescriptor(name=f"V{i:X}", width=8, index=i)
    for i in range(ConstUtils.REGISTER_COUNT)
)
INDEX_REGISTER = RegisterDescriptor(name="I", width=16)
PROGRAM_COUNTER = RegisterDescriptor(name="PC", width=16)


class CallStack:
    """Fixed-capacity stack of return addresses.

    The pointer counts entries in use and never exceeds the capacity.
    """

    def __init__(self, depth: int = ConstUtils.STACK_DEPTH):
        self._slots = [0] * depth
        self._pointer = 0

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def pointer(self) -> int:
        return self._pointer

    def push(self, address: int) -> None:
        """Push a return address.

        Raises:
            StackOverflowError: if the stack is already full. The stack is
                left untouched.
        """
        if self._pointer >= len(self._slots):
            raise StackOverflowError(pc=address, depth=self._pointer + 1)
        self._slots[self._pointer] = address & ConstUtils.MASK_16_BITS
        self._pointer += 1

    def pop(self) -> Optional[int]:
        """Pop the top return address, or return None if the stack is empty."""
        if self._pointer == 0:
            return None
        self._pointer -= 1
        return self._slots[self._pointer]

    def entries(self) -> list[int]:
        """Return the addresses in use, bottom first."""
        return list(self._slots[:self._pointer])

    def reset(self) -> None:
        self._slots = [0] * len(self._slots)
        self._pointer = 0


class RegisterFile:
    """Storage for V0-VF, I and PC plus the call stack."""

    def __init__(self):
        self._v = [0] * ConstUtils.REGISTER_COUNT
        self._index = 0
        self._pc = 0
        self.stack = CallStack()

    # General-purpose registers -------------------------------------------

    def __getitem__(self, reg: int) -> int:
        return self._v[self._validate_index(reg)]

    def __setitem__(self, reg: int, value: int) -> None:
        self._v[self._validate_index(reg)] = value & ConstUtils.MASK_8_BITS

    @property
    def flag(self) -> int:
        return self._v[ConstUtils.FLAG_REGISTER]

    @flag.setter
    def flag(self, value: int) -> None:
        self._v[ConstUtils.FLAG_REGISTER] = value & ConstUtils.MASK_8_BITS

    def values(self) -> list[int]:
        """Return a copy of V0-VF."""
        return list(self._v)

    # Special registers -----------------------------------------------------

    @property
    def index(self) -> int:
        return self._index

    @index.setter
    def index(self, value: int) -> None:
        self._index = value & ConstUtils.MASK_16_BITS

    @property
    def pc(self) -> int:
        return self._pc

    @pc.setter
    def pc(self, value: int) -> None:
        self._pc = value & ConstUtils.MASK_16_BITS

    def advance(self, words: int = 1) -> None:
        """Move PC forward by whole instructions."""
        self.pc = self._pc + words * ConstUtils.INSTRUCTION_SIZE

    def reset(self) -> None:
        """Zero every register and empty the stack."""
        self._v = [0] * ConstUtils.REGISTER_COUNT
        self._index = 0
        self._pc = 0
        self.stack.reset()

    # Private helpers -------------------------------------------------------

    @staticmethod
    def _validate_index(reg: int) -> int:
        if not 0 <= reg < ConstUtils.REGISTER_COUNT:
            raise ValueError(f"Invalid register index {reg}; must be 0-15")
        return reg
