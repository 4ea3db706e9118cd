"""CHIP-8 CPU: state plus the fetch-decode-execute cycle.

The CPU owns its memory, registers, timers, keypad latch and framebuffer.
Callers only see ``load``, ``cycle`` and the read-only accessors used by
debug views; all mutation happens inside ``cycle``.
"""

from __future__ import annotations

import logging
import random
from enum import Enum, IntEnum
from typing import Callable, Optional, Sequence

from chip8.core.exceptions import Chip8Error, ConfigurationError
from chip8.core.framebuffer import Frame, Framebuffer, render_text
from chip8.core.instructions import Instruction, Opcode, decode
from chip8.core.interrupt_controller import KeypadLatch
from chip8.core.memory import Memory
from chip8.core.register import INDEX_REGISTER, PROGRAM_COUNTER, V_REGISTERS, RegisterFile
from chip8.core.timers import TimerUnit
from chip8.interfaces.cpu import ICPU, CpuSnapshot, RegisterValue
from chip8.utils.consts import ConstUtils, font_address

logger = logging.getLogger(__name__)


class CpuState(Enum):
    RUNNING = "running"
    WAITING_FOR_KEY = "waiting_for_key"
    SINGLE_STEP_PAUSED = "single_step_paused"


class DebugLevel(IntEnum):
    OFF = 0
    TRACE = 1
    DUMP = 2
    STEP = 3


class Chip8CPU(ICPU):
    """Interpreter for the base CHIP-8 instruction set.

    Each ``cycle`` call is one tick: it either resolves a pending keypress
    wait, holds in single-step mode, or ticks the timers and executes exactly
    one instruction.

    Args:
        debug_level: 0 quiet, 1 trace each fetch, 2 dump full state before
            each instruction, 3 pause after every instruction until a key
            is pressed.
        rng: random source for the RND instruction. Defaults to an unseeded
            ``random.Random``.
    """

    def __init__(self, debug_level: int = DebugLevel.OFF, rng: Optional[random.Random] = None):
        self._memory = Memory()
        self._registers = RegisterFile()
        self._timers = TimerUnit()
        self._latch = KeypadLatch()
        self._framebuffer = Framebuffer()
        self._rng = rng or random.Random()

        self._debug_level = DebugLevel.OFF
        self.set_debug(debug_level)
        self._paused = False
        self._redirected = False
        # RET lands on the CALL site; the next cycle steps over it
        self._resume_after_call = False
        self._keypad: tuple[bool, ...] = (False,) * ConstUtils.KEY_COUNT
        self._program_start = ConstUtils.PROGRAM_START
        self._program_size = 0
        self._cycles = 0
        self.last_instruction: Optional[Instruction] = None

        self._handlers: dict[Opcode, Callable[[Instruction], None]] = {
            Opcode.CLS: self._op_cls,
            Opcode.RET: self._op_ret,
            Opcode.SYS: self._op_sys,
            Opcode.JP: self._op_jp,
            Opcode.CALL: self._op_call,
            Opcode.SE_BYTE: self._op_se_byte,
            Opcode.SNE_BYTE: self._op_sne_byte,
            Opcode.SE_REG: self._op_se_reg,
            Opcode.LD_BYTE: self._op_ld_byte,
            Opcode.ADD_BYTE: self._op_add_byte,
            Opcode.LD_REG: self._op_ld_reg,
            Opcode.OR: self._op_or,
            Opcode.AND: self._op_and,
            Opcode.XOR: self._op_xor,
            Opcode.ADD_REG: self._op_add_reg,
            Opcode.SUB: self._op_sub,
            Opcode.SHR: self._op_shr,
            Opcode.SUBN: self._op_subn,
            Opcode.SHL: self._op_shl,
            Opcode.SNE_REG: self._op_sne_reg,
            Opcode.LD_I: self._op_ld_i,
            Opcode.JP_V0: self._op_jp_v0,
            Opcode.RND: self._op_rnd,
            Opcode.DRW: self._op_drw,
            Opcode.SKP: self._op_skp,
            Opcode.SKNP: self._op_sknp,
            Opcode.LD_VX_DT: self._op_ld_vx_dt,
            Opcode.LD_VX_K: self._op_ld_vx_k,
            Opcode.LD_DT_VX: self._op_ld_dt_vx,
            Opcode.LD_ST_VX: self._op_ld_st_vx,
            Opcode.ADD_I_VX: self._op_add_i_vx,
            Opcode.LD_F_VX: self._op_ld_f_vx,
            Opcode.LD_B_VX: self._op_ld_b_vx,
            Opcode.LD_I_VX: self._op_ld_i_vx,
            Opcode.LD_VX_I: self._op_ld_vx_i,
            Opcode.UNKNOWN: self._op_unknown,
        }

    # Public API ------------------------------------------------------------

    def set_debug(self, level: int) -> None:
        """Select the debug level (0-3)."""
        try:
            self._debug_level = DebugLevel(level)
        except ValueError as exc:
            raise ConfigurationError("debug_level", f"must be 0-3, got {level}") from exc
        if self._debug_level < DebugLevel.STEP:
            self._paused = False

    def load(self, program: bytes, size: int, start: int = ConstUtils.PROGRAM_START) -> None:
        """Copy ``size`` bytes of ``program`` to ``start``, install the font, set PC.

        Raises:
            ConfigurationError: if the image is larger than the program area
                or does not fit in memory at ``start``.
        """
        if size > ConstUtils.MAX_PROGRAM_SIZE:
            raise ConfigurationError(
                "program_size",
                f"{size} bytes exceeds the {ConstUtils.MAX_PROGRAM_SIZE}-byte program area",
            )
        self._memory.load_image(program, size, start)
        self._memory.load_font()
        self._registers.pc = start
        self._latch.reset()
        self._paused = False
        self._redirected = False
        self._resume_after_call = False
        self._program_start = start
        self._program_size = size
        logger.info("Loaded %d-byte program at 0x%03X", size, start)

    def reset(self) -> None:
        """Return to the freshly constructed state (memory cleared)."""
        self._memory.reset()
        self._registers.reset()
        self._timers.reset()
        self._latch.reset()
        self._framebuffer.clear()
        self._paused = False
        self._redirected = False
        self._resume_after_call = False
        self._program_size = 0
        self._cycles = 0
        self.last_instruction = None

    def cycle(self, keypad: Sequence[bool]) -> Frame:
        """Run one tick of the machine and return the framebuffer."""
        self._keypad = self._validate_keypad(keypad)

        if self._latch.pending:
            event = self._latch.poll(self._keypad)
            if event is not None:
                self._registers[event.register] = event.key
                logger.debug("Key %X captured into V%X", event.key, event.register)
            return self._framebuffer.snapshot()

        if self._paused:
            if not any(self._keypad):
                return self._framebuffer.snapshot()
            self._paused = False

        self._timers.tick()

        if self._resume_after_call:
            self._registers.advance()
            self._resume_after_call = False

        pc = self._registers.pc
        try:
            word = self._memory.read_word(pc)
        except Chip8Error as exc:
            logger.error(f"Instruction fetch failed at PC=0x{pc:04X}: {exc}")
            raise

        instruction = decode(word)
        self.last_instruction = instruction
        self._trace(pc, instruction)

        self._redirected = False
        try:
            self._handlers[instruction.opcode](instruction)
        except Chip8Error as exc:
            logger.error(f"CPU execution error at PC=0x{pc:04X} ({instruction.mnemonic}): {exc}")
            raise

        if not self._redirected:
            self._registers.advance()

        self._cycles += 1
        if self._debug_level >= DebugLevel.STEP:
            self._paused = True

        return self._framebuffer.snapshot()

    # Read-only accessors ----------------------------------------------------

    @property
    def state(self) -> CpuState:
        if self._latch.pending:
            return CpuState.WAITING_FOR_KEY
        if self._paused:
            return CpuState.SINGLE_STEP_PAUSED
        return CpuState.RUNNING

    @property
    def next_pc(self) -> int:
        """Address of the next instruction to execute.

        Differs from ``pc`` only after a return, while PC still rests on the
        CALL that the next cycle steps over.
        """
        if self._resume_after_call:
            return (self._registers.pc + ConstUtils.INSTRUCTION_SIZE) & ConstUtils.MASK_16_BITS
        return self._registers.pc

    @property
    def debug_level(self) -> DebugLevel:
        return self._debug_level

    @property
    def pc(self) -> int:
        return self._registers.pc

    @property
    def index(self) -> int:
        return self._registers.index

    @property
    def stack(self) -> list[int]:
        return self._registers.stack.entries()

    @property
    def stack_pointer(self) -> int:
        return self._registers.stack.pointer

    @property
    def delay_timer(self) -> int:
        return self._timers.delay

    @property
    def sound_timer(self) -> int:
        return self._timers.sound

    @property
    def cycle_count(self) -> int:
        return self._cycles

    @property
    def framebuffer(self) -> Frame:
        return self._framebuffer.snapshot()

    def get_register(self, index: int) -> int:
        """Get a general-purpose register by index (0-15)."""
        return self._registers[index]

    def registers(self) -> list[int]:
        return self._registers.values()

    def read_memory(self, address: int, size: int = 1) -> bytes:
        return self._memory.read_block(address, size)

    def get_snapshot(self) -> CpuSnapshot:
        regs = [
            RegisterValue(name=desc.name, value=value)
            for desc, value in zip(V_REGISTERS, self._registers.values())
        ]
        regs.extend([
            RegisterValue(name=INDEX_REGISTER.name, value=self._registers.index, group="special", width=16),
            RegisterValue(name=PROGRAM_COUNTER.name, value=self._registers.pc, group="special", width=16),
            RegisterValue(name="SP", value=self._registers.stack.pointer, group="special"),
            RegisterValue(name="DT", value=self._timers.delay, group="timer"),
            RegisterValue(name="ST", value=self._timers.sound, group="timer"),
        ])
        return CpuSnapshot(
            registers=regs,
            flags={
                "VF": bool(self._registers.flag),
                "WAIT": self._latch.pending,
                "SOUND": self._timers.sound_active,
            },
            stack=self._registers.stack.entries(),
            state=self.state.value,
        )

    def dump_state(self) -> str:
        """Human-readable dump of registers, I, PC, stack and the screen."""
        values = self._registers.values()
        lines = [
            " ".join(f"V{i:X}={v:02X}" for i, v in enumerate(values[:8])),
            " ".join(f"V{i:X}={v:02X}" for i, v in enumerate(values[8:], start=8)),
            f"I={self._registers.index:04X} PC={self._registers.pc:04X} "
            f"DT={self._timers.delay:02X} ST={self._timers.sound:02X}",
            "STACK: " + (" ".join(f"{a:04X}" for a in self.stack) or "--"),
            render_text(self._framebuffer.snapshot()),
        ]
        return "\n".join(lines)

    def program_listing(self, size: Optional[int] = None) -> list[str]:
        """Return the loaded program as rows of eight hex words."""
        size = self._program_size if size is None else size
        words = [
            f"{self._memory.read_word(addr):04x}"
            for addr in range(self._program_start, self._program_start + size, 2)
        ]
        return [" ".join(words[i:i + 8]) for i in range(0, len(words), 8)]

    # Private helpers -------------------------------------------------------

    @staticmethod
    def _validate_keypad(keypad: Sequence[bool]) -> tuple[bool, ...]:
        keys = tuple(bool(k) for k in keypad)
        if len(keys) != ConstUtils.KEY_COUNT:
            raise ValueError(f"Keypad must have {ConstUtils.KEY_COUNT} lines, got {len(keys)}")
        return keys

    def _trace(self, pc: int, instruction: Instruction) -> None:
        if self._debug_level >= DebugLevel.DUMP:
            logger.info("STATE before 0x%04X:\n%s", pc, self.dump_state())
        if self._debug_level >= DebugLevel.TRACE:
            logger.info("FETCH: %04X  %s", pc, instruction)

    def _jump(self, address: int) -> None:
        self._registers.pc = address
        self._redirected = True

    def _skip_if(self, condition: bool) -> None:
        if condition:
            self._registers.advance()

    def _set_with_flag(self, x: int, result: int, flag: bool) -> None:
        # VF written last so the flag survives when x is VF
        self._registers[x] = result
        self._registers.flag = int(flag)

    def _key_pressed(self, key: int) -> bool:
        return key < len(self._keypad) and self._keypad[key]

    # Opcode handlers -------------------------------------------------------

    def _op_cls(self, _ins: Instruction) -> None:
        self._framebuffer.clear()

    def _op_ret(self, ins: Instruction) -> None:
        address = self._registers.stack.pop()
        if address is None:
            logger.error("RET at PC=0x%04X with empty call stack; no address to return to", self.pc)
            self._redirected = True
            return
        self._jump(address)
        self._resume_after_call = True

    def _op_sys(self, ins: Instruction) -> None:
        logger.info("Ignoring legacy system call %s", ins.mnemonic)

    def _op_jp(self, ins: Instruction) -> None:
        self._jump(ins.nnn)

    def _op_call(self, ins: Instruction) -> None:
        self._registers.stack.push(self._registers.pc)
        self._jump(ins.nnn)

    def _op_se_byte(self, ins: Instruction) -> None:
        self._skip_if(self._registers[ins.x] == ins.nn)

    def _op_sne_byte(self, ins: Instruction) -> None:
        self._skip_if(self._registers[ins.x] != ins.nn)

    def _op_se_reg(self, ins: Instruction) -> None:
        self._skip_if(self._registers[ins.x] == self._registers[ins.y])

    def _op_sne_reg(self, ins: Instruction) -> None:
        self._skip_if(self._registers[ins.x] != self._registers[ins.y])

    def _op_ld_byte(self, ins: Instruction) -> None:
        self._registers[ins.x] = ins.nn

    def _op_add_byte(self, ins: Instruction) -> None:
        self._registers[ins.x] = self._registers[ins.x] + ins.nn

    def _op_ld_reg(self, ins: Instruction) -> None:
        self._registers[ins.x] = self._registers[ins.y]

    def _op_or(self, ins: Instruction) -> None:
        self._registers[ins.x] = self._registers[ins.x] | self._registers[ins.y]

    def _op_and(self, ins: Instruction) -> None:
        self._registers[ins.x] = self._registers[ins.x] & self._registers[ins.y]

    def _op_xor(self, ins: Instruction) -> None:
        self._registers[ins.x] = self._registers[ins.x] ^ self._registers[ins.y]

    def _op_add_reg(self, ins: Instruction) -> None:
        total = self._registers[ins.x] + self._registers[ins.y]
        self._set_with_flag(ins.x, total, total > ConstUtils.MASK_8_BITS)

    def _op_sub(self, ins: Instruction) -> None:
        vx, vy = self._registers[ins.x], self._registers[ins.y]
        self._set_with_flag(ins.x, vx - vy, vx >= vy)

    def _op_subn(self, ins: Instruction) -> None:
        vx, vy = self._registers[ins.x], self._registers[ins.y]
        self._set_with_flag(ins.x, vy - vx, vy >= vx)

    def _op_shr(self, ins: Instruction) -> None:
        vx = self._registers[ins.x]
        self._set_with_flag(ins.x, vx >> 1, bool(vx & 0x01))

    def _op_shl(self, ins: Instruction) -> None:
        vx = self._registers[ins.x]
        self._set_with_flag(ins.x, vx << 1, bool(vx & 0x80))

    def _op_ld_i(self, ins: Instruction) -> None:
        self._registers.index = ins.nnn

    def _op_jp_v0(self, ins: Instruction) -> None:
        self._jump(ins.nnn + self._registers[0])

    def _op_rnd(self, ins: Instruction) -> None:
        self._registers[ins.x] = self._rng.getrandbits(8) & ins.nn

    def _op_drw(self, ins: Instruction) -> None:
        sprite = self._memory.read_block(self._registers.index, ins.n)
        collision = self._framebuffer.draw_sprite(
            self._registers[ins.x], self._registers[ins.y], sprite
        )
        self._registers.flag = int(collision)

    def _op_skp(self, ins: Instruction) -> None:
        self._skip_if(self._key_pressed(self._registers[ins.x]))

    def _op_sknp(self, ins: Instruction) -> None:
        self._skip_if(not self._key_pressed(self._registers[ins.x]))

    def _op_ld_vx_dt(self, ins: Instruction) -> None:
        self._registers[ins.x] = self._timers.delay

    def _op_ld_vx_k(self, ins: Instruction) -> None:
        self._latch.arm(ins.x)

    def _op_ld_dt_vx(self, ins: Instruction) -> None:
        self._timers.delay = self._registers[ins.x]

    def _op_ld_st_vx(self, ins: Instruction) -> None:
        self._timers.sound = self._registers[ins.x]

    def _op_add_i_vx(self, ins: Instruction) -> None:
        self._registers.index = self._registers.index + self._registers[ins.x]

    def _op_ld_f_vx(self, ins: Instruction) -> None:
        address = font_address(self._registers[ins.x])
        # Raises if the glyph would fall outside memory
        self._memory.read_block(address, 5)
        self._registers.index = address

    def _op_ld_b_vx(self, ins: Instruction) -> None:
        value = self._registers[ins.x]
        digits = bytes([value // 100, (value // 10) % 10, value % 10])
        self._memory.write_block(self._registers.index, digits)

    def _op_ld_i_vx(self, ins: Instruction) -> None:
        values = self._registers.values()[:ins.x + 1]
        self._memory.write_block(self._registers.index, bytes(values))

    def _op_ld_vx_i(self, ins: Instruction) -> None:
        block = self._memory.read_block(self._registers.index, ins.x + 1)
        for reg, value in enumerate(block):
            self._registers[reg] = value

    def _op_unknown(self, ins: Instruction) -> None:
        logger.warning("Unknown instruction %04X at PC=0x%04X; skipping", ins.word, self.pc)
