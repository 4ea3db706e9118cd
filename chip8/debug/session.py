"""Debug session for stepping and inspecting a CPU."""

from __future__ import annotations

import binascii
import threading
from dataclasses import asdict, dataclass
from typing import Any, Callable, Sequence

from chip8.core.cpu import Chip8CPU, CpuState
from chip8.core.exceptions import Chip8Error
from chip8.interfaces.drivers import ProgramSource
from chip8.utils.consts import ConstUtils

NO_KEYS = (False,) * ConstUtils.KEY_COUNT


@dataclass(frozen=True)
class StopReason:
    reason: str
    address: int | None = None
    detail: str | None = None


def _bytes_to_hex(data: bytes) -> str:
    return binascii.hexlify(data).decode("ascii")


def _parse_keypad(raw: Any) -> tuple[bool, ...]:
    if raw is None:
        return NO_KEYS
    return tuple(bool(k) for k in raw)


class DebugSession:
    """Synchronous debug session bound to a single CPU.

    If ``program`` is given, the ``reset`` request reloads it at ``start``
    after clearing the CPU; otherwise reset leaves memory empty.
    """

    def __init__(
        self,
        cpu: Chip8CPU,
        lock: threading.RLock | None = None,
        program: ProgramSource | None = None,
        start: int = ConstUtils.PROGRAM_START,
    ):
        self.cpu = cpu
        self.program = program
        self.start = start
        self._breakpoints: set[int] = set()
        self._halt_requested = False
        self._lock = lock or threading.RLock()

    def request_halt(self) -> None:
        self._halt_requested = True

    def clear_halt(self) -> None:
        self._halt_requested = False

    def set_breakpoint(self, address: int) -> None:
        with self._lock:
            self._breakpoints.add(address)

    def clear_breakpoint(self, address: int) -> bool:
        with self._lock:
            if address in self._breakpoints:
                self._breakpoints.remove(address)
                return True
            return False

    @property
    def breakpoints(self) -> list[int]:
        return sorted(self._breakpoints)

    def read_memory(self, address: int, size: int) -> bytes:
        with self._lock:
            return self.cpu.read_memory(address, size)

    def read_register(self, index: int) -> int:
        with self._lock:
            return self.cpu.get_register(index)

    def step(self, keypad: Sequence[bool] = NO_KEYS) -> StopReason:
        """Run one cycle, then report where execution stopped."""
        self.clear_halt()
        with self._lock:
            pc = self.cpu.next_pc
            try:
                self.cpu.cycle(keypad)
            except Chip8Error as exc:
                return StopReason(reason="fault", address=pc, detail=str(exc))

            if self.cpu.state is CpuState.WAITING_FOR_KEY:
                return StopReason(reason="wait_key", address=self.cpu.next_pc)
            if self.cpu.state is CpuState.SINGLE_STEP_PAUSED:
                return StopReason(reason="paused", address=self.cpu.next_pc)
            if self._at_breakpoint():
                return StopReason(reason="breakpoint", address=self.cpu.next_pc)
            return StopReason(reason="step", address=self.cpu.next_pc)

    def run(self, max_steps: int | None = None, keypad: Sequence[bool] = NO_KEYS) -> StopReason:
        """Cycle until execution stops.

        Stops on a breakpoint, a fault, a key wait, a single-step pause, a halt
        request or the step limit.
        """
        self.clear_halt()
        steps = 0

        while True:
            if self._halt_requested:
                return StopReason(reason="halt", address=self.cpu.next_pc)

            with self._lock:
                pc = self.cpu.next_pc
                if steps and self._at_breakpoint():
                    return StopReason(reason="breakpoint", address=pc)

                try:
                    self.cpu.cycle(keypad)
                except Chip8Error as exc:
                    return StopReason(reason="fault", address=pc, detail=str(exc))

                if self.cpu.state is CpuState.WAITING_FOR_KEY:
                    return StopReason(reason="wait_key", address=self.cpu.next_pc)
                if self.cpu.state is CpuState.SINGLE_STEP_PAUSED:
                    return StopReason(reason="paused", address=self.cpu.next_pc)

                steps += 1
                if max_steps is not None and steps >= max_steps:
                    return StopReason(reason="limit", address=self.cpu.next_pc)

    def _at_breakpoint(self) -> bool:
        return self.cpu.next_pc in self._breakpoints

    def handle_request(self, request: dict[str, Any]) -> dict[str, Any]:
        req_id = request.get("id")
        cmd = request.get("cmd")
        if not isinstance(cmd, str):
            raise ValueError("Command must be a string")

        handlers: dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
            "hello": self._cmd_hello,
            "reset": self._cmd_reset,
            "read_mem": self._cmd_read_mem,
            "read_reg": self._cmd_read_reg,
            "state": self._cmd_state,
            "run": self._cmd_run,
            "step": self._cmd_step,
            "halt": self._cmd_halt,
            "set_bp": self._cmd_set_bp,
            "clear_bp": self._cmd_clear_bp,
        }

        try:
            handler = handlers.get(cmd)
            if handler is None:
                raise ValueError(f"Unknown command '{cmd}'")
            result = handler(request)
            return {"id": req_id, "ok": True, "result": result}
        except (Chip8Error, KeyError, TypeError, ValueError) as exc:
            return {"id": req_id, "ok": False, "error": str(exc)}

    def _cmd_hello(self, _request: dict[str, Any]) -> dict[str, Any]:
        return {"version": 1, "machine": "chip8"}

    def _cmd_reset(self, _request: dict[str, Any]) -> dict[str, Any]:
        with self._lock:
            self.cpu.reset()
            if self.program is not None:
                self.cpu.load(self.program.rom, self.program.size, self.start)
        return {"status": "ok", "reloaded": self.program is not None}

    def _cmd_read_mem(self, request: dict[str, Any]) -> dict[str, Any]:
        address = int(request["address"])
        size = int(request["size"])
        return {"data": _bytes_to_hex(self.read_memory(address, size))}

    def _cmd_read_reg(self, request: dict[str, Any]) -> dict[str, Any]:
        index = int(request["index"])
        return {"value": self.read_register(index)}

    def _cmd_state(self, _request: dict[str, Any]) -> dict[str, Any]:
        with self._lock:
            return {
                "pc": self.cpu.pc,
                "index": self.cpu.index,
                "registers": self.cpu.registers(),
                "stack": self.cpu.stack,
                "state": self.cpu.state.value,
            }

    def _cmd_run(self, request: dict[str, Any]) -> dict[str, Any]:
        max_steps = request.get("max_steps")
        stop = self.run(
            max_steps=max_steps if max_steps is None else int(max_steps),
            keypad=_parse_keypad(request.get("keypad")),
        )
        return asdict(stop)

    def _cmd_step(self, request: dict[str, Any]) -> dict[str, Any]:
        return asdict(self.step(keypad=_parse_keypad(request.get("keypad"))))

    def _cmd_halt(self, _request: dict[str, Any]) -> dict[str, Any]:
        self.request_halt()
        return {"status": "ok"}

    def _cmd_set_bp(self, request: dict[str, Any]) -> dict[str, Any]:
        self.set_breakpoint(int(request["address"]))
        return {"status": "ok"}

    def _cmd_clear_bp(self, request: dict[str, Any]) -> dict[str, Any]:
        return {"removed": self.clear_breakpoint(int(request["address"]))}
