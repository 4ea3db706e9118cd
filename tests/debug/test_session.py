import pytest

from chip8.core.cpu import Chip8CPU
from chip8.drivers.cartridge import CartridgeDriver
from chip8.debug.session import DebugSession, StopReason


def _session(*words):
    program = b"".join(w.to_bytes(2, "big") for w in words)
    cpu = Chip8CPU()
    cpu.load(program, len(program), 0x200)
    return DebugSession(cpu)


class TestStepping:
    def test_step_reports_new_pc(self):
        session = _session(0x6001, 0x6102)
        assert session.step() == StopReason(reason="step", address=0x202)

    def test_step_onto_breakpoint(self):
        session = _session(0x6001, 0x6102)
        session.set_breakpoint(0x202)
        assert session.step().reason == "breakpoint"

    def test_step_into_key_wait(self):
        session = _session(0xF00A)
        assert session.step().reason == "wait_key"

    def test_step_fault(self):
        session = _session(0x1FFF)
        session.step()
        stop = session.step()
        assert stop.reason == "fault"
        assert stop.address == 0xFFF
        assert "Out-of-bounds" in stop.detail


class TestRunning:
    def test_run_until_breakpoint(self):
        session = _session(0x6001, 0x6102, 0x6203, 0x1206)
        session.set_breakpoint(0x204)
        stop = session.run(max_steps=100)
        assert stop == StopReason(reason="breakpoint", address=0x204)
        assert session.read_register(1) == 2
        assert session.read_register(2) == 0

    def test_run_starting_on_breakpoint_moves_past_it(self):
        session = _session(0x6001, 0x6102, 0x1204)
        session.set_breakpoint(0x200)
        stop = session.run(max_steps=5)
        assert stop.reason == "limit"
        assert session.read_register(0) == 1

    def test_run_step_limit(self):
        session = _session(0x1200)
        stop = session.run(max_steps=10)
        assert stop.reason == "limit"
        assert session.cpu.cycle_count == 10

    def test_run_stops_on_key_wait(self):
        session = _session(0x6001, 0xF20A)
        assert session.run(max_steps=10).reason == "wait_key"

    def test_halt_requested_before_run_is_cleared(self):
        session = _session(0x1200)
        session.request_halt()
        assert session.run(max_steps=3).reason == "limit"


class TestBreakpoints:
    def test_set_and_clear(self):
        session = _session(0x1200)
        session.set_breakpoint(0x300)
        session.set_breakpoint(0x200)
        assert session.breakpoints == [0x200, 0x300]
        assert session.clear_breakpoint(0x300) is True
        assert session.clear_breakpoint(0x300) is False
        assert session.breakpoints == [0x200]


class TestRequests:
    def test_hello(self):
        resp = _session(0x1200).handle_request({"id": 1, "cmd": "hello"})
        assert resp == {"id": 1, "ok": True, "result": {"version": 1, "machine": "chip8"}}

    def test_read_mem_returns_hex(self):
        session = _session(0xA2F0)
        resp = session.handle_request({"id": 2, "cmd": "read_mem", "address": 0x200, "size": 2})
        assert resp["result"] == {"data": "a2f0"}

    def test_read_reg(self):
        session = _session(0x6A42)
        session.step()
        resp = session.handle_request({"id": 3, "cmd": "read_reg", "index": 0xA})
        assert resp["result"] == {"value": 0x42}

    def test_state(self):
        session = _session(0x2300)
        session.step()
        result = session.handle_request({"id": 4, "cmd": "state"})["result"]
        assert result["pc"] == 0x300
        assert result["stack"] == [0x200]
        assert result["state"] == "running"

    def test_step_with_keypad(self):
        session = _session(0xF30A, 0x1202)
        session.step()
        keypad = [False] * 16
        keypad[6] = True
        resp = session.handle_request({"id": 5, "cmd": "step", "keypad": keypad})
        assert resp["ok"] is True
        assert session.read_register(3) == 6

    def test_run_and_breakpoint_commands(self):
        session = _session(0x6001, 0x6102, 0x1204)
        session.handle_request({"id": 6, "cmd": "set_bp", "address": 0x202})
        resp = session.handle_request({"id": 7, "cmd": "run", "max_steps": 10})
        assert resp["result"] == {"reason": "breakpoint", "address": 0x202, "detail": None}

        resp = session.handle_request({"id": 8, "cmd": "clear_bp", "address": 0x202})
        assert resp["result"] == {"removed": True}

    def test_reset(self):
        session = _session(0x6001)
        session.step()
        session.handle_request({"id": 9, "cmd": "reset"})
        assert session.cpu.pc == 0

    @pytest.mark.parametrize(
        "request_",
        [
            {"id": 10, "cmd": "bogus"},
            {"id": 10, "cmd": "read_mem", "address": 0xFFF, "size": 4},
            {"id": 10, "cmd": "read_reg"},
            {"id": 10, "cmd": "read_reg", "index": 16},
        ],
    )
    def test_errors_are_reported(self, request_):
        resp = _session(0x1200).handle_request(request_)
        assert resp["id"] == 10
        assert resp["ok"] is False
        assert resp["error"]

    def test_command_must_be_string(self):
        with pytest.raises(ValueError):
            _session(0x1200).handle_request({"id": 11})


class TestCallSiteBreakpoints:
    def test_breakpoint_on_call_not_hit_again_after_return(self):
        session = _session(0x2206, 0x6001, 0x1204, 0x00EE)
        session.set_breakpoint(0x200)
        stop = session.run(max_steps=50)
        assert stop.reason == "limit"
        assert session.read_register(0) == 1

    def test_step_onto_call_site_after_return_is_plain_step(self):
        session = _session(0x2206, 0x6001, 0x1204, 0x00EE)
        session.set_breakpoint(0x200)
        session.step()
        stop = session.step()
        assert stop == StopReason(reason="step", address=0x202)
        assert session.cpu.pc == 0x200
        assert session.cpu.next_pc == 0x202

    def test_breakpoint_after_call_site_still_fires(self):
        session = _session(0x2206, 0x6001, 0x1204, 0x00EE)
        session.set_breakpoint(0x202)
        stop = session.run(max_steps=50)
        assert stop == StopReason(reason="breakpoint", address=0x202)
        assert session.read_register(0) == 0


class TestSingleStepMode:
    def _paused_session(self):
        session = _session(0x6001, 0x6102)
        session.cpu.set_debug(3)
        return session

    def test_run_stops_when_paused(self):
        session = self._paused_session()
        stop = session.run(max_steps=10_000)
        assert stop == StopReason(reason="paused", address=0x202)
        assert session.cpu.cycle_count == 1

    def test_run_without_limit_returns_while_paused(self):
        session = self._paused_session()
        session.run()
        assert session.run().reason == "paused"
        assert session.cpu.cycle_count == 1

    def test_run_with_key_held_advances_one_instruction(self):
        session = self._paused_session()
        session.run()
        keypad = [True] + [False] * 15
        stop = session.run(keypad=keypad)
        assert stop.reason == "paused"
        assert session.read_register(1) == 2

    def test_step_reports_pause(self):
        assert self._paused_session().step().reason == "paused"


class TestReloadOnReset:
    def test_reset_reloads_program(self):
        cart = CartridgeDriver.from_bytes(bytes([0x60, 0x05]))
        cpu = Chip8CPU()
        cpu.load(cart.rom, cart.size, 0x200)
        session = DebugSession(cpu, program=cart)
        session.step()

        resp = session.handle_request({"id": 1, "cmd": "reset"})
        assert resp["result"] == {"status": "ok", "reloaded": True}
        assert cpu.pc == 0x200
        assert cpu.get_register(0) == 0

        session.step()
        assert cpu.get_register(0) == 5

    def test_reset_without_program_leaves_memory_empty(self):
        session = _session(0x6001)
        resp = session.handle_request({"id": 2, "cmd": "reset"})
        assert resp["result"]["reloaded"] is False
        assert session.read_memory(0x200, 2) == b"\x00\x00"
