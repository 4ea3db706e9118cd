from chip8.debug.session import DebugSession, StopReason

__all__ = ["DebugSession", "StopReason"]
