"""Custom exceptions used throughout the chip8 package."""

from typing import Any, Optional


class Chip8Error(Exception):
    """Base exception for all emulator errors.

    All emulator-specific exceptions inherit from this class so callers can
    catch every fatal condition with a single except clause.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Additional context about the error
        """

        super().__init__(message)
        self.details = details or {}


class ConfigurationError(Chip8Error):
    """Raised when there's an error in configuration.

    This includes:
    - Invalid or missing configuration values
    - Program images that do not fit in memory at the requested offset
    """

    def __init__(
        self,
        config_key: Optional[str] = None,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize configuration error.

        Args:
            config_key: The configuration key that caused the error
            message: Description of what's wrong. If omitted, config_key is
                treated as the message and the key defaults to "configuration".
            details: Additional context
        """
        if message is None:
            message = config_key or "Invalid configuration"
            config_key = "configuration"
        if config_key is None:
            config_key = "configuration"

        full_message = f"Configuration error for '{config_key}': {message}"
        super().__init__(message=full_message, details=details)
        self.config_key = config_key


class CartridgeError(Chip8Error):
    """Raised when a program image cannot be read from storage."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Cannot load program '{path}': {reason}",
            details={"path": path},
        )
        self.path = path


class MemoryException(Chip8Error):
    """Base exception for all memory-related errors."""

    def __init__(
        self,
        message: str,
        address: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if address is not None:
            details = details or {}
            details["address"] = f"0x{address:04X}"

        super().__init__(message=message, details=details)
        self.address = address


class MemoryAccessError(MemoryException):
    """Raised when an address cannot be used for the requested access.

    Examples:
    - Negative address
    - Instruction fetch from an odd address past the end of memory
    """

    def __init__(
        self,
        address: int,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if message is None:
            message = f"Invalid memory access at 0x{address:04X}"
        super().__init__(message=message, address=address, details=details)


class MemoryBoundsError(MemoryException):
    """Raised when a memory access exceeds the bounds of a region.

    Examples:
    - Index register + offset past 0xFFF during a block store
    - Sprite rows read past the end of memory
    """

    def __init__(
        self,
        address: int,
        size: int,
        region: str,
        details: Optional[dict[str, Any]] = None,
    ):
        message = (
            f"Out-of-bounds access in {region}: "
            f"address=0x{address:04X}, size={size}"
        )
        super().__init__(message=message, address=address, details=details)
        self.size = size
        self.region = region


class StackOverflowError(Chip8Error):
    """Raised when a subroutine call would push past the call stack capacity."""

    def __init__(self, pc: int, depth: int):
        super().__init__(
            message=f"Call stack overflow at PC=0x{pc:04X} (depth {depth})",
            details={"pc": f"0x{pc:04X}", "depth": depth},
        )
        self.pc = pc
        self.depth = depth
