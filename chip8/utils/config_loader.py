"""Helpers for loading and validating emulator configuration."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional
import threading

import yaml  # type: ignore[import-untyped]

from chip8.core.exceptions import ConfigurationError
from chip8.utils.consts import ConstUtils

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class CpuConfig:
    debug_level: int = 0
    program_start: int = ConstUtils.PROGRAM_START
    cycles_per_tick: int = 10
    tick_ms: int = 16


@dataclass(frozen=True)
class DisplayConfig:
    scale: int = 7
    on_color: RGB = (30, 40, 30)
    off_color: RGB = (150, 210, 150)


@dataclass(frozen=True)
class KeypadConfig:
    keymap: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class EmulatorConfig:
    cpu: CpuConfig
    display: DisplayConfig
    keypad: KeypadConfig


# Configuration cache with thread safety
_LOADER_CACHE: dict[str, EmulatorConfig] = {}
_CACHE_LOCK = threading.RLock()


def _get_config_path(path: Optional[str] = None) -> str:
    if path is None:
        # Bundled default lives next to the package
        base = Path(__file__).parent.parent / "config.yaml"
        path = str(base)

    return path


def _load_yaml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except Exception as exc:
        raise ConfigurationError(f"Failed to parse config: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError("top-level config must be a mapping")
    return raw


def _parse_rgb(key: str, value: Any) -> RGB:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ConfigurationError(key, f"expected [r, g, b], got {value!r}")
    rgb = tuple(int(c) for c in value)
    if any(not 0 <= c <= 255 for c in rgb):
        raise ConfigurationError(key, "colour components must be 0-255")
    return rgb  # type: ignore[return-value]


def _build_cpu_cfg(cpu_raw: dict[str, Any]) -> CpuConfig:
    defaults = CpuConfig()
    return CpuConfig(
        debug_level=int(cpu_raw.get("debug_level", defaults.debug_level)),
        program_start=int(cpu_raw.get("program_start", defaults.program_start)),
        cycles_per_tick=int(cpu_raw.get("cycles_per_tick", defaults.cycles_per_tick)),
        tick_ms=int(cpu_raw.get("tick_ms", defaults.tick_ms)),
    )


def _build_display_cfg(display_raw: dict[str, Any]) -> DisplayConfig:
    defaults = DisplayConfig()
    return DisplayConfig(
        scale=int(display_raw.get("scale", defaults.scale)),
        on_color=_parse_rgb("display.on_color", display_raw.get("on_color", defaults.on_color)),
        off_color=_parse_rgb("display.off_color", display_raw.get("off_color", defaults.off_color)),
    )


def _build_keypad_cfg(keypad_raw: dict[str, Any]) -> KeypadConfig:
    keymap = {str(k).upper(): int(v) for k, v in keypad_raw.get("keymap", {}).items()}
    return KeypadConfig(keymap=keymap)


def _parse_emulator_cfg_from_dict(raw: dict[str, Any]) -> EmulatorConfig:
    try:
        cfg = EmulatorConfig(
            cpu=_build_cpu_cfg(raw.get("cpu") or {}),
            display=_build_display_cfg(raw.get("display") or {}),
            keypad=_build_keypad_cfg(raw.get("keypad") or {}),
        )
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigurationError(f"Invalid config schema: {exc}") from exc

    _validate_config(cfg)
    return cfg


def _validate_config(cfg: EmulatorConfig) -> None:
    """Basic sanity checks to fail fast on bad configs."""
    cpu = cfg.cpu
    if not 0 <= cpu.debug_level <= 3:
        raise ConfigurationError("cpu.debug_level", "must be 0-3")
    if not 0 <= cpu.program_start < ConstUtils.MEMORY_SIZE:
        raise ConfigurationError("cpu.program_start", "must be inside memory")
    if cpu.program_start % ConstUtils.INSTRUCTION_SIZE:
        raise ConfigurationError("cpu.program_start", "must be even")
    if cpu.cycles_per_tick <= 0 or cpu.tick_ms <= 0:
        raise ConfigurationError("cpu", "cycles_per_tick and tick_ms must be positive")

    if cfg.display.scale <= 0:
        raise ConfigurationError("display.scale", "must be positive")

    for name, key in cfg.keypad.keymap.items():
        if not 0 <= key < ConstUtils.KEY_COUNT:
            raise ConfigurationError("keypad.keymap", f"'{name}' maps to invalid key {key}")


def load_config(path: Optional[str] = None) -> EmulatorConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Optional path to YAML config. If None, load the bundled chip8/config.yaml.

    Returns:
        EmulatorConfig instance

    Raises:
        ConfigurationError: on parse or validation errors
    """

    p = Path(_get_config_path(path=path))
    raw = _load_yaml_file(p)

    return _parse_emulator_cfg_from_dict(raw=raw)


def get_config(path: Optional[str] = None) -> EmulatorConfig:
    """Return the loaded config for path, loading and caching if necessary.

    THREAD SAFETY: This function is thread-safe.
    """
    key = _get_config_path(path)
    with _CACHE_LOCK:
        if key not in _LOADER_CACHE:
            _LOADER_CACHE[key] = load_config(path=path)
        return _LOADER_CACHE[key]


def clear_config_cache() -> None:
    """Clear all cached configurations.

    All subsequent calls to get_config() will reload from disk.
    """
    with _CACHE_LOCK:
        _LOADER_CACHE.clear()
