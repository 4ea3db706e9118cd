from pathlib import Path

import pytest
import yaml

from chip8.core.exceptions import ConfigurationError
from chip8.utils.config_loader import (
    CpuConfig,
    DisplayConfig,
    EmulatorConfig,
    KeypadConfig,
    _get_config_path,
    _load_yaml_file,
    _parse_emulator_cfg_from_dict,
    clear_config_cache,
    get_config,
    load_config,
)


def _write(path: Path, data) -> None:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")


class TestDataclasses:
    def test_cpu_defaults(self):
        cfg = CpuConfig()
        assert cfg.debug_level == 0
        assert cfg.program_start == 0x200

    def test_config_immutable(self):
        cfg = DisplayConfig()
        with pytest.raises(AttributeError):
            cfg.scale = 3  # type: ignore[misc]


class TestBundledConfig:
    def test_default_path_points_at_package(self):
        path = Path(_get_config_path())
        assert path.name == "config.yaml"
        assert path.parent.name == "chip8"

    def test_explicit_path_is_kept(self):
        assert _get_config_path("custom.yaml") == "custom.yaml"

    def test_bundled_config_loads(self):
        cfg = load_config()
        assert isinstance(cfg, EmulatorConfig)
        assert cfg.cpu.debug_level == 0
        assert len(cfg.keypad.keymap) == 16
        assert cfg.keypad.keymap["Q"] == 0x4
        assert cfg.keypad.keymap["X"] == 0x0
        assert sorted(cfg.keypad.keymap.values()) == list(range(16))


class TestParsing:
    def test_empty_dict_gives_defaults(self):
        cfg = _parse_emulator_cfg_from_dict({})
        assert cfg.cpu == CpuConfig()
        assert cfg.display == DisplayConfig()
        assert cfg.keypad == KeypadConfig()

    def test_keymap_names_uppercased(self):
        cfg = _parse_emulator_cfg_from_dict({"keypad": {"keymap": {"q": 4}}})
        assert cfg.keypad.keymap == {"Q": 4}

    def test_colours_become_tuples(self):
        cfg = _parse_emulator_cfg_from_dict({"display": {"on_color": [1, 2, 3]}})
        assert cfg.display.on_color == (1, 2, 3)

    @pytest.mark.parametrize(
        "raw",
        [
            {"cpu": {"debug_level": 4}},
            {"cpu": {"program_start": 0x201}},
            {"cpu": {"program_start": 0x1000}},
            {"cpu": {"cycles_per_tick": 0}},
            {"cpu": {"tick_ms": -1}},
            {"display": {"scale": 0}},
            {"display": {"on_color": [1, 2]}},
            {"display": {"off_color": [0, 0, 256]}},
            {"keypad": {"keymap": {"Q": 16}}},
            {"cpu": {"debug_level": "high"}},
        ],
    )
    def test_invalid_values_rejected(self, raw):
        with pytest.raises(ConfigurationError):
            _parse_emulator_cfg_from_dict(raw)


class TestFileLoading:
    def test_load_yaml_file(self, temp_yaml_file):
        _write(temp_yaml_file, {"cpu": {"debug_level": 2}})
        assert _load_yaml_file(temp_yaml_file) == {"cpu": {"debug_level": 2}}

    def test_empty_file_is_empty_mapping(self, temp_yaml_file):
        temp_yaml_file.write_text("", encoding="utf-8")
        assert _load_yaml_file(temp_yaml_file) == {}

    def test_non_mapping_rejected(self, temp_yaml_file):
        temp_yaml_file.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            _load_yaml_file(temp_yaml_file)

    def test_malformed_yaml_rejected(self, temp_yaml_file):
        temp_yaml_file.write_text("cpu: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(str(temp_yaml_file))

    def test_missing_file_rejected(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_load_config_from_file(self, temp_yaml_file):
        _write(temp_yaml_file, {"cpu": {"debug_level": 1, "cycles_per_tick": 5}})
        cfg = load_config(str(temp_yaml_file))
        assert cfg.cpu.debug_level == 1
        assert cfg.cpu.cycles_per_tick == 5


class TestCache:
    def test_get_config_caches_until_cleared(self, temp_yaml_file):
        clear_config_cache()
        _write(temp_yaml_file, {"cpu": {"debug_level": 1}})
        first = get_config(str(temp_yaml_file))

        _write(temp_yaml_file, {"cpu": {"debug_level": 2}})
        assert get_config(str(temp_yaml_file)) is first

        clear_config_cache()
        assert get_config(str(temp_yaml_file)).cpu.debug_level == 2
        clear_config_cache()
