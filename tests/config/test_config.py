import pytest

from c8vm.common.hwconf import DEFAULT_CYCLES_PER_SECOND
from c8vm.runtime.config import DEFAULT_KEYMAP, EmulatorConfig, load_config


def test_defaults():
    config = load_config()

    assert config.cycles_per_second == DEFAULT_CYCLES_PER_SECOND
    assert not config.wrap
    assert config.seed is None
    assert config.keymap == DEFAULT_KEYMAP
    assert sorted(config.keymap.values()) == list(range(16))


def test_file_overrides(tmp_path):
    path = tmp_path / 'c8vm.toml'
    path.write_text('''
[emulator]
cycles_per_second = 700
scale = 10
wrap = true
seed = 5
on_color = "#33FF66"
off_color = [16, 16, 16]

[keys]
K_x = 0
K_1 = "1"
K_v = "F"
''')

    config = load_config(path)

    assert config.cycles_per_second == 700.0
    assert config.scale == 10
    assert config.wrap
    assert config.seed == 5
    assert config.on_color == (0x33, 0xFF, 0x66)
    assert config.off_color == (16, 16, 16)
    assert config.keymap == {'K_x': 0x0, 'K_1': 0x1, 'K_v': 0xF}


def test_unknown_setting_warns(tmp_path, caplog):
    path = tmp_path / 'c8vm.toml'
    path.write_text('[emulator]\nturbo = true\n')

    config = load_config(path)

    assert config == EmulatorConfig()
    assert 'Unknown setting turbo' in caplog.text


def test_key_outside_keypad_rejected(tmp_path):
    path = tmp_path / 'c8vm.toml'
    path.write_text('[keys]\nK_q = 16\n')

    with pytest.raises(ValueError):
        load_config(path)


def test_update_skips_unset():
    config = EmulatorConfig().update(cycles_per_second=None, scale=4, seed=None)

    assert config.cycles_per_second == DEFAULT_CYCLES_PER_SECOND
    assert config.scale == 4
