''' Front end settings, loaded from an optional TOML file '''

import logging as lg
from dataclasses import dataclass, field
from pathlib import Path
import tomllib

from c8vm.common.hwconf import DEFAULT_CYCLES_PER_SECOND, KEYS


# Numeric keypad, laid out as on the original hex keypad
DEFAULT_KEYMAP = {
    'K_KP_PERIOD': 0x0,
    'K_KP7': 0x1,
    'K_KP8': 0x2,
    'K_KP9': 0x3,
    'K_KP4': 0x4,
    'K_KP5': 0x5,
    'K_KP6': 0x6,
    'K_KP1': 0x7,
    'K_KP2': 0x8,
    'K_KP3': 0x9,
    'K_KP0': 0xA,
    'K_KP_ENTER': 0xB,
    'K_KP_DIVIDE': 0xC,
    'K_KP_MULTIPLY': 0xD,
    'K_KP_MINUS': 0xE,
    'K_KP_PLUS': 0xF,
}

Color = tuple[int, int, int]


@dataclass
class EmulatorConfig:
    cycles_per_second: float = DEFAULT_CYCLES_PER_SECOND
    scale: int = 20
    fps: int = 60
    wrap: bool = False
    seed: int | None = None
    on_color: Color = (0xFF, 0xFF, 0xFF)
    off_color: Color = (0x00, 0x00, 0x00)
    tone_hz: float = 440.0
    volume: float = 0.25
    keymap: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEYMAP))

    def update(self, **kwargs):
        ''' Overrides settings, skipping values left as None '''
        for name, value in kwargs.items():
            if value is not None:
                setattr(self, name, value)

        return self


def parse_color(value) -> Color:
    if isinstance(value, str):
        value = value.lstrip('#')
        return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))

    r, g, b = value
    return (int(r), int(g), int(b))


def parse_keymap(table: dict) -> dict[str, int]:
    keymap = {}

    for name, key in table.items():
        key = int(key, 16) if isinstance(key, str) else int(key)

        if not 0 <= key < KEYS:
            raise ValueError(f'Key {name} maps outside the keypad: {key}')

        keymap[name] = key

    return keymap


def load_config(path: Path | None = None) -> EmulatorConfig:
    ''' Reads settings from the [emulator] and [keys] tables.

    A [keys] table replaces the default keymap as a whole; unknown
    settings are ignored with a warning.
    '''
    config = EmulatorConfig()

    if path is None:
        return config

    lg.debug(f'Reading config {path}')
    data = tomllib.loads(Path(path).read_text())
    emulator = data.get('emulator', {})

    for name, value in emulator.items():
        if name in ('on_color', 'off_color'):
            setattr(config, name, parse_color(value))
        elif name in ('cycles_per_second', 'tone_hz', 'volume'):
            setattr(config, name, float(value))
        elif name in ('scale', 'fps', 'seed'):
            setattr(config, name, int(value))
        elif name == 'wrap':
            config.wrap = bool(value)
        else:
            lg.warning(f'Unknown setting {name} in {path}')

    if 'keys' in data:
        config.keymap = parse_keymap(data['keys'])

    return config
