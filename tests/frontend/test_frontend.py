import numpy as np
import pygame
from click.testing import CliRunner

from c8vm.common.hwconf import MEMORY_SIZE, PROGRAM_START
from c8vm.runtime.config import EmulatorConfig
from c8vm.runtime.peripheral import Beeper, Keyboard, SAMPLE_RATE
import c8vm.runtime.emulator as emulator

from fixtures import vm  # noqa: F401


def test_keyboard_default_keymap():
    keyboard = Keyboard(EmulatorConfig())

    assert keyboard.translate(pygame.K_KP7) == 0x1
    assert keyboard.translate(pygame.K_KP_PERIOD) == 0x0
    assert keyboard.translate(pygame.K_KP_PLUS) == 0xF
    assert keyboard.translate(pygame.K_SPACE) is None


def test_keyboard_skips_unknown_names(caplog):
    config = EmulatorConfig()
    config.keymap = {'K_NOT_A_KEY': 3, 'K_x': 0}

    keyboard = Keyboard(config)

    assert keyboard.keymap == {pygame.K_x: 0}
    assert 'K_NOT_A_KEY' in caplog.text


def test_key_events_reach_keypad(vm):  # noqa: F811
    keyboard = Keyboard(EmulatorConfig())

    emulator.handle_key(vm, keyboard, pygame.event.Event(pygame.KEYDOWN, key=pygame.K_KP5))
    assert vm.keypad.is_pressed(5)

    emulator.handle_key(vm, keyboard, pygame.event.Event(pygame.KEYUP, key=pygame.K_KP5))
    assert not vm.keypad.is_pressed(5)


def test_square_wave():
    samples = Beeper.square_wave(441.0, 0.5)
    period = SAMPLE_RATE // 441

    assert len(samples) == period
    assert samples.dtype == np.int16
    assert np.all(samples[:period // 2] > 0)
    assert np.all(samples[period // 2:] < 0)


def test_oversized_rom_exits(tmp_path):
    rom = tmp_path / 'huge.ch8'
    rom.write_bytes(bytes(MEMORY_SIZE - PROGRAM_START + 1))

    result = CliRunner().invoke(emulator.run, [str(rom)])

    assert result.exit_code == emulator.EXIT_ROM_REJECTED


def test_missing_rom_is_usage_error(tmp_path):
    result = CliRunner().invoke(emulator.run, [str(tmp_path / 'missing.ch8')])
    assert result.exit_code == 2
