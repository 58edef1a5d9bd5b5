import logging as lg

import numpy as np
import pygame

from c8vm.common.hwconf import DISPLAY_WIDTH, DISPLAY_HEIGHT
from c8vm.runtime.config import EmulatorConfig
from c8vm.runtime.vm import VM


SAMPLE_RATE = 44100


class Screen:
    ''' Window presenting the framebuffer, one scaled block per pixel '''

    def __init__(self, config: EmulatorConfig, title: str = 'CHIP-8'):
        self.on_color = config.on_color
        self.off_color = config.off_color
        self.size = (DISPLAY_WIDTH * config.scale, DISPLAY_HEIGHT * config.scale)

        self.window = pygame.display.set_mode(self.size)
        self.surface = pygame.Surface((DISPLAY_WIDTH, DISPLAY_HEIGHT))
        pygame.display.set_caption(title)

    def set_caption(self, title: str):
        pygame.display.set_caption(title)

    def render(self, vm: VM):
        self.surface.fill(self.off_color)

        for y in range(DISPLAY_HEIGHT):
            for x in range(DISPLAY_WIDTH):
                if vm.get_pixel(x, y):
                    self.surface.set_at((x, y), self.on_color)

        pygame.transform.scale(self.surface, self.size, self.window)
        pygame.display.flip()


class Beeper:
    ''' Square wave tone, looping while the sound timer runs '''

    sound: pygame.mixer.Sound | None

    def __init__(self, config: EmulatorConfig):
        self.playing = False
        self.sound = None

        try:
            pygame.mixer.init(SAMPLE_RATE, -16, 1, 512)
        except pygame.error as e:
            lg.warning(f'Audio unavailable, running silent: {e}')
            return

        samples = self.square_wave(config.tone_hz, config.volume)
        _, _, channels = pygame.mixer.get_init()

        if channels > 1:
            samples = np.repeat(samples[:, np.newaxis], channels, axis=1)

        self.sound = pygame.sndarray.make_sound(samples)

    @staticmethod
    def square_wave(tone_hz: float, volume: float) -> np.ndarray:
        period = max(2, int(round(SAMPLE_RATE / tone_hz)))
        t = np.arange(period)
        amplitude = int(volume * np.iinfo(np.int16).max)
        return np.where(t < period // 2, amplitude, -amplitude).astype(np.int16)

    def update(self, active: bool):
        if self.sound is None or active == self.playing:
            return

        if active:
            self.sound.play(loops=-1)
        else:
            self.sound.stop()

        self.playing = active


class Keyboard:
    ''' Translates pygame key codes to keypad indices '''

    def __init__(self, config: EmulatorConfig):
        self.keymap: dict[int, int] = {}

        for name, key in config.keymap.items():
            code = getattr(pygame, name, None)

            if code is None:
                lg.warning(f'Unknown pygame key {name}, not mapped')
                continue

            self.keymap[code] = key

    def translate(self, code: int) -> int | None:
        return self.keymap.get(code)
