import sys
from pathlib import Path
import logging as lg
import traceback

import click
import pygame

from c8vm.runtime.config import EmulatorConfig, load_config
from c8vm.runtime.peripheral import Screen, Beeper, Keyboard
from c8vm.runtime.vm import VM


EXIT_OK = 0
EXIT_ROM_REJECTED = 1
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100


class RomRejected(Exception):
    pass


def load_rom(vm: VM, rom_filename: Path):
    rom = rom_filename.read_bytes()

    if not vm.load_program(rom):
        raise RomRejected(rom_filename)


def handle_key(vm: VM, keyboard: Keyboard, event: pygame.event.Event):
    key = keyboard.translate(event.key)

    if key is None:
        return

    if event.type == pygame.KEYDOWN:
        vm.key_pressed(key)
    else:
        vm.key_released(key)


def execute(rom_filename: Path, config: EmulatorConfig):
    vm = VM(config.cycles_per_second, seed=config.seed, wrap=config.wrap)
    load_rom(vm, rom_filename)

    pygame.init()

    try:
        title = f'CHIP-8 - {rom_filename.name}'
        screen = Screen(config, title)
        beeper = Beeper(config)
        keyboard = Keyboard(config)
        clock = pygame.time.Clock()

        paused = False

        while True:
            dt = clock.tick(config.fps) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return

                if event.type in (pygame.KEYDOWN, pygame.KEYUP):
                    handle_key(vm, keyboard, event)

                if event.type != pygame.KEYDOWN:
                    continue

                if event.key == pygame.K_ESCAPE:
                    return

                if event.key == pygame.K_F5:
                    paused = not paused
                    lg.info('Paused' if paused else 'Resumed')
                    screen.set_caption(f'{title} (paused)' if paused else title)

                if event.key == pygame.K_F6 and paused:
                    vm.step()

                if event.key == pygame.K_F12:
                    lg.info('Reset')
                    load_rom(vm, rom_filename)

            if not paused:
                vm.advance(dt)

            beeper.update(vm.sound_active and not paused)
            screen.render(vm)

    finally:
        pygame.quit()


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-c', '--config', 'config_path', type=click.Path(exists=True, path_type=Path),
              help='TOML settings file')
@click.option('--cycles', type=float, help='Instructions per second')
@click.option('--scale', type=int, help='Window pixels per display pixel')
@click.option('--seed', type=int, help='Random generator seed')
@click.option('--wrap', is_flag=True, help='Wrap sprites around display edges')
@click.argument('rom_filename', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def run(
    verbose: bool,
    config_path: Path | None,
    cycles: float | None,
    scale: int | None,
    seed: int | None,
    wrap: bool,
    rom_filename: Path
):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("C8VM")

    try:
        config = load_config(config_path)
        config.update(cycles_per_second=cycles, scale=scale, seed=seed, wrap=wrap or None)
        execute(rom_filename, config)
        sys.exit(EXIT_OK)

    except RomRejected:
        lg.info('ROM rejected')
        sys.exit(EXIT_ROM_REJECTED)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
