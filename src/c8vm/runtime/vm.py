import logging as lg
import random

from c8vm.common.hwconf import (
    PROGRAM_START, MAX_PROGRAM_SIZE, TICK_RATE, TICK_INTERVAL, TICK_EPSILON,
    DEFAULT_CYCLES_PER_SECOND
)
from c8vm.runtime.memory import Memory
from c8vm.runtime.display import Display
from c8vm.runtime.keypad import Keypad
from c8vm.runtime.timers import Timers
from c8vm.runtime.cpu import CPU


class VM:
    ''' One emulated CHIP-8 machine.

    The host drives it with advance() once per frame (or step() from a
    debugger) and forwards key events between calls. Timers always tick
    at 60 Hz of emulated time while the CPU runs cycles_per_second
    instructions, independently of how often the host calls in.
    '''

    tick_accumulator: float     # seconds not yet consumed by a timer tick
    cycle_accumulator: float    # fractional cycles owed to the CPU

    def __init__(
        self,
        cycles_per_second: float = DEFAULT_CYCLES_PER_SECOND,
        seed: int | None = None,
        rng: random.Random | None = None,
        wrap: bool = False
    ):
        self.cycles_per_second = cycles_per_second
        self.rng = rng if rng is not None else random.Random(seed)

        self.memory = Memory()
        self.display = Display(wrap=wrap)
        self.keypad = Keypad()
        self.timers = Timers()
        self.cpu = CPU(self.memory, self.display, self.keypad, self.timers, self.rng)

        self.reset()

    def reset(self):
        self.memory.reset()
        self.cpu.reset()
        self.timers.reset()
        self.keypad.reset()
        self.display.clear()

        self.tick_accumulator = 0.0
        self.cycle_accumulator = 0.0

    def load_program(self, data: bytes) -> bool:
        if len(data) > MAX_PROGRAM_SIZE:
            lg.error(f'ROM too large to fit in memory: {len(data)} > {MAX_PROGRAM_SIZE} bytes')
            return False

        self.reset()
        self.memory.load(PROGRAM_START, data)
        lg.info(f'Loaded {len(data)} bytes at {PROGRAM_START:03X}')
        return True

    # - Input and output - #

    def key_pressed(self, key: int):
        self.keypad.press(key)

    def key_released(self, key: int):
        self.keypad.release(key)

    def get_pixel(self, x: int, y: int) -> bool:
        return self.display.get_pixel(x, y)

    @property
    def sound_active(self) -> bool:
        return self.timers.sound_active

    # - Timing - #

    def tick_due(self) -> bool:
        return self.tick_accumulator + TICK_EPSILON >= TICK_INTERVAL

    def consume_ticks(self) -> int:
        ticks = 0

        while self.tick_due():
            self.tick_accumulator -= TICK_INTERVAL
            self.timers.tick()
            ticks += 1

        return ticks

    def advance(self, dt: float):
        cycles_per_tick = self.cycles_per_second / TICK_RATE

        self.tick_accumulator += dt

        while self.tick_due():
            self.tick_accumulator -= TICK_INTERVAL
            self.timers.tick()

            self.cycle_accumulator += cycles_per_tick
            # Same tolerance as the tick boundary, the remainder may dip below zero
            cycles = int(self.cycle_accumulator + TICK_EPSILON)
            self.cycle_accumulator -= cycles

            for _ in range(cycles):
                self.cpu.exec_next()

    def step(self, advance_time: bool = True):
        ''' Run exactly one instruction, for debuggers.

        With advance_time the timers move forward by one cycle's worth of
        emulated time first, so single stepping keeps them accurate.
        '''
        if advance_time:
            self.tick_accumulator += 1 / self.cycles_per_second
            self.consume_ticks()

        self.cpu.exec_next()
        self.cpu.debug_dump()
