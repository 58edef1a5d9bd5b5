import logging as lg
import random
from typing import Callable

import c8vm.common.ops as ops
from c8vm.common.hwconf import PROGRAM_START, GLYPH_SIZE, FONT_BASE
from c8vm.runtime.memory import Memory, Registers, Stack
from c8vm.runtime.display import Display
from c8vm.runtime.keypad import Keypad
from c8vm.runtime.timers import Timers


# - Operand fields - #

def vx(inst: int) -> int:
    return (inst & 0x0F00) >> 8


def vy(inst: int) -> int:
    return (inst & 0x00F0) >> 4


def n(inst: int) -> int:
    return inst & 0x000F


def nn(inst: int) -> int:
    return inst & 0x00FF


def nnn(inst: int) -> int:
    return inst & 0x0FFF


class CPU():
    pc: int  # Program counter
    i: int   # Address register
    v: Registers
    stack: Stack

    def __init__(
        self,
        memory: Memory,
        display: Display,
        keypad: Keypad,
        timers: Timers,
        rng: random.Random
    ):
        self.memory = memory    # Ref. to memory
        self.display = display  # Ref. to the framebuffer
        self.keypad = keypad    # Ref. to input state
        self.timers = timers    # Ref. to delay/sound timers
        self.rng = rng

        self.v = Registers()
        self.stack = Stack()
        self.reset()

    def reset(self):
        self.pc = PROGRAM_START
        self.i = 0
        self.v.reset()
        self.stack.reset()

    # - Helpers - #

    def debug_dump(self):
        state = [f'{k}:{v:X}' for k, v in {
            'PC': self.pc,
            'I': self.i,
            'SP': self.stack.sp,
            'DT': self.timers.delay,
            'ST': self.timers.sound
        }.items()]

        state.extend([f'V{i:X}:{self.v[i]:02X}' for i in range(len(self.v))])

        lg.debug(' '.join(state))

    def skip_if(self, condition: bool):
        if condition:
            self.pc = (self.pc + 2) & 0xFFFF

    # - Operations - #

    def machine_call(self, inst: int):
        lg.debug(f'Ignoring machine code call {nnn(inst):03X}')

    def cls(self, inst: int):
        self.display.clear()

    def ret(self, inst: int):
        addr = self.stack.pop()

        if addr is not None:
            self.pc = addr

    def jp(self, inst: int):
        self.pc = nnn(inst)

    def call(self, inst: int):
        if self.stack.push(self.pc):
            self.pc = nnn(inst)

    def se(self, inst: int):
        self.skip_if(self.v[vx(inst)] == nn(inst))

    def sne(self, inst: int):
        self.skip_if(self.v[vx(inst)] != nn(inst))

    def ser(self, inst: int):
        self.skip_if(self.v[vx(inst)] == self.v[vy(inst)])

    def sner(self, inst: int):
        self.skip_if(self.v[vx(inst)] != self.v[vy(inst)])

    def ld(self, inst: int):
        self.v[vx(inst)] = nn(inst)

    def add(self, inst: int):
        x = vx(inst)
        self.v[x] = self.v[x] + nn(inst)

    # - Arithmetic - #

    def mov(self, inst: int):
        self.v[vx(inst)] = self.v[vy(inst)]

    def bor(self, inst: int):
        x = vx(inst)
        self.v[x] = self.v[x] | self.v[vy(inst)]

    def band(self, inst: int):
        x = vx(inst)
        self.v[x] = self.v[x] & self.v[vy(inst)]

    def xor(self, inst: int):
        x = vx(inst)
        self.v[x] = self.v[x] ^ self.v[vy(inst)]

    # Flag first, the result is then computed from the live registers,
    # so with X=F the result replaces the flag

    def addr(self, inst: int):
        x, y = vx(inst), vy(inst)
        self.v.flags = int(self.v[x] + self.v[y] > 0xFF)
        self.v[x] = self.v[x] + self.v[y]

    def sub(self, inst: int):
        x, y = vx(inst), vy(inst)
        self.v.flags = int(self.v[x] >= self.v[y])
        self.v[x] = self.v[x] - self.v[y]

    def subn(self, inst: int):
        x, y = vx(inst), vy(inst)
        self.v.flags = int(self.v[y] >= self.v[x])
        self.v[x] = self.v[y] - self.v[x]

    def shr(self, inst: int):
        x = vx(inst)
        self.v.flags = self.v[x] & 0x01
        self.v[x] = self.v[x] >> 1

    def shl(self, inst: int):
        x = vx(inst)
        self.v.flags = (self.v[x] & 0x80) >> 7
        self.v[x] = self.v[x] << 1

    # - Memory and I - #

    def ldi(self, inst: int):
        self.i = nnn(inst)

    def jpo(self, inst: int):
        self.pc = self.v[0] + nnn(inst)

    def rnd(self, inst: int):
        self.v[vx(inst)] = self.rng.randrange(0x100) & nn(inst)

    def drw(self, inst: int):
        sprite = self.memory.read_block(self.i, n(inst))
        collision = self.display.draw(self.v[vx(inst)], self.v[vy(inst)], sprite)
        self.v.flags = int(collision)

    def addi(self, inst: int):
        self.i = (self.i + self.v[vx(inst)]) & 0xFFFF

    def ldf(self, inst: int):
        self.i = FONT_BASE + (self.v[vx(inst)] & 0xF) * GLYPH_SIZE

    def bcd(self, inst: int):
        value = self.v[vx(inst)]
        self.memory.write(self.i, value // 100 % 10)
        self.memory.write(self.i + 1, value // 10 % 10)
        self.memory.write(self.i + 2, value % 10)

    def dump(self, inst: int):
        for r in range(vx(inst) + 1):
            self.memory.write(self.i + r, self.v[r])

    def load(self, inst: int):
        for r in range(vx(inst) + 1):
            self.v[r] = self.memory.read(self.i + r)

    # - Keypad and timers - #

    def skp(self, inst: int):
        self.skip_if(self.keypad.is_pressed(self.v[vx(inst)]))

    def sknp(self, inst: int):
        self.skip_if(not self.keypad.is_pressed(self.v[vx(inst)]))

    def ldk(self, inst: int):
        key = self.keypad.wait_for_key()

        if key is None:
            # Not retired: fetch this instruction again on the next cycle
            self.pc = (self.pc - 2) & 0xFFFF
            return

        self.v[vx(inst)] = key

    def lddt(self, inst: int):
        self.v[vx(inst)] = self.timers.delay

    def sdt(self, inst: int):
        self.timers.delay = self.v[vx(inst)]

    def sst(self, inst: int):
        self.timers.sound = self.v[vx(inst)]

    HANDLERS: dict[tuple[int, int], Callable[['CPU', int], None]] = {
        (ops.M_BYTE, ops.CLS): cls,
        (ops.M_BYTE, ops.RET): ret,
        (ops.M_HIGH, ops.SYS): machine_call,
        (ops.M_HIGH, ops.JP): jp,
        (ops.M_HIGH, ops.CALL): call,
        (ops.M_HIGH, ops.SE): se,
        (ops.M_HIGH, ops.SNE): sne,
        (ops.M_HIGH, ops.SER): ser,
        (ops.M_HIGH, ops.LD): ld,
        (ops.M_HIGH, ops.ADD): add,

        (ops.M_NIB, ops.MOV): mov,
        (ops.M_NIB, ops.OR): bor,
        (ops.M_NIB, ops.AND): band,
        (ops.M_NIB, ops.XOR): xor,
        (ops.M_NIB, ops.ADDR): addr,
        (ops.M_NIB, ops.SUB): sub,
        (ops.M_NIB, ops.SHR): shr,
        (ops.M_NIB, ops.SUBN): subn,
        (ops.M_NIB, ops.SHL): shl,

        (ops.M_HIGH, ops.SNER): sner,
        (ops.M_HIGH, ops.LDI): ldi,
        (ops.M_HIGH, ops.JPO): jpo,
        (ops.M_HIGH, ops.RND): rnd,
        (ops.M_HIGH, ops.DRW): drw,

        (ops.M_BYTE, ops.SKP): skp,
        (ops.M_BYTE, ops.SKNP): sknp,

        (ops.M_BYTE, ops.LDDT): lddt,
        (ops.M_BYTE, ops.LDK): ldk,
        (ops.M_BYTE, ops.SDT): sdt,
        (ops.M_BYTE, ops.SST): sst,
        (ops.M_BYTE, ops.ADDI): addi,
        (ops.M_BYTE, ops.LDF): ldf,
        (ops.M_BYTE, ops.BCD): bcd,
        (ops.M_BYTE, ops.STR): dump,
        (ops.M_BYTE, ops.LDR): load
    }

    # -- Implementation -- #

    def lookup(self, inst: int) -> Callable[['CPU', int], None] | None:
        for mask in ops.MASKS:
            handler = self.HANDLERS.get((mask, inst & mask))

            if handler is not None:
                return handler

        return None

    def fetch(self) -> int:
        inst = self.memory.read(self.pc) << 8 | self.memory.read(self.pc + 1)
        self.pc = (self.pc + 2) & 0xFFFF
        return inst

    def execute(self, inst: int):
        handler = self.lookup(inst)

        if handler is None:
            lg.warning(f'Invalid opcode: {inst:04X}')
            return

        handler(self, inst)

    def exec_next(self):
        self.execute(self.fetch())
