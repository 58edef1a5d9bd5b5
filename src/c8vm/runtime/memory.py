import logging as lg

from c8vm.common.hwconf import (
    MEMORY_SIZE, ADDRESS_MASK, FONT_BASE, FONT, REGISTERS, FLAG_REGISTER, STACK_MAX
)


class Memory:
    data: bytearray

    def __init__(self):
        self.data = bytearray(MEMORY_SIZE)
        self.reset()

    def reset(self):
        self.data[:] = bytes(MEMORY_SIZE)
        self.load(FONT_BASE, FONT)

    # Opcodes compute addresses from 16-bit registers; fold them into the address space
    def read(self, addr: int) -> int:
        return self.data[addr & ADDRESS_MASK]

    def write(self, addr: int, value: int):
        self.data[addr & ADDRESS_MASK] = value & 0xFF

    def read_block(self, addr: int, length: int) -> bytes:
        return bytes(self.read(addr + i) for i in range(length))

    def load(self, offset: int, data: bytes):
        self.data[offset:offset + len(data)] = data


class Registers:
    ''' V0..VF, VF doubling as the flag register '''

    v: list[int]

    def __init__(self):
        self.v = [0] * REGISTERS

    def reset(self):
        self.v = [0] * REGISTERS

    def __getitem__(self, index: int) -> int:
        return self.v[index]

    def __setitem__(self, index: int, value: int):
        self.v[index] = value & 0xFF

    def __len__(self):
        return REGISTERS

    @property
    def flags(self) -> int:
        return self.v[FLAG_REGISTER]

    @flags.setter
    def flags(self, value: int):
        self.v[FLAG_REGISTER] = value & 0xFF


class Stack:
    ''' Return address store, full and empty conditions are reported, never raised '''

    sp: int
    entries: list[int]

    def __init__(self, capacity: int = STACK_MAX):
        self.capacity = capacity
        self.reset()

    def reset(self):
        self.entries = [0] * self.capacity
        self.sp = 0

    def push(self, address: int) -> bool:
        if self.sp >= self.capacity:
            lg.debug(f'Stack overflow, dropping return address {address:03X}')
            return False

        self.entries[self.sp] = address & 0xFFFF
        self.sp += 1
        return True

    def pop(self) -> int | None:
        if self.sp <= 0:
            lg.debug('Stack underflow')
            return None

        self.sp -= 1
        return self.entries[self.sp]

    def __len__(self):
        return self.sp
