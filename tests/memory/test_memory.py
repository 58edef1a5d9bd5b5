import pytest

from c8vm.common.hwconf import FONT, MEMORY_SIZE, PROGRAM_START, STACK_MAX
from c8vm.runtime.memory import Memory, Registers, Stack

from unit_utils import make_vm, words
from fixtures import vm  # noqa: F401


def test_font_glyphs():
    memory = Memory()

    assert memory.read_block(0, 5) == bytes([0xF0, 0x90, 0x90, 0x90, 0xF0])
    assert memory.read_block(5 * 0xF, 5) == bytes([0xF0, 0x80, 0xF0, 0x80, 0x80])

    for digit in range(16):
        assert memory.read_block(5 * digit, 5) == FONT[5 * digit:5 * digit + 5]


def test_below_program_zeroed_after_font():
    memory = Memory()
    assert memory.read_block(len(FONT), PROGRAM_START - len(FONT)) == bytes(PROGRAM_START - len(FONT))


def test_addresses_fold_into_memory():
    memory = Memory()
    memory.write(MEMORY_SIZE + 0x300, 0x1AB)

    assert memory.read(0x300) == 0xAB
    assert memory.read(MEMORY_SIZE + 0x300) == 0xAB


def test_largest_program_fits(vm):  # noqa: F811
    program = bytes([0xAB]) * (MEMORY_SIZE - PROGRAM_START)

    assert vm.load_program(program)
    assert vm.memory.read(PROGRAM_START) == 0xAB
    assert vm.memory.read(MEMORY_SIZE - 1) == 0xAB


def test_oversized_program_rejected(caplog):
    vm = make_vm(words(0x1234))
    vm.cpu.v[3] = 7
    vm.cpu.pc = 0x204

    assert not vm.load_program(bytes(MEMORY_SIZE - PROGRAM_START + 1))

    assert vm.memory.read(PROGRAM_START) == 0x12
    assert vm.memory.read(PROGRAM_START + 1) == 0x34
    assert vm.cpu.v[3] == 7
    assert vm.cpu.pc == 0x204
    assert 'too large' in caplog.text


def test_load_resets_previous_program():
    vm = make_vm(bytes([0xFF]) * 16)
    vm.cpu.i = 0x345
    vm.timers.delay = 10

    assert vm.load_program(bytes([0x01]))

    assert vm.memory.read(PROGRAM_START) == 0x01
    assert vm.memory.read(PROGRAM_START + 1) == 0x00
    assert vm.cpu.i == 0
    assert vm.cpu.pc == PROGRAM_START
    assert vm.timers.delay == 0


def test_registers_truncate_and_alias_flags():
    regs = Registers()
    regs[0] = 0x1FF
    regs[15] = 3

    assert regs[0] == 0xFF
    assert regs.flags == 3

    regs.flags = 0x100
    assert regs[15] == 0


def test_stack_round_trip():
    stack = Stack()

    assert stack.push(0x202)
    assert stack.push(0x304)
    assert len(stack) == 2
    assert stack.pop() == 0x304
    assert stack.pop() == 0x202
    assert len(stack) == 0


def test_stack_overflow_and_underflow_are_soft():
    stack = Stack()

    assert stack.pop() is None
    assert stack.sp == 0

    for n in range(STACK_MAX):
        assert stack.push(n)

    assert not stack.push(0xFFF)
    assert stack.sp == STACK_MAX
    assert stack.pop() == STACK_MAX - 1


@pytest.mark.parametrize('capacity', [1, 16])
def test_stack_custom_capacity(capacity):
    stack = Stack(capacity)

    for n in range(capacity):
        assert stack.push(n)

    assert not stack.push(0)
    assert len(stack) == capacity
