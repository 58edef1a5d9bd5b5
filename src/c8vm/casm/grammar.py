# type: ignore
''' Assembler grammar, parse actions yield (handler, tokens) pairs for the FPP '''

import pyparsing as pp

import c8vm.common.ops as ops
from c8vm.casm.fpp import FPP, Ref


def to_int(text: str) -> int:
    if text[:2] in ('0x', '0X'):
        return int(text[2:], 16)

    if text[:2] in ('0b', '0B'):
        return int(text[2:], 2)

    return int(text, 10)


id = pp.Word(pp.alphas + '_', pp.alphanums + '_')
comma = pp.Suppress(',')
comment = pp.Suppress(pp.Literal('//') + pp.rest_of_line)

label = (id + pp.Suppress(':')).setParseAction(lambda r: (FPP.on_label, r))

number = pp.Regex('0[xX][0-9a-fA-F]+|0[bB][01]+|[0-9]+').setParseAction(lambda r: to_int(r[0]))
reg = pp.Regex(r'[vV][0-9a-fA-F]\b').setParseAction(lambda r: int(r[0][1], 16))

refname = pp.Optional(id + pp.Suppress('::')) + id
ref = (pp.Suppress('&') + pp.Group(refname)).setParseAction(lambda r: Ref(r[0]))
addr = number ^ ref

# Operand slot -> (element, shift, max value)
slots = {
    'x': (reg, 8, 0xF),
    'y': (reg, 4, 0xF),
    'n': (number, 0, 0xF),
    'nn': (number, 0, 0xFF),
    'nnn': (addr, 0, 0xFFF),
}


def g_fixed(operand):
    # Keyword operands: i, dt, st, k, f, b, v0; punctuated: [i]
    if operand.isalnum():
        return pp.Suppress(pp.Keyword(operand))

    return pp.Suppress(pp.Literal(operand))


def g_cmd(mnemonic, op, *operands):
    expr = pp.Suppress(pp.Keyword(mnemonic))
    fields = []

    for index, operand in enumerate(operands):
        if index > 0:
            expr = expr + comma

        if operand in slots:
            element, shift, limit = slots[operand]
            expr = expr + element
            fields.append((shift, limit))
        else:
            expr = expr + g_fixed(operand)

    return expr.setParseAction(lambda r: (FPP.issue_instruction, (op, list(zip(fields, r)))))


# Flow
cls_cmd = g_cmd('cls', ops.CLS)
ret_cmd = g_cmd('ret', ops.RET)
sys_cmd = g_cmd('sys', ops.SYS, 'nnn')
jp_cmd = g_cmd('jp', ops.JP, 'nnn')
jpo_cmd = g_cmd('jp', ops.JPO, 'v0', 'nnn')
call_cmd = g_cmd('call', ops.CALL, 'nnn')
se_cmd = g_cmd('se', ops.SE, 'x', 'nn')
ser_cmd = g_cmd('se', ops.SER, 'x', 'y')
sne_cmd = g_cmd('sne', ops.SNE, 'x', 'nn')
sner_cmd = g_cmd('sne', ops.SNER, 'x', 'y')

# Loads
ld_cmd = g_cmd('ld', ops.LD, 'x', 'nn')
mov_cmd = g_cmd('ld', ops.MOV, 'x', 'y')
ldi_cmd = g_cmd('ld', ops.LDI, 'i', 'nnn')
lddt_cmd = g_cmd('ld', ops.LDDT, 'x', 'dt')
ldk_cmd = g_cmd('ld', ops.LDK, 'x', 'k')
sdt_cmd = g_cmd('ld', ops.SDT, 'dt', 'x')
sst_cmd = g_cmd('ld', ops.SST, 'st', 'x')
ldf_cmd = g_cmd('ld', ops.LDF, 'f', 'x')
bcd_cmd = g_cmd('ld', ops.BCD, 'b', 'x')
str_cmd = g_cmd('ld', ops.STR, '[i]', 'x')
ldr_cmd = g_cmd('ld', ops.LDR, 'x', '[i]')

# Arithmetic
add_cmd = g_cmd('add', ops.ADD, 'x', 'nn')
addr_cmd = g_cmd('add', ops.ADDR, 'x', 'y')
addi_cmd = g_cmd('add', ops.ADDI, 'i', 'x')
or_cmd = g_cmd('or', ops.OR, 'x', 'y')
and_cmd = g_cmd('and', ops.AND, 'x', 'y')
xor_cmd = g_cmd('xor', ops.XOR, 'x', 'y')
sub_cmd = g_cmd('sub', ops.SUB, 'x', 'y')
subn_cmd = g_cmd('subn', ops.SUBN, 'x', 'y')
shr_cmd = g_cmd('shr', ops.SHR, 'x')
shry_cmd = g_cmd('shr', ops.SHR, 'x', 'y')
shl_cmd = g_cmd('shl', ops.SHL, 'x')
shly_cmd = g_cmd('shl', ops.SHL, 'x', 'y')
rnd_cmd = g_cmd('rnd', ops.RND, 'x', 'nn')

# Display and keypad
drw_cmd = g_cmd('drw', ops.DRW, 'x', 'y', 'n')
skp_cmd = g_cmd('skp', ops.SKP, 'x')
sknp_cmd = g_cmd('sknp', ops.SKNP, 'x')

asm_cmd = cls_cmd \
    ^ ret_cmd \
    ^ sys_cmd \
    ^ jp_cmd \
    ^ jpo_cmd \
    ^ call_cmd \
    ^ se_cmd \
    ^ ser_cmd \
    ^ sne_cmd \
    ^ sner_cmd \
    ^ ld_cmd \
    ^ mov_cmd \
    ^ ldi_cmd \
    ^ lddt_cmd \
    ^ ldk_cmd \
    ^ sdt_cmd \
    ^ sst_cmd \
    ^ ldf_cmd \
    ^ bcd_cmd \
    ^ str_cmd \
    ^ ldr_cmd \
    ^ add_cmd \
    ^ addr_cmd \
    ^ addi_cmd \
    ^ or_cmd \
    ^ and_cmd \
    ^ xor_cmd \
    ^ sub_cmd \
    ^ subn_cmd \
    ^ shr_cmd \
    ^ shry_cmd \
    ^ shl_cmd \
    ^ shly_cmd \
    ^ rnd_cmd \
    ^ drw_cmd \
    ^ skp_cmd \
    ^ sknp_cmd

# Data
db = (pp.Suppress(pp.Keyword('DB')) + number + pp.ZeroOrMore(comma + number)) \
    .setParseAction(lambda r: (FPP.issue_db, list(r)))
dw = (pp.Suppress(pp.Keyword('DW')) + addr).setParseAction(lambda r: (FPP.issue_dw, list(r)))

# Fail on unknown statement
unknown = pp.Regex('.+').setParseAction(lambda r: (FPP.on_fail, r))

program = pp.ZeroOrMore(comment | label | asm_cmd | db | dw | unknown)
