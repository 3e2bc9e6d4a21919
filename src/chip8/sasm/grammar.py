# type: ignore
''' Assembly grammar, one statement per line '''

import pyparsing as pp

import chip8.common.ops as ops
from chip8.sasm.fpp import FPP


def kw(literal):
    return pp.Suppress(pp.CaselessKeyword(literal))


comma = pp.Suppress(',')
comment = pp.Suppress(pp.Literal(';') + pp.restOfLine)

id = pp.Regex(r'[A-Za-z_][A-Za-z0-9_]*')

hex_const = pp.Regex(r'0[xX][0-9a-fA-F]+').setParseAction(lambda r: int(r[0], 16))
bin_const = pp.Regex(r'0[bB][01]+').setParseAction(lambda r: int(r[0][2:], 2))
dec_const = pp.Regex(r'[0-9]+').setParseAction(lambda r: int(r[0]))
const = hex_const | bin_const | dec_const

reg = pp.Regex(r'[vV][0-9a-fA-F]\b').setParseAction(lambda r: int(r[0][1], 16))
address = const | id

label = (id + pp.Suppress(':')).setParseAction(lambda r: (FPP.on_label, r[0]))


def g_stmt(expr, factory):
    return expr.setParseAction(lambda r: (FPP.issue_op, (factory, list(r))))


def g_cmd(literal, factory, *operands):
    expr = kw(literal)

    for inx, operand in enumerate(operands):
        if inx > 0:
            expr = expr + comma

        expr = expr + operand

    return g_stmt(expr, factory)


# Selector operands, contribute no tokens
dt = kw('DT')
st = kw('ST')
key = kw('K')
index = kw('I')
font = kw('F')
bcd = kw('B')
index_ref = pp.Suppress(pp.Literal('[') + pp.CaselessKeyword('I') + pp.Literal(']'))
v0 = kw('V0')

# Flow
cls_cmd = g_cmd('CLS', ops.Clear)
ret_cmd = g_cmd('RET', ops.Return)
sys_cmd = g_cmd('SYS', ops.CallRca, address)
jp_v0_cmd = g_cmd('JP', ops.Jump, v0, address)
jp_cmd = g_cmd('JP', ops.Goto, address)
call_cmd = g_cmd('CALL', ops.CallSubroutine, address)

# Conditions
se_reg_cmd = g_cmd('SE', ops.CondRegEq, reg, reg)
se_cmd = g_cmd('SE', ops.CondEq, reg, const)
sne_reg_cmd = g_cmd('SNE', ops.CondRegNe, reg, reg)
sne_cmd = g_cmd('SNE', ops.CondNe, reg, const)
skp_cmd = g_cmd('SKP', ops.CondKeyPressed, reg)
sknp_cmd = g_cmd('SKNP', ops.CondKeyReleased, reg)

# Loads
ld_vx_dt_cmd = g_cmd('LD', ops.GetDelayTimer, reg, dt)
ld_vx_k_cmd = g_cmd('LD', ops.WaitKeyPressed, reg, key)
ld_vx_i_cmd = g_cmd('LD', ops.LoadRegisters, reg, index_ref)
ld_reg_cmd = g_cmd('LD', ops.Assign, reg, reg)
ld_cmd = g_cmd('LD', ops.Set, reg, const)
ld_dt_cmd = g_cmd('LD', ops.SetDelayTimer, dt, reg)
ld_st_cmd = g_cmd('LD', ops.SetSoundTimer, st, reg)
ld_i_cmd = g_cmd('LD', ops.SetAddress, index, address)
ld_f_cmd = g_cmd('LD', ops.SetSprite, font, reg)
ld_b_cmd = g_cmd('LD', ops.SetBCD, bcd, reg)
ld_i_vx_cmd = g_cmd('LD', ops.StoreRegisters, index_ref, reg)

# Arithmetic
add_i_cmd = g_cmd('ADD', ops.AddAddress, index, reg)
add_reg_cmd = g_cmd('ADD', ops.Increment, reg, reg)
add_cmd = g_cmd('ADD', ops.Add, reg, const)
or_cmd = g_cmd('OR', ops.Or, reg, reg)
and_cmd = g_cmd('AND', ops.And, reg, reg)
xor_cmd = g_cmd('XOR', ops.Xor, reg, reg)
sub_cmd = g_cmd('SUB', ops.Sub, reg, reg)
subn_cmd = g_cmd('SUBN', ops.SubReverse, reg, reg)
shr_cmd = g_stmt(kw('SHR') + reg + pp.Optional(comma + pp.Suppress(reg)), ops.ShiftRight)
shl_cmd = g_stmt(kw('SHL') + reg + pp.Optional(comma + pp.Suppress(reg)), ops.ShiftLeft)
rnd_cmd = g_cmd('RND', ops.SetRand, reg, const)

# Display
drw_cmd = g_cmd('DRW', ops.DrawSprite, reg, reg, const)

# Data
db_cmd = (kw('DB') + const + pp.ZeroOrMore(comma + const)) \
    .setParseAction(lambda r: (FPP.issue_bytes, list(r)))

asm_cmd = cls_cmd \
    | ret_cmd \
    | sys_cmd \
    | jp_v0_cmd \
    | jp_cmd \
    | call_cmd \
    | se_reg_cmd \
    | se_cmd \
    | sne_reg_cmd \
    | sne_cmd \
    | skp_cmd \
    | sknp_cmd \
    | ld_vx_dt_cmd \
    | ld_vx_k_cmd \
    | ld_vx_i_cmd \
    | ld_reg_cmd \
    | ld_cmd \
    | ld_dt_cmd \
    | ld_st_cmd \
    | ld_i_cmd \
    | ld_f_cmd \
    | ld_b_cmd \
    | ld_i_vx_cmd \
    | add_i_cmd \
    | add_reg_cmd \
    | add_cmd \
    | or_cmd \
    | and_cmd \
    | xor_cmd \
    | sub_cmd \
    | subn_cmd \
    | shr_cmd \
    | shl_cmd \
    | rnd_cmd \
    | drw_cmd \
    | db_cmd

statement = pp.Optional(label) + pp.Optional(asm_cmd)
statement.ignore(comment)
