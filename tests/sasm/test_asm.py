import pytest

import chip8.common.ops as ops
from chip8.runtime.decoder import decode
from chip8.sasm.asm import assemble, collect_file, compile_items, encode
from chip8.sasm.fpp import AsmError
from chip8.tools.disasm import disassemble

from unit_utils import assemble_testdata, find_file


def words(binary: bytes) -> list[int]:
    return [(binary[i] << 8) | binary[i + 1] for i in range(0, len(binary), 2)]


def test_simple_statements():
    assert assemble('CLS\nRET') == bytes([0x00, 0xE0, 0x00, 0xEE])


def test_every_mnemonic():
    source = '''
        SYS 0x123
        JP 0x456
        JP V0, 0x300
        CALL 0x789
        SE V1, 0x10
        SNE V2, 32
        SE V1, V2
        SNE V3, V4
        LD V5, 0b1010
        ADD V6, 1
        LD V7, V8
        OR V1, V2
        AND V1, V2
        XOR V1, V2
        ADD V1, V2
        SUB V1, V2
        SHR V1
        SUBN V1, V2
        SHL V1, V2
        LD I, 0x2F0
        RND VA, 0x0F
        DRW V1, V2, 15
        SKP VB
        SKNP VC
        LD VD, DT
        LD VE, K
        LD DT, VF
        LD ST, V0
        ADD I, V1
        LD F, V2
        LD B, V3
        LD [I], V4
        LD V5, [I]
    '''

    assert [decode(w) for w in words(assemble(source))] == [
        ops.CallRca(0x123),
        ops.Goto(0x456),
        ops.Jump(0x300),
        ops.CallSubroutine(0x789),
        ops.CondEq(1, 0x10),
        ops.CondNe(2, 32),
        ops.CondRegEq(1, 2),
        ops.CondRegNe(3, 4),
        ops.Set(5, 10),
        ops.Add(6, 1),
        ops.Assign(dst=7, src=8),
        ops.Or(1, 2),
        ops.And(1, 2),
        ops.Xor(1, 2),
        ops.Increment(1, 2),
        ops.Sub(1, 2),
        ops.ShiftRight(1),
        ops.SubReverse(1, 2),
        ops.ShiftLeft(1),
        ops.SetAddress(0x2F0),
        ops.SetRand(0xA, 0x0F),
        ops.DrawSprite(1, 2, 15),
        ops.CondKeyPressed(0xB),
        ops.CondKeyReleased(0xC),
        ops.GetDelayTimer(0xD),
        ops.WaitKeyPressed(0xE),
        ops.SetDelayTimer(0xF),
        ops.SetSoundTimer(0),
        ops.AddAddress(1),
        ops.SetSprite(2),
        ops.SetBCD(3),
        ops.StoreRegisters(4),
        ops.LoadRegisters(5),
    ]


def test_case_and_comments():
    source = '''
        ; whole line comment
        ld v1, 0x1f     ; trailing comment
        Cls
    '''
    assert words(assemble(source)) == [0x611F, 0x00E0]


def test_labels_resolve_both_ways():
    source = '''
        JP end
back:   CLS
end:    JP back
    '''
    assert words(assemble(source)) == [0x1204, 0x00E0, 0x1202]


def test_data_bytes_shift_labels():
    source = '''
        LD I, sprite
        JP sprite
sprite: DB 0x80, 0b01000000, 32
    '''
    binary = assemble(source)

    assert words(binary[:4]) == [0xA204, 0x1204]
    assert binary[4:] == bytes([0x80, 0x40, 0x20])


@pytest.mark.parametrize('source', [
    'FOO V1',
    'LD V1',
    'JP nowhere',
    'LD V1, 300',
    'JP 0x1000',
    'DB 256',
    'twice: CLS\ntwice: RET',
    'SYS 0x0E0',
    'SYS 0x0EE',
])
def test_errors(source):
    with pytest.raises(AsmError):
        assemble(source)


def test_error_names_the_line():
    with pytest.raises(AsmError, match=':3:'):
        assemble('CLS\nRET\nBOGUS\n')


def test_encode_inverts_decode_for_testdata():
    binary = assemble_testdata('countdown')

    for word in words(binary[:-3]):
        assert encode(decode(word)) == word


def test_disassembly_reassembles():
    binary = assemble_testdata('glyph')
    listing = '\n'.join(text for (_, _, text) in disassemble(binary))

    assert assemble(listing) == binary


def test_disassemble_listing():
    binary = assemble('CLS\nLD V1, 2\nDB 0x50, 0x01, 0x77')

    assert list(disassemble(binary)) == [
        (0x200, 0x00E0, 'CLS'),
        (0x202, 0x6102, 'LD V1, 0x02'),
        (0x204, 0x5001, 'DB 0x50, 0x01'),
        (0x206, 0x77, 'DB 0x77'),
    ]


def test_errors_name_the_source_file(tmp_path):
    source = tmp_path / 'broken.s8'
    source.write_text('CLS\nBOGUS\n')

    item = collect_file(source)
    assert item.namespace() == 'broken'

    with pytest.raises(AsmError, match='broken:2:'):
        compile_items([collect_file(find_file('testdata/countdown.s8')), item])
