import pytest

from lc3.alu import ALU, sext, sign_flag
from lc3.registers import FLAG_N, FLAG_Z, FLAG_P

def test_add():
    assert ALU.execute("ADD", 2, 3) == 5

def test_add_wraps_to_16_bits():
    assert ALU.execute("ADD", 0xFFFF, 2) == 1

def test_and():
    assert ALU.execute("AND", 0xF0F0, 0xFF00) == 0xF000

def test_not():
    assert ALU.execute("NOT", 0x00FF) == 0xFF00

def test_unsupported_op():
    with pytest.raises(ValueError):
        ALU.execute("MUL", 2, 3)

@pytest.mark.parametrize("val,bits,expected", [
    (0b11111, 5, 0xFFFF),
    (0b01111, 5, 0x000F),
    (0b10000, 5, 0xFFF0),
    (0x1FF, 9, 0xFFFF),
    (0x100, 9, 0xFF00),
    (0x0FF, 9, 0x00FF),
    (0x400, 11, 0xFC00),
    (0x20, 6, 0xFFE0),
    # bits above the field are ignored
    (0xF025, 5, 0x0005),
])
def test_sext(val, bits, expected):
    assert sext(val, bits) == expected

def test_sext_truncates_back_and_keeps_sign():
    for bits in range(1, 17):
        mask = (1 << bits) - 1
        for val in range(1 << bits):
            extended = sext(val, bits)
            assert extended & mask == val
            assert bool(extended & 0x8000) == bool(val >> (bits - 1) & 1)

@pytest.mark.parametrize("value,flag", [
    (0, FLAG_Z),
    (1, FLAG_P),
    (0x7FFF, FLAG_P),
    (0x8000, FLAG_N),
    (0xFFFF, FLAG_N),
    (0x10000, FLAG_Z),
])
def test_sign_flag(value, flag):
    assert sign_flag(value) == flag
