import pytest

from lc3 import loader
from lc3.errors import InputNotFound, InputTooLarge, MalformedImage, LoadError
from lc3.memory import Memory
from lc3.registers import Registers

from conftest import image


def fresh():
    return Memory(), Registers()

def test_load_copies_words_and_sets_pc():
    mem, reg = fresh()
    origin = loader.load_data(mem, reg, image(0x3000, [0x5020, 0x1025, 0xF025]))
    assert origin == 0x3000
    assert mem.mem[0x3000:0x3003] == [0x5020, 0x1025, 0xF025]
    assert reg.pc == 0x3000

def test_load_big_endian_bytes():
    mem, reg = fresh()
    loader.load_data(mem, reg, bytes([0x40, 0x00, 0x12, 0x34, 0xAB, 0xCD]))
    assert mem.raw_read(0x4000) == 0x1234
    assert mem.raw_read(0x4001) == 0xABCD
    assert reg.pc == 0x4000

def test_load_leaves_other_registers():
    mem, reg = fresh()
    reg[7] = 0x1111
    reg.psr = 0x8004
    loader.load_data(mem, reg, image(0x0200, [1]))
    assert reg[7] == 0x1111
    assert reg.psr == 0x8004
    assert mem.raw_read(0xFFFE) == 0x8000

def test_header_only_image():
    mem, reg = fresh()
    loader.load_data(mem, reg, image(0x5000, []))
    assert reg.pc == 0x5000

def test_odd_trailing_byte_is_ignored():
    mem, reg = fresh()
    loader.load_data(mem, reg, image(0x3000, [0x1111]) + b"\x22")
    assert mem.raw_read(0x3000) == 0x1111
    assert mem.raw_read(0x3001) == 0

def test_image_filling_top_of_memory():
    mem, reg = fresh()
    loader.load_data(mem, reg, image(0xFFFE, [0xAAAA, 0xBBBB]))
    assert mem.mem[0xFFFE:] == [0xAAAA, 0xBBBB]

def test_too_large_leaves_state_untouched():
    mem, reg = fresh()
    before = list(mem.mem)
    with pytest.raises(InputTooLarge) as exc:
        loader.load_data(mem, reg, image(0xFFFE, [1, 2, 3]))
    assert exc.value.origin == 0xFFFE
    assert exc.value.word_count == 3
    assert mem.mem == before
    assert reg.pc == 0x3000

def test_word_count_not_byte_count():
    # 0x8000 words from 0x8000 fits exactly; counting bytes would reject it
    mem, reg = fresh()
    loader.load_data(mem, reg, image(0x8000, [7] * 0x8000))
    assert mem.raw_read(0xFFFF) == 7

def test_malformed_image():
    mem, reg = fresh()
    with pytest.raises(MalformedImage):
        loader.load_data(mem, reg, b"\x30")

def test_load_file(tmp_path):
    path = tmp_path / "prog.obj"
    path.write_bytes(image(0x3000, [0x1234]))
    mem, reg = fresh()
    assert loader.load_file(mem, reg, path) == 0x3000
    assert mem.raw_read(0x3000) == 0x1234

def test_load_missing_file(tmp_path):
    mem, reg = fresh()
    with pytest.raises(InputNotFound) as exc:
        loader.load_file(mem, reg, tmp_path / "missing.obj")
    assert isinstance(exc.value, LoadError)
    assert exc.value.source.endswith("missing.obj")
    assert isinstance(exc.value.__cause__, OSError)
    assert reg.pc == 0x3000
