import operator

from .registers import FLAG_N, FLAG_Z, FLAG_P


def sext(val: int, bits: int) -> int:
    """
    Sign-extend the low `bits` bits of `val` to a 16-bit word.
    e.g. sext(0b11111, 5) == 0xFFFF
    """
    sign = 1 << (bits - 1)
    val &= (1 << bits) - 1
    return ((val ^ sign) - sign) & 0xFFFF


def sign_flag(value: int) -> int:
    """N/Z/P flag describing a 16-bit value."""
    value &= 0xFFFF
    if value == 0:
        return FLAG_Z
    if value & 0x8000:
        return FLAG_N
    return FLAG_P


class ALU:
    OPS = {
        "ADD": operator.add,
        "AND": operator.and_,
        "NOT": lambda a, _b: ~a,
    }

    @classmethod
    def execute(cls, op: str, a: int, b: int = 0) -> int:
        try:
            return cls.OPS[op](a, b) & 0xFFFF
        except KeyError as e:
            raise ValueError(f"Unsupported ALU op {op}") from e
