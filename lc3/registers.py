from dataclasses import dataclass, field
from typing import List

GENERAL_REGS = 8          # R0–R7
SPECIAL_REGS = ["PC", "IR", "PSR"]

PC_START = 0x3000

# PSR[2:0]
FLAG_N = 0b100
FLAG_Z = 0b010
FLAG_P = 0b001
FLAG_MASK = FLAG_N | FLAG_Z | FLAG_P


@dataclass
class Registers:
    gpr: List[int] = field(default_factory=lambda: [0]*GENERAL_REGS)
    pc: int = PC_START
    ir: int = 0
    psr: int = FLAG_Z

    def __getitem__(self, idx: int) -> int:
        if 0 <= idx < GENERAL_REGS:
            return self.gpr[idx]
        raise IndexError("Invalid register index")

    def __setitem__(self, idx: int, value: int) -> None:
        if 0 <= idx < GENERAL_REGS:
            self.gpr[idx] = value & 0xFFFF
        else:
            raise IndexError("Invalid register index")

    @property
    def flags(self) -> str:
        """Current condition code as a single letter ('N', 'Z', 'P' or '-')."""
        cc = self.psr & FLAG_MASK
        return {FLAG_N: "N", FLAG_Z: "Z", FLAG_P: "P"}.get(cc, "-")
