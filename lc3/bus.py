from .memory import Memory, STATUS_BIT
from .console import Console

# Memory-mapped device registers
KBSR = 0xFE00  # keyboard status
KBDR = 0xFE02  # keyboard data
DSR = 0xFE04   # display status
DDR = 0xFE06   # display data


class MemoryBus:
    """Routes CPU loads/stores either to plain memory or to the console."""

    def __init__(self, memory: Memory, console: Console):
        self.memory = memory
        self.console = console

    def read(self, addr: int) -> int:
        addr &= 0xFFFF
        if addr == KBSR:
            return STATUS_BIT if self.console.key_ready() else 0
        if addr == KBDR:
            if self.read(KBSR):
                return self.console.read_key()
            return 0
        if addr == DSR:
            return STATUS_BIT            # display is always ready
        if addr == DDR:
            return 0                     # write-only
        return self.memory.raw_read(addr)

    def write(self, addr: int, value: int):
        addr &= 0xFFFF
        if addr in (KBSR, KBDR, DSR):
            return
        if addr == DDR:
            self.console.write_char(value)
            return
        self.memory.raw_write(addr, value)
