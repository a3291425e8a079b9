MEM_SIZE = 0x10000  # Number of 16-bit words in memory
ADDR_MASK = MEM_SIZE - 1

# Machine control register, bit 15 = clock enable
MCR = 0xFFFE
STATUS_BIT = 1 << 15


class Memory:
    def __init__(self):
        self.mem = [0]*MEM_SIZE
        self.mem[MCR] = STATUS_BIT

    def raw_read(self, addr: int) -> int:
        """Read a 16-bit word from memory"""
        return self.mem[addr & ADDR_MASK]

    def raw_write(self, addr: int, value: int):
        """Write a 16-bit word to memory"""
        self.mem[addr & ADDR_MASK] = value & 0xFFFF  # Mask to 16 bits

    def load_words(self, origin: int, words) -> None:
        """Bulk copy; the caller has already checked that the block fits."""
        self.mem[origin:origin + len(words)] = [w & 0xFFFF for w in words]
