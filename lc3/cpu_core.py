import logging

from .registers import Registers, FLAG_MASK
from .memory import Memory, MCR, STATUS_BIT
from .console import Console
from .bus import MemoryBus
from .alu import ALU, sext, sign_flag
from .errors import UnimplementedOpcode
from . import loader

log = logging.getLogger(__name__)

TRAP_GETC = 0x20

OP_BR, OP_ADD, OP_LD, OP_ST = 0b0000, 0b0001, 0b0010, 0b0011
OP_JSR, OP_AND, OP_LDR, OP_STR = 0b0100, 0b0101, 0b0110, 0b0111
OP_RTI, OP_NOT, OP_LDI, OP_STI = 0b1000, 0b1001, 0b1010, 0b1011
OP_JMP, OP_RES, OP_LEA, OP_TRAP = 0b1100, 0b1101, 0b1110, 0b1111

OPCODE_NAMES = [
    "BR", "ADD", "LD", "ST", "JSR", "AND", "LDR", "STR",
    "RTI", "NOT", "LDI", "STI", "JMP", "RESERVED", "LEA", "TRAP",
]


class CPU:
    """
    LC-3 soft CPU.
    ─────────────────────────────────────────────────────
    • fetch()  : read the 16-bit word at PC into IR, PC++
    • decode_execute(): dispatch on IR[15:12] and perform the instruction
    • step()   : one fetch → decode/execute cycle
    • run()    : step until MCR[15] is cleared
    • reset()  : back to the power-on state
    """

    def __init__(self, console: Console = None):
        self.console = console if console is not None else Console()
        self.reg = Registers()   # R0..R7, PC, IR, PSR
        self.mem = Memory()      # 64K words
        self.bus = MemoryBus(self.mem, self.console)

    # ───────────────────────────── loading ────────────────────────────
    def load(self, data: bytes, source: str = "<data>") -> int:
        return loader.load_data(self.mem, self.reg, data, source)

    def load_file(self, path) -> int:
        return loader.load_file(self.mem, self.reg, path)

    # ───────────────────────────── fetch ─────────────────────────────
    def fetch(self):
        """Read the instruction at PC into IR, PC += 1"""
        self.reg.ir = self.bus.read(self.reg.pc)
        self.reg.pc = (self.reg.pc + 1) & 0xFFFF  # 16-bit wrap-around

    # ───────────────────── helpers (CC) ──────────────────────────────
    def setcc(self, value: int):
        """Replace PSR[2:0] with the N/Z/P flag of value; other bits kept"""
        self.reg.psr = (self.reg.psr & ~FLAG_MASK & 0xFFFF) | sign_flag(value)

    def _write_reg(self, dr: int, value: int):
        self.reg[dr] = value
        self.setcc(self.reg[dr])

    # ───────────────────────── decode / execute ──────────────────────
    def decode_execute(self):
        instr = self.reg.ir
        op = (instr >> 12) & 0xF               # bits[15:12]
        pc = self.reg.pc                       # already incremented

        if log.isEnabledFor(logging.DEBUG):
            off9 = sext(instr, 9)
            log.debug("0x%04X: %04X %-4s r[11:9]=R%d r[8:6]=R%d r[2:0]=R%d off9=%d trapvect8=x%02X",
                      (pc - 1) & 0xFFFF, instr, OPCODE_NAMES[op],
                      (instr >> 9) & 0x7, (instr >> 6) & 0x7, instr & 0x7,
                      off9 - 0x10000 if off9 & 0x8000 else off9, instr & 0xFF)

        # ───────────── ADD / AND ─────────────
        if op in (OP_ADD, OP_AND):
            dr  = (instr >> 9) & 0x7
            sr1 = (instr >> 6) & 0x7
            if (instr >> 5) & 1:               # imm5
                operand = sext(instr, 5)
            else:                              # register-register
                operand = self.reg[instr & 0x7]
            self._write_reg(dr, ALU.execute(OPCODE_NAMES[op], self.reg[sr1], operand))

        # ───────────── BR ──────────────
        elif op == OP_BR:
            nzp = (instr >> 9) & 0x7
            if nzp & self.reg.psr & FLAG_MASK:
                self.reg.pc = (pc + sext(instr, 9)) & 0xFFFF

        # ───────────── JMP / RET ───────
        elif op == OP_JMP:
            self.reg.pc = self.reg[(instr >> 6) & 0x7]

        # ───────────── JSR / JSRR ──────
        elif op == OP_JSR:
            # target first: JSRR R7 must jump through R7's old value
            if (instr >> 11) & 1:
                self.reg.pc = (pc + sext(instr, 11)) & 0xFFFF
            else:
                self.reg.pc = self.reg[(instr >> 6) & 0x7]
            self.reg[7] = pc

        # ───────────── LD ──────────────
        elif op == OP_LD:
            dr = (instr >> 9) & 0x7
            self._write_reg(dr, self.bus.read(pc + sext(instr, 9)))

        # ───────────── LDI ─────────────
        elif op == OP_LDI:
            dr  = (instr >> 9) & 0x7
            ptr = self.bus.read(pc + sext(instr, 9))
            self._write_reg(dr, self.bus.read(ptr))

        # ───────────── LDR ─────────────
        elif op == OP_LDR:
            dr    = (instr >> 9) & 0x7
            baser = (instr >> 6) & 0x7
            self._write_reg(dr, self.bus.read(self.reg[baser] + sext(instr, 6)))

        # ───────────── LEA ─────────────
        elif op == OP_LEA:
            dr = (instr >> 9) & 0x7
            self._write_reg(dr, pc + sext(instr, 9))

        # ───────────── NOT ─────────────
        elif op == OP_NOT:
            dr = (instr >> 9) & 0x7
            sr = (instr >> 6) & 0x7
            self._write_reg(dr, ALU.execute("NOT", self.reg[sr]))

        # ───────────── ST ──────────────
        elif op == OP_ST:
            sr = (instr >> 9) & 0x7
            self.bus.write(pc + sext(instr, 9), self.reg[sr])

        # ───────────── STI ─────────────
        elif op == OP_STI:
            sr  = (instr >> 9) & 0x7
            ptr = self.bus.read(pc + sext(instr, 9))
            self.bus.write(ptr, self.reg[sr])

        # ───────────── STR ─────────────
        elif op == OP_STR:
            sr    = (instr >> 9) & 0x7
            baser = (instr >> 6) & 0x7
            self.bus.write(self.reg[baser] + sext(instr, 6), self.reg[sr])

        # ───────────── TRAP ────────────
        elif op == OP_TRAP:
            trapvect8 = instr & 0xFF              # ZEXT
            if trapvect8 == TRAP_GETC:
                # blocking read straight into R0 instead of the OS's KBSR poll loop
                self.reg[0] = self.console.read_key()
            else:
                self.reg[7] = pc
                self.reg.pc = self.bus.read(trapvect8)

        # ───────────── RTI / reserved ──
        else:
            log.debug("Unimplemented opcode %s at 0x%04X",
                      OPCODE_NAMES[op], (pc - 1) & 0xFFFF)
            raise UnimplementedOpcode(op, instr, (pc - 1) & 0xFFFF)

    # ───────────────────────────── runner ─────────────────────────────
    @property
    def halted(self) -> bool:
        return not (self.bus.read(MCR) & STATUS_BIT)

    @property
    def awaiting_key(self) -> bool:
        """Next instruction is GETC and no input byte is waiting."""
        return (self.mem.raw_read(self.reg.pc) == 0xF000 | TRAP_GETC
                and not self.console.key_ready())

    def step(self):
        """Run one instruction cycle (fetch-decode-exec)"""
        self.fetch()
        self.decode_execute()

    def run(self, max_steps: int = None) -> int:
        """Step until the MCR clock bit clears (or `max_steps` is used up).

        Returns the number of instructions executed. UnimplementedOpcode
        propagates to the caller.
        """
        steps = 0
        while not self.halted:
            if max_steps is not None and steps >= max_steps:
                break
            self.step()
            steps += 1
        return steps

    def reset(self):
        """Restore registers and memory to the power-on state"""
        self.__init__(self.console)
