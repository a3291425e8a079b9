"""Exceptions raised by the emulator core.

Loader failures are detected before memory is touched, so a caller that
catches a ``LoadError`` can keep using the machine it tried to load into.
"""


class VMError(Exception):
    """Base class for every emulator failure."""


class LoadError(VMError):
    def __init__(self, message: str, source: str = "<data>"):
        super().__init__(message)
        self.source = source


class InputNotFound(LoadError):
    """The program image could not be opened or read."""


class InputTooLarge(LoadError):
    """The program would run past the end of the address space."""

    def __init__(self, origin: int, word_count: int, source: str = "<data>"):
        super().__init__(
            f"Input exceeded memory space (origin 0x{origin:04X}, {word_count} words)",
            source)
        self.origin = origin
        self.word_count = word_count


class MalformedImage(LoadError):
    """The image is too short to hold its origin header."""


class UnimplementedOpcode(VMError):
    """RTI or the reserved opcode was fetched."""

    def __init__(self, opcode: int, instruction: int, address: int):
        super().__init__(
            f"Attempted to execute unimplemented opcode {opcode:04b} "
            f"(instruction 0x{instruction:04X} at 0x{address:04X})")
        self.opcode = opcode
        self.instruction = instruction
        self.address = address
