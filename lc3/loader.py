"""Program image loader.

An image is a big-endian origin word followed by big-endian program words::

    +--------+--------+--------+-----
    | origin | word 0 | word 1 | ...
    +--------+--------+--------+-----

The whole block is range-checked before the first word is copied.
"""
import logging
import struct
from pathlib import Path

from .errors import InputNotFound, InputTooLarge, MalformedImage
from .memory import MEM_SIZE

log = logging.getLogger(__name__)

HEADER = struct.Struct(">H")


def parse_image(data: bytes, source: str = "<data>"):
    """Split an image into (origin, words) without touching any machine."""
    if len(data) < HEADER.size:
        raise MalformedImage(
            f"Image is {len(data)} bytes, too short for an origin header", source)
    (origin,) = HEADER.unpack_from(data, 0)
    word_count = (len(data) - HEADER.size) // 2
    if origin + word_count > MEM_SIZE:
        raise InputTooLarge(origin, word_count, source)
    words = struct.unpack_from(f">{word_count}H", data, HEADER.size)
    return origin, words


def load_data(memory, registers, data: bytes, source: str = "<data>") -> int:
    """Copy an image into `memory` and point PC at its origin.

    Returns the origin address.
    """
    origin, words = parse_image(bytes(data), source)
    memory.load_words(origin, words)
    registers.pc = origin
    log.info("Loaded %d words at 0x%04X from %s", len(words), origin, source)
    return origin


def load_file(memory, registers, path) -> int:
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise InputNotFound(f"{e.strerror or e}", str(path)) from e
    return load_data(memory, registers, data, str(path))
