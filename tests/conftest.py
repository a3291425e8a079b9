import io
import struct

import pytest

from lc3.console import Console
from lc3.cpu_core import CPU


def image(origin, words):
    """Build a big-endian program image."""
    return struct.pack(f">H{len(words)}H", origin, *words)


@pytest.fixture
def make_cpu():
    """Factory: a CPU with `words` loaded at `origin` and in-memory console streams."""
    def factory(words=(), origin=0x3000, keys=b""):
        out = io.BytesIO()
        cpu = CPU(Console(stdin=io.BytesIO(keys), stdout=out))
        if words:
            cpu.load(image(origin, list(words)))
        return cpu, out
    return factory
