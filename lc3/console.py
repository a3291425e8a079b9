"""Byte-level console used by the keyboard and display device registers.

Streams are binary. Real file descriptors (a terminal, a pipe) are polled with
``select`` and read with ``os.read`` so no bytes sit hidden in a Python buffer;
in-memory streams such as ``io.BytesIO`` are polled by reading one byte ahead
into a per-instance slot.
"""
import io
import os
import select
import sys

EOF = 0xFFFF


class Console:
    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self._pending = b""

    def _fileno(self):
        try:
            return self.stdin.fileno()
        except (AttributeError, io.UnsupportedOperation, ValueError):
            return None

    def key_ready(self) -> bool:
        """Non-blocking: is an input byte waiting?"""
        if self._pending:
            return True
        fd = self._fileno()
        if fd is None:
            self._pending = self.stdin.read(1) or b""
            return bool(self._pending)
        ready, _, _ = select.select([fd], [], [], 0)
        return bool(ready)

    def read_key(self) -> int:
        """Blocking read of a single byte; EOF reads as 0xFFFF."""
        if self._pending:
            data, self._pending = self._pending[:1], self._pending[1:]
        else:
            fd = self._fileno()
            # os.read stays interruptible by SIGINT (KeyboardInterrupt)
            data = os.read(fd, 1) if fd is not None else self.stdin.read(1)
        if not data:
            return EOF
        return data[0]

    def write_char(self, value: int) -> None:
        self.stdout.write(bytes([value & 0xFF]))
        self.stdout.flush()
