"""Text pane acting as the emulated display and keyboard.

The CPU's Console writes display bytes into the pane and reads keystrokes
typed into it from a `KeyBuffer`.
"""
from collections import deque

from PySide6.QtWidgets import QPlainTextEdit
from PySide6.QtGui import QTextCursor


class KeyBuffer:
    """Non-blocking byte source: read() returns b"" when nothing is typed."""

    def __init__(self):
        self._keys = deque()

    def push(self, data: bytes):
        self._keys.extend(data)

    def read(self, n: int = 1) -> bytes:
        out = bytearray()
        while self._keys and len(out) < n:
            out.append(self._keys.popleft())
        return bytes(out)

    def __len__(self):
        return len(self._keys)


class ConsolePanel(QPlainTextEdit):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setReadOnly(True)
        self.setObjectName("Console")
        self.keys = KeyBuffer()

    # display side (file-like, binary)
    def write(self, data: bytes):
        text = data.decode("latin-1").replace("\r", "")
        self.moveCursor(QTextCursor.End)
        self.insertPlainText(text)
        self.moveCursor(QTextCursor.End)
        return len(data)

    def flush(self):
        pass

    # keyboard side
    def keyPressEvent(self, event):
        text = event.text()
        if text:
            self.keys.push(text.replace("\r", "\n").encode("latin-1", "replace"))
        else:
            super().keyPressEvent(event)
