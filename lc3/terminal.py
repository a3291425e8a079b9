import sys
from contextlib import contextmanager

try:
    import termios
except ImportError:  # Windows has no termios; raw mode is skipped there
    termios = None


@contextmanager
def raw_input_mode(stream=None):
    """Turn off line buffering and echo on a TTY for the duration of the block.

    The original settings are restored on every exit path, including
    KeyboardInterrupt. Non-TTY streams are left alone.
    """
    stream = stream if stream is not None else sys.stdin
    if termios is None or not stream.isatty():
        yield
        return

    fd = stream.fileno()
    original = termios.tcgetattr(fd)
    new = termios.tcgetattr(fd)
    new[3] &= ~(termios.ICANON | termios.ECHO)   # lflags
    termios.tcsetattr(fd, termios.TCSANOW, new)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSANOW, original)
