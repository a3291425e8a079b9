import io
import os

import pytest

from lc3.terminal import raw_input_mode


def test_non_tty_is_left_alone():
    with raw_input_mode(io.StringIO()):
        pass

def test_interrupt_propagates_out_of_block():
    with pytest.raises(KeyboardInterrupt):
        with raw_input_mode(io.StringIO()):
            raise KeyboardInterrupt

def test_tty_raw_mode_cleared_and_restored_after_interrupt():
    termios = pytest.importorskip("termios")
    pty = pytest.importorskip("pty")
    master, slave = pty.openpty()
    try:
        stream = os.fdopen(slave, "rb", buffering=0, closefd=False)
        before = termios.tcgetattr(slave)
        assert before[3] & termios.ICANON
        with pytest.raises(KeyboardInterrupt):
            with raw_input_mode(stream):
                assert termios.tcgetattr(slave)[3] & (termios.ICANON | termios.ECHO) == 0
                raise KeyboardInterrupt
        assert termios.tcgetattr(slave) == before
        stream.close()
    finally:
        os.close(master)
        os.close(slave)
