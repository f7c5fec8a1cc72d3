"""Single keypress input for the interactive display preview."""

import sys
import tty
import termios
import contextlib


@contextlib.contextmanager
def raw_mode(stream=None):
    """Switch the terminal to unbuffered input, restoring the previous mode on exit."""
    stream = stream or sys.stdin
    if not stream.isatty():
        yield stream
        return
    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    try:
        # cbreak keeps output processing, so prompts on stderr still end lines
        tty.setcbreak(fd)
        yield stream
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def getch(stream=None):
    """Block until one character is read; end of input reads as ''."""
    stream = stream or sys.stdin
    return stream.read(1)
