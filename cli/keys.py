"""Raw terminal keystroke input."""

import codecs
import os
import termios
import tty
from contextlib import contextmanager

from core.session import Event, EVENT_BACKSPACE, EVENT_DELETE, EVENT_INTERRUPT

CTRL_C = '\x03'
CTRL_D = '\x04'
ESCAPE = '\x1b'
BACKSPACE_KEYS = ('\x7f', '\x08')


def decode_keys(text: str) -> list[Event]:
    """Turn a chunk of terminal input into drill events."""
    events = []
    for char in text:
        if char == CTRL_C:
            events.append(Event(EVENT_INTERRUPT))
        elif char == CTRL_D:
            events.append(Event(EVENT_DELETE))
        elif char in BACKSPACE_KEYS:
            events.append(Event(EVENT_BACKSPACE))
        elif char == ESCAPE:
            # Rest of the chunk is an arrow/function key sequence
            break
        elif char.isprintable():
            events.append(Event.key(char))
    return events


@contextmanager
def raw_mode(stream):
    """Read keys one at a time for the duration of the block.

    Output processing stays on so newlines still render; Ctrl+C and Ctrl+D
    arrive as plain characters instead of signals or end-of-file.
    """
    if not stream.isatty():
        yield
        return
    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        mode = termios.tcgetattr(fd)
        mode[tty.LFLAG] &= ~termios.ISIG
        termios.tcsetattr(fd, termios.TCSANOW, mode)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def read_events(stream, chunk_size: int = 64):
    """Yield events from a stream until it closes; end of input interrupts."""
    fd = stream.fileno()
    decoder = codecs.getincrementaldecoder('utf-8')(errors='ignore')
    while True:
        data = os.read(fd, chunk_size)
        if not data:
            yield Event(EVENT_INTERRUPT)
            return
        yield from decode_keys(decoder.decode(data))
