import codecs
import contextlib
import os
import select
import termios
from typing import Iterator, Protocol

from wifitui.data.event import Key

ESCAPE_SEQUENCES = {
    "[A": "up",
    "[B": "down",
    "[C": "right",
    "[D": "left",
    "OA": "up",
    "OB": "down",
    "OC": "right",
    "OD": "left",
    "[Z": "backtab",
}

SINGLE_KEYS = {
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    "\x7f": "backspace",
    "\x08": "backspace",
}


class KeySource(Protocol):
    def read_keys(self, timeout: float) -> list[Key]: ...


def decode_keys(text: str) -> list[Key]:
    """
    Decode a chunk of terminal input into key presses. A chunk may hold
    several keys (fast typing, pastes). Escape sequences that aren't
    recognised are dropped.
    """
    keys: list[Key] = []
    i = 0

    while i < len(text):
        ch = text[i]

        if ch == "\x1b":
            sequence = text[i + 1 : i + 3]
            if sequence in ESCAPE_SEQUENCES:
                keys.append(Key(ESCAPE_SEQUENCES[sequence]))
                i += 3
            elif sequence[:1] in ("[", "O"):
                # skip an unknown CSI/SS3 sequence up to its final byte
                j = i + 2
                while j < len(text) and not ("@" <= text[j] <= "~"):
                    j += 1
                i = j + 1
            else:
                keys.append(Key("esc"))
                i += 1
            continue

        if ch in SINGLE_KEYS:
            keys.append(Key(SINGLE_KEYS[ch]))
        elif "\x01" <= ch <= "\x1a":
            keys.append(Key(chr(ord(ch) + ord("a") - 1), ctrl=True))
        elif ch.isprintable():
            keys.append(Key(ch))
        i += 1

    return keys


class TerminalKeySource:
    """
    Reads key presses from a POSIX terminal file descriptor.
    """

    def __init__(self, fd: int):
        self._fd = fd
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def read_keys(self, timeout: float) -> list[Key]:
        readable, _, _ = select.select([self._fd], [], [], max(timeout, 0.0))
        if not readable:
            return []

        # the decoder holds back a multi-byte character split across reads
        text = self._decoder.decode(os.read(self._fd, 1024))
        return decode_keys(text)


@contextlib.contextmanager
def input_mode(fd: int) -> Iterator[None]:
    """
    Put the terminal in non-canonical, no-echo mode with signal keys
    delivered as input (so Ctrl+C arrives as a key). Output processing is
    left alone. The previous settings are restored on exit.
    """
    old_settings = termios.tcgetattr(fd)
    new_settings = termios.tcgetattr(fd)
    new_settings[0] &= ~(termios.IXON | termios.ICRNL)
    new_settings[3] &= ~(termios.ICANON | termios.ECHO | termios.ISIG | termios.IEXTEN)
    new_settings[6][termios.VMIN] = 1
    new_settings[6][termios.VTIME] = 0
    termios.tcsetattr(fd, termios.TCSADRAIN, new_settings)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
