import os

import pytest

from wifitui.data.event import Key
from wifitui.engine.keys import TerminalKeySource, decode_keys


class TestDecodeKeys:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("\x1b[A", [Key("up")]),
            ("\x1b[B", [Key("down")]),
            ("\x1bOC", [Key("right")]),
            ("\x1bOD", [Key("left")]),
            ("\x1b[Z", [Key("backtab")]),
            ("\r", [Key("enter")]),
            ("\n", [Key("enter")]),
            ("\t", [Key("tab")]),
            ("\x7f", [Key("backspace")]),
            ("\x08", [Key("backspace")]),
            ("\x1b", [Key("esc")]),
            ("\x03", [Key("c", ctrl=True)]),
            ("q", [Key("q")]),
            ("é", [Key("é")]),
        ],
    )
    def test_single_key(self, text, expected) -> None:
        assert decode_keys(text) == expected

    def test_several_keys_in_one_chunk(self) -> None:
        assert decode_keys("ab\x1b[Bc\r") == [
            Key("a"),
            Key("b"),
            Key("down"),
            Key("c"),
            Key("enter"),
        ]

    def test_unknown_sequences_are_dropped(self) -> None:
        # delete and ctrl+up
        assert decode_keys("\x1b[3~x\x1b[1;5Ay") == [Key("x"), Key("y")]

    def test_escape_followed_by_char(self) -> None:
        assert decode_keys("\x1bq") == [Key("esc"), Key("q")]

    def test_ctrl_keys_are_not_chars(self) -> None:
        [key] = decode_keys("\x03")
        assert not key.is_char

    def test_empty(self) -> None:
        assert decode_keys("") == []


class TestTerminalKeySource:
    def test_timeout_without_input(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            assert TerminalKeySource(read_fd).read_keys(0.01) == []
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_split_multibyte_character(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            source = TerminalKeySource(read_fd)
            data = "é".encode()

            os.write(write_fd, data[:1])
            assert source.read_keys(1.0) == []

            os.write(write_fd, data[1:] + b"\x1b[A")
            assert source.read_keys(1.0) == [Key("é"), Key("up")]
        finally:
            os.close(read_fd)
            os.close(write_fd)
