from dataclasses import dataclass

from wifitui.data.operation import OperationResult


@dataclass(frozen=True)
class Key:
    """
    A decoded key press. code is a single printable character or one of
    up, down, left, right, enter, esc, tab, backtab, backspace.
    """

    code: str
    ctrl: bool = False

    @property
    def is_char(self) -> bool:
        return len(self.code) == 1 and not self.ctrl


@dataclass(frozen=True)
class KeyEvent:
    key: Key


@dataclass(frozen=True)
class TickEvent:
    pass


@dataclass(frozen=True)
class ResultEvent:
    result: OperationResult


Event = KeyEvent | TickEvent | ResultEvent
