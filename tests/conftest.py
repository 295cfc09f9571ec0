from typing import Callable

import pytest

from wifitui.data import operation as op


class FakeCommands:
    """
    Stands in for system.run_command: maps an argv tuple to the
    (returncode, stdout, stderr) it should produce and records every call.
    """

    def __init__(self):
        self.responses: dict[tuple[str, ...], tuple[int, str, str] | Exception] = {}
        self.calls: list[list[str]] = []

    def add(self, args: list[str], rc: int = 0, stdout: str = "", stderr: str = ""):
        self.responses[tuple(args)] = (rc, stdout, stderr)

    def fail(self, args: list[str], error: Exception):
        self.responses[tuple(args)] = error

    def __call__(self, args: list[str]) -> tuple[int, str, str]:
        self.calls.append(list(args))
        response = self.responses.get(tuple(args), (0, "", ""))
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def commands(monkeypatch) -> FakeCommands:
    fake = FakeCommands()
    monkeypatch.setattr("wifitui.util.system.run_command", fake)
    return fake


@pytest.fixture
def submitted() -> list[op.OperationRequest]:
    return []


@pytest.fixture
def submit(submitted) -> Callable[[op.OperationRequest], None]:
    return submitted.append
