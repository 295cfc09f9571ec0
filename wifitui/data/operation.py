"""
Requests sent to the background worker and the results it publishes.

Each request kind has exactly one result kind. Results follow the
success/error shape used for every fetched record: ``success`` tells which
of ``error`` or the payload is meaningful.
"""

from dataclasses import dataclass, field

from wifitui.data.network import ConnectionStatus, Network, SavedNetwork


@dataclass(frozen=True)
class Scan:
    device: str


@dataclass(frozen=True)
class Connect:
    """
    Join a network or bring up a saved profile.

    password is a three-way signal:
      - non-empty string: secured join with that password
      - empty string: open join (nmcli reuses stored secrets if it has them)
      - None: reconnect to the saved profile called ``name``
    """

    name: str
    password: str | None = None


@dataclass(frozen=True)
class Disconnect:
    device: str


@dataclass(frozen=True)
class Forget:
    name: str


@dataclass(frozen=True)
class RefreshStatus:
    device: str


@dataclass(frozen=True)
class RefreshSaved:
    pass


OperationRequest = Scan | Connect | Disconnect | Forget | RefreshStatus | RefreshSaved


@dataclass
class ScanComplete:
    success: bool = False
    error: str | None = None
    networks: list[Network] = field(default_factory=list)


@dataclass
class ConnectComplete:
    success: bool = False
    error: str | None = None
    message: str | None = None
    # carried back so a password prompt knows what to retry
    name: str = ""


@dataclass
class DisconnectComplete:
    success: bool = False
    error: str | None = None
    message: str | None = None


@dataclass
class ForgetComplete:
    success: bool = False
    error: str | None = None
    message: str | None = None


@dataclass
class StatusUpdate:
    status: ConnectionStatus = field(default_factory=ConnectionStatus)


@dataclass
class SavedUpdate:
    success: bool = False
    error: str | None = None
    saved: list[SavedNetwork] = field(default_factory=list)


OperationResult = (
    ScanComplete
    | ConnectComplete
    | DisconnectComplete
    | ForgetComplete
    | StatusUpdate
    | SavedUpdate
)
