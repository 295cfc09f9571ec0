from dataclasses import dataclass


@dataclass
class Network:
    ssid: str = ""
    signal: int = 0
    security: str = ""
    in_use: bool = False

    @property
    def is_open(self) -> bool:
        return self.security in ("", "--")


@dataclass
class SavedNetwork:
    name: str = ""
    active: bool = False


@dataclass
class ConnectionStatus:
    ssid: str | None = None
    signal: int | None = None
    ip: str | None = None
    speed: str | None = None

    @property
    def connected(self) -> bool:
        return self.ssid is not None
