"""
Thin wrappers around nmcli(1) and iw(8).

Every function runs one or more external commands and maps their output
to records from wifitui.data.network. Failures surface as NetworkError
carrying a friendly message; best-effort lookups never raise.
"""

import logging

from wifitui.data.network import ConnectionStatus, Network, SavedNetwork
from wifitui.exceptions import NetworkError
from wifitui.nmcli import errors
from wifitui.nmcli.parser import parse_terse_output
from wifitui.util import system

logger = logging.getLogger(__name__)

NMCLI = "nmcli"
IW = "iw"


def _loggable(args: list[str]) -> str:
    masked: list[str] = []
    hide_next = False
    for arg in args:
        masked.append("********" if hide_next else arg)
        hide_next = arg == "password"
    return " ".join(masked)


def _run(args: list[str]) -> tuple[int, str, str]:
    logger.debug(f"running {_loggable(args)}")
    try:
        rc, stdout, stderr = system.run_command(args)
    except OSError as e:
        logger.error(f'failed to launch "{args[0]}": {e}')
        raise NetworkError(errors.launch_failed(args[0])) from e

    if rc != 0:
        logger.debug(f"{args[0]} exited with {rc}: {stderr}")
    return rc, stdout, stderr


def _run_checked(args: list[str]) -> str:
    rc, stdout, stderr = _run(args)
    if rc != 0:
        raise NetworkError(errors.friendly_error(stderr))
    return stdout


def _parse_signal(value: str) -> int | None:
    try:
        return int(value.strip())
    except ValueError:
        return None


def detect_device() -> str:
    """
    Return the name of the first wifi device (e.g. wlp3s0, wlan0).
    """
    _, stdout, _ = _run([NMCLI, "-t", "-f", "DEVICE,TYPE", "device"])
    for fields in parse_terse_output(stdout):
        if len(fields) >= 2 and fields[1] == "wifi":
            return fields[0]

    raise NetworkError(errors.NO_ADAPTER)


def dedupe_networks(networks: list[Network]) -> list[Network]:
    """
    Keep one row per ssid. The in-use row always wins; between rows that
    are both in use or both not, the strictly stronger signal wins. The
    result is ordered in-use first, then by signal, strongest first.
    """
    best: dict[str, Network] = {}

    for network in networks:
        existing = best.get(network.ssid)
        if existing is None:
            best[network.ssid] = network
        elif network.in_use != existing.in_use:
            if network.in_use:
                best[network.ssid] = network
        elif network.signal > existing.signal:
            best[network.ssid] = network

    # sorted() is stable, ties stay in first-seen order
    return sorted(best.values(), key=lambda n: (not n.in_use, -n.signal))


def scan(device: str) -> list[Network]:
    """
    Trigger a rescan and return the visible networks, deduplicated and sorted.
    """
    try:
        _run([NMCLI, "device", "wifi", "rescan", "ifname", device])
    except NetworkError as e:
        logger.debug(f"rescan failed, listing cached results: {e}")

    stdout = _run_checked(
        [
            NMCLI,
            "-t",
            "-f",
            "IN-USE,SSID,SIGNAL,SECURITY",
            "device",
            "wifi",
            "list",
            "ifname",
            device,
        ]
    )

    networks: list[Network] = []
    for fields in parse_terse_output(stdout):
        if len(fields) < 4:
            continue

        ssid = fields[1]
        if not ssid:
            # hidden network
            continue

        networks.append(
            Network(
                ssid=ssid,
                signal=_parse_signal(fields[2]) or 0,
                security=fields[3],
                in_use=fields[0].strip() == "*",
            )
        )

    return dedupe_networks(networks)


def _ip_address(device: str) -> str | None:
    try:
        rc, stdout, _ = _run([NMCLI, "-t", "-f", "IP4.ADDRESS", "device", "show", device])
    except NetworkError:
        return None
    if rc != 0:
        return None

    for fields in parse_terse_output(stdout):
        if len(fields) >= 2 and fields[0].startswith("IP4.ADDRESS"):
            return fields[1].split("/")[0]
    return None


def _link_speed(device: str) -> str | None:
    try:
        rc, stdout, _ = _run([IW, "dev", device, "link"])
    except NetworkError:
        return None
    if rc != 0:
        return None

    for line in stdout.splitlines():
        line = line.strip()
        if line.startswith("tx bitrate:"):
            return " ".join(line[len("tx bitrate:") :].split()[:2])
    return None


def status(device: str) -> ConnectionStatus:
    """
    Return the current connection status. A device that isn't associated
    yields an empty ConnectionStatus, and the address and link speed are
    each left unset when their lookup fails.
    """
    connection_status = ConnectionStatus()

    # The in-use row gives the broadcast SSID rather than the profile name
    try:
        _, stdout, _ = _run(
            [NMCLI, "-t", "-f", "IN-USE,SSID,SIGNAL", "device", "wifi", "list", "ifname", device]
        )
    except NetworkError:
        return connection_status

    for fields in parse_terse_output(stdout):
        if len(fields) >= 3 and fields[0].strip() == "*" and fields[1]:
            connection_status.ssid = fields[1]
            connection_status.signal = _parse_signal(fields[2])
            break

    if connection_status.connected:
        connection_status.ip = _ip_address(device)
        connection_status.speed = _link_speed(device)

    return connection_status


def saved_list() -> list[SavedNetwork]:
    """
    Return the saved wireless connection profiles.
    """
    stdout = _run_checked([NMCLI, "-t", "-f", "NAME,TYPE,ACTIVE", "connection", "show"])

    saved: list[SavedNetwork] = []
    for fields in parse_terse_output(stdout):
        if len(fields) >= 3 and "wireless" in fields[1]:
            saved.append(SavedNetwork(name=fields[0], active=fields[2] == "yes"))
    return saved


def connect(name: str, password: str | None) -> str:
    """
    Join a network. A non-empty password joins a secured network, an empty
    one joins an open network (or one nmcli already has secrets for), and
    None brings up the saved profile called name.
    """
    if password:
        args = [NMCLI, "device", "wifi", "connect", name, "password", password]
    elif password is not None:
        args = [NMCLI, "device", "wifi", "connect", name]
    else:
        args = [NMCLI, "connection", "up", name]

    _run_checked(args)
    return f"Connected to {name}"


def disconnect(device: str) -> str:
    _run_checked([NMCLI, "device", "disconnect", device])
    return "Disconnected."


def forget(name: str) -> str:
    _run_checked([NMCLI, "connection", "delete", name])
    return f"Forgot network '{name}'."
