"""
Turns App state into a rich renderable.

Nothing here mutates the App; render() can be called with any App and a
screen height and the result printed to any Console, which is how the
tests exercise it.
"""

from rich.align import Align
from rich.console import Group, RenderableType
from rich.layout import Layout
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from wifitui.app import (
    App,
    BackgroundStatus,
    ConfirmDisconnect,
    ConfirmForget,
    Message,
    Modal,
    PasswordInput,
    View,
)
from wifitui.ui import glyphs

SSID_WIDTH = 28
MODAL_WIDTH = 50
# status (2) + help (2) + panel borders (2) + tab row (1)
CHROME_HEIGHT = 7

SELECTED_STYLE = "on grey19"
KEY_STYLE = "grey66"
HINT_STYLE = "bright_black"

BACKGROUND_LABELS = {
    BackgroundStatus.SCANNING: "Scanning...",
    BackgroundStatus.CONNECTING: "Connecting...",
    BackgroundStatus.DISCONNECTING: "Disconnecting...",
    BackgroundStatus.FORGETTING: "Forgetting...",
}


def signal_bars(signal: int) -> str:
    if signal >= 80:
        return glyphs.signal_bars_4
    elif signal >= 60:
        return glyphs.signal_bars_3
    elif signal >= 40:
        return glyphs.signal_bars_2
    elif signal >= 20:
        return glyphs.signal_bars_1
    return glyphs.signal_bars_0


def signal_color(signal: int) -> str:
    if signal >= 80:
        return "green"
    elif signal >= 50:
        return "yellow"
    return "red"


def simplify_security(security: str) -> str:
    """
    nmcli lists every supported standard ("WPA1 WPA2", "WPA2 WPA3"); show
    the most relevant one.
    """
    if "WPA3" in security and "WPA2" in security:
        return "WPA3"
    elif "802.1X" in security:
        return "Enterprise"
    return security


def truncate_pad(text: str, width: int) -> str:
    if len(text) > width:
        text = text[: width - 1] + glyphs.ellipsis
    return f"{text:<{width}}"


def visible_window(index: int, length: int, rows: int) -> tuple[int, int]:
    """
    Return the [start, end) slice of a list that keeps index on screen.
    """
    rows = max(rows, 1)
    if length <= rows:
        return 0, length
    start = min(max(index - rows + 1, 0), length - rows)
    return start, start + rows


def background_text(app: App) -> str | None:
    label = BACKGROUND_LABELS.get(app.background)
    if label is None:
        return None
    return f"{glyphs.spinner[app.spinner_frame % len(glyphs.spinner)]} {label}"


def help_line(items: list[tuple[str, str]]) -> Text:
    text = Text(justify="center")
    for i, (key, description) in enumerate(items):
        if i > 0:
            text.append("  ")
        text.append(f"[{key}]", style=KEY_STYLE)
        text.append(f" {description}", style=HINT_STYLE)
    return text


def status_line(app: App) -> Text:
    text = Text()
    status = app.status

    if status.ssid is not None:
        text.append(f" Connected: {status.ssid}", style="bold green")
        if status.signal is not None:
            text.append(glyphs.separator)
            text.append(
                f"Signal: {signal_bars(status.signal)} {status.signal}%",
                style=signal_color(status.signal),
            )
        if status.ip is not None:
            text.append(glyphs.separator)
            text.append(f"IP: {status.ip}", style="cyan")
        if status.speed is not None:
            text.append(glyphs.separator)
            text.append(f"Speed: {status.speed}", style="cyan")
    else:
        text.append(" Not connected", style=HINT_STYLE)

    busy = background_text(app)
    if busy:
        text.append(glyphs.separator)
        text.append(busy, style="yellow")

    return text


def tabs(app: App) -> Text:
    text = Text()
    labels = [
        (View.AVAILABLE, f" Available ({len(app.networks)}) "),
        (View.SAVED, f" Saved ({len(app.saved)}) "),
    ]
    for i, (view, label) in enumerate(labels):
        if i > 0:
            text.append(glyphs.tab_divider, style=HINT_STYLE)
        if view is app.view:
            text.append(label, style="bold underline white")
        else:
            text.append(label, style=HINT_STYLE)
    return text


def available_rows(app: App, rows: int) -> RenderableType:
    if not app.networks:
        if app.background is BackgroundStatus.SCANNING:
            message = "Scanning for networks..."
        else:
            message = "No networks found. Press R to scan."
        return Text(message, style=HINT_STYLE, justify="center")

    lines: list[Text] = []
    start, end = visible_window(app.network_index, len(app.networks), rows)
    for i in range(start, end):
        network = app.networks[i]
        selected = i == app.network_index

        line = Text(style=SELECTED_STYLE if selected else "")
        line.append(glyphs.in_use_marker if network.in_use else "  ", style="green")
        line.append(
            truncate_pad(network.ssid, SSID_WIDTH),
            style="bold white" if selected else "white",
        )
        line.append(
            f" {signal_bars(network.signal)}  {network.signal:>3}%",
            style=signal_color(network.signal),
        )
        if network.is_open:
            line.append("  Open", style="yellow")
        else:
            line.append(
                f"  {simplify_security(network.security)}",
                style="grey70" if selected else HINT_STYLE,
            )
        lines.append(line)

    return Group(*lines)


def saved_rows(app: App, rows: int) -> RenderableType:
    if not app.saved:
        return Text("No saved networks.", style=HINT_STYLE, justify="center")

    lines: list[Text] = []
    start, end = visible_window(app.saved_index, len(app.saved), rows)
    for i in range(start, end):
        saved = app.saved[i]
        selected = i == app.saved_index

        line = Text(style=SELECTED_STYLE if selected else "")
        line.append(
            f"  {truncate_pad(saved.name, SSID_WIDTH)}",
            style="bold white" if selected else "white",
        )
        if saved.active:
            line.append(" (connected)", style="green")
        else:
            line.append(" (saved)", style="grey70" if selected else HINT_STYLE)
        lines.append(line)

    return Group(*lines)


def help_bar(app: App) -> Text:
    modal = app.modal
    if isinstance(modal, PasswordInput):
        return help_line([("Enter", "Submit"), ("Esc", "Cancel"), ("Tab", "Show/Hide")])
    elif isinstance(modal, (ConfirmDisconnect, ConfirmForget)):
        return help_line([("Y", "Confirm"), ("N", "Cancel")])
    elif isinstance(modal, Message):
        return help_line([("Any key", "Dismiss")])

    if app.view is View.AVAILABLE:
        return help_line(
            [
                ("Tab", "Switch view"),
                ("Enter", "Connect"),
                ("D", "Disconnect"),
                ("R", "Refresh"),
                ("Q", "Quit"),
                ("↑↓", "Navigate"),
            ]
        )
    return help_line(
        [
            ("Tab", "Switch view"),
            ("Enter", "Reconnect"),
            ("F", "Forget"),
            ("D", "Disconnect"),
            ("R", "Refresh"),
            ("Q", "Quit"),
            ("↑↓", "Navigate"),
        ]
    )


def message_color(text: str) -> str:
    if text.startswith(("Connected", "Disconnected", "Forgot")):
        return "green"
    elif text.startswith("Already"):
        return "yellow"
    return "red"


def modal_panel(app: App, modal: Modal) -> Panel:
    if isinstance(modal, PasswordInput):
        if app.password_visible:
            shown = app.password
        else:
            shown = glyphs.password_mask * len(app.password)
        field = Text()
        field.append(f" {shown} ", style="white on bright_black")
        field.append(glyphs.cursor_block, style="white")
        body = Group(
            Text("Password:", style="white"),
            field,
            Text(),
            help_line([("Tab", "show/hide"), ("Enter", "submit"), ("Esc", "cancel")]),
        )
        return Panel(
            body,
            title=f" Connect to {app.password_target} ",
            border_style="yellow",
            width=MODAL_WIDTH,
        )

    elif isinstance(modal, ConfirmDisconnect):
        ssid = app.status.ssid or "current network"
        body = Group(
            Text(f"Disconnect from {ssid}?", style="white", justify="center"),
            Text(),
            help_line([("Y", "Yes"), ("N", "No")]),
        )
        return Panel(body, title=" Disconnect ", border_style="yellow", width=MODAL_WIDTH)

    elif isinstance(modal, ConfirmForget):
        body = Group(
            Text(
                f"Forget '{modal.name}'?\nYou'll need the password to reconnect.",
                style="white",
                justify="center",
            ),
            Text(),
            help_line([("Y", "Yes"), ("N", "No")]),
        )
        return Panel(body, title=" Forget Network ", border_style="red", width=MODAL_WIDTH)

    elif isinstance(modal, Message):
        body = Group(
            Text(modal.text, style="white", justify="center"),
            Text(),
            Text("[Any key] Dismiss", style=HINT_STYLE, justify="center"),
        )
        return Panel(body, border_style=message_color(modal.text), width=MODAL_WIDTH)

    raise TypeError(f"unhandled modal {modal!r}")


def render(app: App, height: int = 24) -> Layout:
    """
    Build one frame for a screen of the given height.
    """
    rows = height - CHROME_HEIGHT

    if app.modal is not None:
        content: RenderableType = Align.center(
            modal_panel(app, app.modal), vertical="middle"
        )
    elif app.view is View.AVAILABLE:
        content = available_rows(app, rows)
    else:
        content = saved_rows(app, rows)

    main = Panel(Group(tabs(app), content), padding=(0, 1))
    footer = Group(Rule(style=HINT_STYLE), help_bar(app))

    layout = Layout()
    layout.split_column(
        Layout(status_line(app), name="status", size=2),
        Layout(main, name="main", ratio=1),
        Layout(footer, name="help", size=2),
    )
    return layout
