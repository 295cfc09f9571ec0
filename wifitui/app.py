"""
Application state and the reducer that drives it.

The App is owned by the render loop thread and is never touched by the
multiplexer or worker threads: they publish events, the render loop hands
them to App.handle_event one at a time, and the App sends new requests to
the worker through the submit callable it was built with.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from wifitui.data import operation as op
from wifitui.data.event import Event, Key, KeyEvent, ResultEvent, TickEvent
from wifitui.data.network import ConnectionStatus, Network, SavedNetwork
from wifitui.nmcli import errors

logger = logging.getLogger(__name__)

# 30s at the default 250ms tick
AUTO_REFRESH_TICKS = 120
SPINNER_FRAMES = 4
ALREADY_CONNECTED = "Already connected to this network."


class View(Enum):
    AVAILABLE = "available"
    SAVED = "saved"


class BackgroundStatus(Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    CONNECTING = "connecting"
    DISCONNECTING = "disconnecting"
    FORGETTING = "forgetting"


@dataclass(frozen=True)
class PasswordInput:
    pass


@dataclass(frozen=True)
class ConfirmDisconnect:
    pass


@dataclass(frozen=True)
class ConfirmForget:
    name: str


@dataclass(frozen=True)
class Message:
    text: str


Modal = PasswordInput | ConfirmDisconnect | ConfirmForget | Message

# modals whose answer dispatches an operation
PROMPTS = (PasswordInput, ConfirmDisconnect, ConfirmForget)


def clamp_index(index: int, length: int) -> int:
    if length == 0:
        return 0
    return min(index, length - 1)


class App:
    def __init__(
        self,
        device: str,
        submit: Callable[[op.OperationRequest], None],
        refresh_ticks: int = AUTO_REFRESH_TICKS,
    ):
        if refresh_ticks <= 0:
            raise ValueError("refresh_ticks must be positive")

        self.device = device
        self.refresh_ticks = refresh_ticks
        self._submit = submit

        self.running = True
        self.view = View.AVAILABLE
        self.modal: Modal | None = None
        self.background = BackgroundStatus.IDLE

        self.networks: list[Network] = []
        self.saved: list[SavedNetwork] = []
        self.status = ConnectionStatus()

        self.network_index = 0
        self.saved_index = 0

        self.password = ""
        self.password_visible = False
        self.password_target = ""

        # starts at the threshold so the first tick scans right away
        self.ticks_since_scan = refresh_ticks
        self.spinner_frame = 0

    @property
    def idle(self) -> bool:
        return self.background is BackgroundStatus.IDLE

    def selected_network(self) -> Network | None:
        if self.network_index < len(self.networks):
            return self.networks[self.network_index]
        return None

    def selected_saved(self) -> SavedNetwork | None:
        if self.saved_index < len(self.saved):
            return self.saved[self.saved_index]
        return None

    def _dispatch(self, background: BackgroundStatus, *requests: op.OperationRequest):
        self.background = background
        for request in requests:
            logger.info(f"dispatching {type(request).__name__}")
            self._submit(request)

    def handle_event(self, event: Event):
        if isinstance(event, KeyEvent):
            self.handle_key(event.key)
        elif isinstance(event, TickEvent):
            self.handle_tick()
        elif isinstance(event, ResultEvent):
            self.handle_result(event.result)
        else:
            raise TypeError(f"unhandled event {event!r}")

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def handle_key(self, key: Key):
        if key.ctrl and key.code == "c":
            self.running = False
            return

        if self.modal is not None:
            self._handle_modal_key(key, self.modal)
            return

        if key.code in ("q", "Q") and not key.ctrl:
            self.running = False
        elif key.code in ("tab", "backtab"):
            self.view = View.SAVED if self.view is View.AVAILABLE else View.AVAILABLE
        elif key.code in ("r", "R") and not key.ctrl:
            if self.idle:
                self.start_refresh()
        elif self.view is View.AVAILABLE:
            self._handle_available_key(key)
        else:
            self._handle_saved_key(key)

    def _handle_available_key(self, key: Key):
        if key.code in ("up", "k"):
            self.network_index = max(self.network_index - 1, 0)
        elif key.code in ("down", "j"):
            self.network_index = clamp_index(self.network_index + 1, len(self.networks))
        elif key.code == "enter":
            network = self.selected_network()
            if not self.idle or network is None:
                return
            if network.in_use:
                self.modal = Message(ALREADY_CONNECTED)
                return
            # nmcli reuses stored secrets if it has any; a password prompt
            # only opens when the attempt says one is needed
            self._dispatch(BackgroundStatus.CONNECTING, op.Connect(network.ssid, ""))
        elif key.code in ("d", "D"):
            self._request_disconnect()

    def _handle_saved_key(self, key: Key):
        if key.code in ("up", "k"):
            self.saved_index = max(self.saved_index - 1, 0)
        elif key.code in ("down", "j"):
            self.saved_index = clamp_index(self.saved_index + 1, len(self.saved))
        elif key.code == "enter":
            saved = self.selected_saved()
            if not self.idle or saved is None:
                return
            if saved.active:
                self.modal = Message(ALREADY_CONNECTED)
                return
            self._dispatch(BackgroundStatus.CONNECTING, op.Connect(saved.name, None))
        elif key.code in ("f", "F"):
            saved = self.selected_saved()
            if self.idle and saved is not None:
                self.modal = ConfirmForget(saved.name)
        elif key.code in ("d", "D"):
            self._request_disconnect()

    def _request_disconnect(self):
        if self.idle and self.status.connected:
            self.modal = ConfirmDisconnect()

    def _handle_modal_key(self, key: Key, modal: Modal):
        if isinstance(modal, PasswordInput):
            if key.code == "esc":
                self.modal = None
                self.password = ""
            elif key.code == "enter":
                if not self.idle:
                    return
                self.modal = None
                self._dispatch(
                    BackgroundStatus.CONNECTING,
                    op.Connect(self.password_target, self.password),
                )
            elif key.code == "backspace":
                self.password = self.password[:-1]
            elif key.code == "tab":
                self.password_visible = not self.password_visible
            elif key.is_char:
                self.password += key.code

        elif isinstance(modal, ConfirmDisconnect):
            self.modal = None
            if key.code in ("y", "Y") and not key.ctrl and self.idle:
                self._dispatch(BackgroundStatus.DISCONNECTING, op.Disconnect(self.device))

        elif isinstance(modal, ConfirmForget):
            self.modal = None
            if key.code in ("y", "Y") and not key.ctrl and self.idle:
                self._dispatch(BackgroundStatus.FORGETTING, op.Forget(modal.name))

        elif isinstance(modal, Message):
            self.modal = None

        else:
            raise TypeError(f"unhandled modal {modal!r}")

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------

    def handle_tick(self):
        self.spinner_frame = (self.spinner_frame + 1) % SPINNER_FRAMES

        self.ticks_since_scan += 1
        if isinstance(self.modal, PROMPTS):
            # an open prompt holds the refresh until it is answered
            return
        if self.ticks_since_scan >= self.refresh_ticks and self.idle:
            self.start_refresh()

    def start_refresh(self):
        self.ticks_since_scan = 0
        self._dispatch(
            BackgroundStatus.SCANNING,
            op.Scan(self.device),
            op.RefreshStatus(self.device),
            op.RefreshSaved(),
        )

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def _finish(self, message: str, success: bool):
        self.background = BackgroundStatus.IDLE
        self.modal = Message(message)
        if success:
            # refresh on the next tick instead of waiting a full interval
            self.ticks_since_scan = self.refresh_ticks

    def handle_result(self, result: op.OperationResult):
        if isinstance(result, op.ScanComplete):
            self.background = BackgroundStatus.IDLE
            if result.success:
                self.networks = result.networks
                self.network_index = clamp_index(self.network_index, len(self.networks))
            else:
                self.modal = Message(result.error or errors.UNKNOWN_ERROR)

        elif isinstance(result, op.ConnectComplete):
            if result.success:
                self._finish(result.message or f"Connected to {result.name}", True)
                return

            error = result.error or errors.UNKNOWN_ERROR
            if errors.needs_password(error):
                self.background = BackgroundStatus.IDLE
                self.password = ""
                self.password_visible = False
                self.password_target = result.name
                self.modal = PasswordInput()
            else:
                self._finish(error, False)

        elif isinstance(result, (op.DisconnectComplete, op.ForgetComplete)):
            if result.success:
                self._finish(result.message or "", True)
            else:
                self._finish(result.error or errors.UNKNOWN_ERROR, False)

        elif isinstance(result, op.StatusUpdate):
            # background status is left to the scan result
            self.status = result.status

        elif isinstance(result, op.SavedUpdate):
            if result.success:
                self.saved = result.saved
                self.saved_index = clamp_index(self.saved_index, len(self.saved))
            else:
                logger.debug(f"keeping stale saved list: {result.error}")

        else:
            raise TypeError(f"unhandled result {result!r}")
