import logging
import threading
import time
from typing import Callable

from wifitui.data.event import KeyEvent, TickEvent
from wifitui.engine.bus import EventBus
from wifitui.engine.keys import KeySource

logger = logging.getLogger(__name__)


class Multiplexer:
    """
    Merges keyboard input and a fixed-rate timer onto the event bus.

    The thread waits for input for at most the time left until the next tick
    deadline. Keys are published as soon as they arrive and the wait is
    retried with whatever time remains, so typing never delays or skips a
    tick.
    """

    def __init__(
        self,
        bus: EventBus,
        keys: KeySource,
        tick_interval: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        if tick_interval <= 0:
            raise ValueError("tick_interval must be positive")

        self._bus = bus
        self._keys = keys
        self._tick_interval = tick_interval
        self._clock = clock
        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self.run, name="multiplexer", daemon=True)

    def start(self):
        self._thread.start()

    def stop(self, timeout: float | None = None):
        self._stop_event.set()
        if self._thread.is_alive():
            self._thread.join(timeout=timeout)

    def run(self):
        logger.info(f"entering with tick_interval={self._tick_interval}")
        deadline = self._clock() + self._tick_interval

        while not self._stop_event.is_set():
            remaining = max(deadline - self._clock(), 0.0)

            for key in self._keys.read_keys(remaining):
                self._bus.publish(KeyEvent(key))

            now = self._clock()
            if now >= deadline:
                self._bus.publish(TickEvent())
                deadline += self._tick_interval
                if deadline <= now:
                    # fell a whole interval behind; don't burst ticks to catch up
                    deadline = now + self._tick_interval

        logger.info("exiting")
