import queue

from wifitui.data.event import Event


class EventBus:
    """
    The single ordered channel between the producer threads (multiplexer and
    worker) and the render loop. Any thread may publish; only the render
    loop consumes.
    """

    def __init__(self):
        self._queue: queue.Queue[Event] = queue.Queue()

    def publish(self, event: Event):
        self._queue.put(event)

    def try_next(self) -> Event | None:
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def next(self, timeout: float | None = None) -> Event | None:
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def empty(self) -> bool:
        return self._queue.empty()
