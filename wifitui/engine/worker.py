import logging
import queue
import threading

from wifitui.data import operation as op
from wifitui.data.event import ResultEvent
from wifitui.engine.bus import EventBus
from wifitui.exceptions import NetworkError
from wifitui.nmcli import adapter, errors

logger = logging.getLogger(__name__)

_STOP = object()


def perform(request: op.OperationRequest) -> op.OperationResult:
    """
    Run one request against the adapter and wrap the outcome in its result.
    NetworkError becomes a failed result; anything else propagates.
    """
    if isinstance(request, op.Scan):
        try:
            return op.ScanComplete(success=True, networks=adapter.scan(request.device))
        except NetworkError as e:
            return op.ScanComplete(success=False, error=e.message)

    elif isinstance(request, op.Connect):
        try:
            message = adapter.connect(request.name, request.password)
            return op.ConnectComplete(success=True, message=message, name=request.name)
        except NetworkError as e:
            return op.ConnectComplete(success=False, error=e.message, name=request.name)

    elif isinstance(request, op.Disconnect):
        try:
            message = adapter.disconnect(request.device)
            return op.DisconnectComplete(success=True, message=message)
        except NetworkError as e:
            return op.DisconnectComplete(success=False, error=e.message)

    elif isinstance(request, op.Forget):
        try:
            message = adapter.forget(request.name)
            return op.ForgetComplete(success=True, message=message)
        except NetworkError as e:
            return op.ForgetComplete(success=False, error=e.message)

    elif isinstance(request, op.RefreshStatus):
        return op.StatusUpdate(status=adapter.status(request.device))

    elif isinstance(request, op.RefreshSaved):
        try:
            return op.SavedUpdate(success=True, saved=adapter.saved_list())
        except NetworkError as e:
            return op.SavedUpdate(success=False, error=e.message)

    raise TypeError(f"unhandled request {request!r}")


def failed_result(request: op.OperationRequest, message: str) -> op.OperationResult:
    """
    The result to publish when an operation blew up unexpectedly, so the
    App still sees exactly one result for the request.
    """
    if isinstance(request, op.Scan):
        return op.ScanComplete(success=False, error=message)
    elif isinstance(request, op.Connect):
        return op.ConnectComplete(success=False, error=message, name=request.name)
    elif isinstance(request, op.Disconnect):
        return op.DisconnectComplete(success=False, error=message)
    elif isinstance(request, op.Forget):
        return op.ForgetComplete(success=False, error=message)
    elif isinstance(request, op.RefreshStatus):
        return op.StatusUpdate()
    elif isinstance(request, op.RefreshSaved):
        return op.SavedUpdate(success=False, error=message)

    raise TypeError(f"unhandled request {request!r}")


class Worker:
    """
    Executes network-control requests one at a time, in submission order,
    on a dedicated thread. Each request produces exactly one ResultEvent on
    the bus before the next request starts.
    """

    def __init__(self, bus: EventBus):
        self._bus = bus
        self._requests: queue.Queue[object] = queue.Queue()
        self._thread = threading.Thread(target=self._run, name="worker", daemon=True)

    def start(self):
        self._thread.start()

    def submit(self, request: op.OperationRequest):
        logger.debug(f"queued {type(request).__name__}")
        self._requests.put(request)

    def stop(self, timeout: float | None = None):
        self._requests.put(_STOP)
        if self._thread.is_alive():
            self._thread.join(timeout=timeout)

    def _run(self):
        logger.info("entering")
        while True:
            request = self._requests.get()
            if request is _STOP:
                break

            name = type(request).__name__
            try:
                result = perform(request)
            except Exception:
                logger.exception(f"{name} raised unexpectedly")
                result = failed_result(request, errors.UNKNOWN_ERROR)

            logger.info(f"{name} finished: {type(result).__name__}")
            self._bus.publish(ResultEvent(result))
        logger.info("exiting")
