import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(padded)s %(name)s.%(funcName)s - %(message)s"


class LevelPadFormatter(logging.Formatter):
    """
    Adds a ``padded`` record attribute, e.g. "[INFO]   ", so messages line
    up whatever the level name.
    """

    LEVEL_WIDTH = len("[WARNING]")

    def format(self, record: logging.LogRecord) -> str:
        record.padded = f"[{record.levelname}]".ljust(self.LEVEL_WIDTH)
        return super().format(record)


def _file_handler(logger: logging.Logger) -> logging.FileHandler | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return handler
    return None


def configure(debug: bool, name: str, logfile: Path) -> logging.Logger:
    """
    Send the named logger to logfile only. Calling it again changes the
    level of the existing file handler instead of opening a second one.
    """
    level = logging.DEBUG if debug else logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)
    # the terminal is drawn by rich, nothing may reach stderr
    logger.propagate = False

    handler = _file_handler(logger)
    if handler is None:
        handler = logging.FileHandler(logfile, mode="a", encoding="utf-8")
        handler.setFormatter(LevelPadFormatter(LOG_FORMAT))
        logger.addHandler(handler)
    handler.setLevel(level)

    return logger
