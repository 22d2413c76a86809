import logging
from collections import deque
from typing import Deque, Tuple

import structlog

from puzterm.config import Settings

LOG_BUFFER: Deque[Tuple[int, str]] = deque(maxlen=5000)
LEVEL_STYLE = {
    logging.DEBUG: "dim",
    logging.INFO: "",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "bold red",
}
LOGGER_NAME = "puzterm"


class UILogHandler(logging.Handler):
    """Keeps records in memory while the terminal belongs to the UI."""

    def __init__(self, buffer: Deque[Tuple[int, str]] = LOG_BUFFER):
        super().__init__()
        self.buffer = buffer

    def emit(self, record):
        msg = self.format(record)
        self.buffer.append((record.levelno, msg))


def get_ui_log_handler(buffer: Deque[Tuple[int, str]] = LOG_BUFFER) -> UILogHandler:
    uih = UILogHandler(buffer)
    uih.setFormatter(logging.Formatter("%(asctime)s  %(levelname)s  %(message)s", "%H:%M:%S"))
    return uih


def configure_logging(settings: Settings) -> logging.Logger:
    """Route structlog through stdlib logging into the UI buffer (and a file if set)."""
    global LOG_BUFFER
    if LOG_BUFFER.maxlen != settings.log_buffer_size:
        LOG_BUFFER = deque(LOG_BUFFER, maxlen=settings.log_buffer_size)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.log_level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(get_ui_log_handler(LOG_BUFFER))
    if settings.log_file:
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s  %(levelname)s  %(message)s"))
        logger.addHandler(file_handler)
    return logger
