"""
Logging sinks.

The client decides *whether* to log (via ``log_level``); a sink only decides
*where* the line goes. Any object with a ``write(level, line)`` method works.
"""

import logging
import sys
from typing import Protocol

ERROR = 1
INFO = 2
DEBUG = 3

_STDLIB_LEVELS = {
    ERROR: logging.ERROR,
    INFO: logging.INFO,
    DEBUG: logging.DEBUG,
}


class Sink(Protocol):
    def write(self, level: int, line: str) -> None: ...


class LoggerSink:
    """Forward lines to a stdlib ``logging.Logger``."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def write(self, level: int, line: str) -> None:
        self.logger.log(_STDLIB_LEVELS.get(level, logging.INFO), line)


class StreamSink(LoggerSink):
    """Default sink: timestamped lines on stderr."""

    def __init__(self, stream=None, name: str = "bri_directdebit"):
        logger = logging.getLogger(name)
        if not logger.handlers:
            handler = logging.StreamHandler(stream or sys.stderr)
            handler.setFormatter(logging.Formatter("%(asctime)s %(message)s"))
            logger.addHandler(handler)
            logger.setLevel(logging.DEBUG)
            logger.propagate = False
        super().__init__(logger)


class NullSink:
    def write(self, level: int, line: str) -> None:
        pass
