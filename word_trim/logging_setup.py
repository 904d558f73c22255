"""Logging configuration for the CLI and the inference libraries.

WHY: faster-whisper and its dependencies log a lot of progress chatter
that drowns out the few lines an operator cares about. Engine messages
below WARNING should be hidden, while word_trim's own loggers follow
the normal --verbose switch.

HOW: configure_logging() sets up the root logger with basicConfig and
gives each engine logger its own stderr handler carrying an
EngineLogFilter. The filter remembers the level of the last
non-continuation record as instance state, so a multi-part message
(first record plus records flagged ``continuation=True``) is shown or
hidden as a whole.

RULES:
- Root: INFO by default, DEBUG with verbose
- Engine loggers: WARNING and above only (DEBUG with verbose)
- Engine loggers do not propagate to root (no duplicate lines)
- Calling configure_logging() twice does not stack handlers
"""

from __future__ import annotations

import logging
import sys

ENGINE_LOGGERS = ("faster_whisper",)

_ENGINE_HANDLER_NAME = "word_trim.engine"

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class EngineLogFilter(logging.Filter):
    """Pass engine records at or above ``min_level``, continuations included.

    RULES:
    - A record with ``continuation=True`` takes the level of the last
      record that was not a continuation
    - last_level starts at NOTSET, so a leading continuation is dropped
    """

    def __init__(self, min_level: int = logging.WARNING) -> None:
        super().__init__()
        self.min_level = min_level
        self.last_level = logging.NOTSET

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "continuation", False):
            self.last_level = record.levelno
        return self.last_level >= self.min_level


def configure_logging(verbose: bool = False) -> EngineLogFilter:
    """Configure root and engine logging; return the engine filter."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger().setLevel(level)

    engine_filter = EngineLogFilter(logging.DEBUG if verbose else logging.WARNING)
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_ENGINE_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(engine_filter)

    for name in ENGINE_LOGGERS:
        engine_logger = logging.getLogger(name)
        for existing in list(engine_logger.handlers):
            if existing.get_name() == _ENGINE_HANDLER_NAME:
                engine_logger.removeHandler(existing)
        engine_logger.addHandler(handler)
        engine_logger.setLevel(logging.DEBUG)
        engine_logger.propagate = False

    return engine_filter
