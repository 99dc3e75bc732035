"""Logging setup shared by the engine and the server."""

from __future__ import annotations

import logging

from navtree.config import NAVTREE_LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _ExtraFormatter(logging.Formatter):
    """Append ``extra=`` fields to the rendered message."""

    _RESERVED = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {k: v for k, v in record.__dict__.items() if k not in self._RESERVED}
        if not extras:
            return base
        rendered = " ".join(f"{key}={value!r}" for key, value in sorted(extras.items()))
        return f"{base} [{rendered}]"


def configure_logging(level: str | int | None = None) -> None:
    """Install a stream handler on the ``navtree`` and ``server`` loggers.

    Args:
        level: Log level name or number. Defaults to ``NAVTREE_LOG_LEVEL``.
    """
    resolved = level if level is not None else NAVTREE_LOG_LEVEL
    handler = logging.StreamHandler()
    handler.setFormatter(_ExtraFormatter(_FORMAT))
    for name in ("navtree", "server"):
        logger = logging.getLogger(name)
        logger.handlers = [handler]
        logger.setLevel(resolved)
        logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""
    return logging.getLogger(name)
