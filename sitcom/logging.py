"""Loggers and file-outcome advisories for sitcom.

Every written page and copied asset is reported as one line,
``source => target    status``. Records carry an ``outcome`` attribute
("ok" or "err") that :class:`OutcomeFormatter` shows in place of the level.
"""

from __future__ import annotations

import logging
from typing import Optional, TextIO

from .models import AssetStatus

_LOGGER_NAME = "sitcom"

_STATUS_LEVELS = {
    AssetStatus.OK: logging.INFO,
    AssetStatus.NOT_FOUND: logging.WARNING,
    AssetStatus.OUTSIDE_ROOT: logging.WARNING,
    AssetStatus.FAILED: logging.ERROR,
}


def get_logger(name: str | None = None) -> logging.Logger:
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def advise(
    logger: logging.Logger,
    status: AssetStatus,
    source: str,
    target: Optional[str] = None,
    detail: Optional[str] = None,
) -> None:
    """Log the outcome of writing or copying ``source``.

    The level follows ``status``: ok is INFO, missing or outside-root files
    are WARNING, failed copies are ERROR.
    """
    subject = source if target is None else f"{source} => {target}"
    text = status.value if detail is None else f"{status.value}: {detail}"
    outcome = "ok" if status is AssetStatus.OK else "err"
    logger.log(_STATUS_LEVELS[status], "%s    %s", subject, text, extra={"outcome": outcome})


class OutcomeFormatter(logging.Formatter):
    """Prefix advisories with their outcome and other records with their level."""

    def __init__(self) -> None:
        super().__init__("[sitcom] %(tag)s %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        record.tag = getattr(record, "outcome", None) or record.levelname.lower()
        return super().format(record)


def configure_logging(*, verbose: bool = False, stream: Optional[TextIO] = None) -> logging.Logger:
    """Send sitcom records to ``stream`` (stderr by default)."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so repeated CLI runs do not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(OutcomeFormatter())
    logger.addHandler(handler)
    return logger


__all__ = ["OutcomeFormatter", "advise", "configure_logging", "get_logger"]
