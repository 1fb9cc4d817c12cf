"""Logging setup for the ``chapter_ledger`` package.

Every module logs through ``get_logger(__name__)`` and never attaches
handlers itself. The CLI root callback calls ``configure_logging`` once; until
then the package logger carries only a ``NullHandler`` so importing the
library stays silent.

Environment
-----------
``LEDGER_LOG_LEVEL``
    Level name (``DEBUG``, ``INFO``, ...) or number. Defaults to ``INFO``.
``LEDGER_LOG_FORMAT``
    ``logging.Formatter`` format string. The importer's per-phase DEBUG lines
    read best with the default, which includes the logger name.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "chapter_ledger"
_LEVEL_ENV = "LEDGER_LOG_LEVEL"
_FORMAT_ENV = "LEDGER_LOG_FORMAT"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_CONFIGURED = False


def resolve_level(level: int | str | None = None) -> int:
    """Turn ``level`` (or ``LEDGER_LOG_LEVEL`` when ``None``) into a number.

    Unknown names fall back to ``INFO`` rather than failing a command.
    """

    if level is None:
        level = os.getenv(_LEVEL_ENV) or logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelNamesMapping().get(name)
    return numeric if numeric is not None else logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach one ``StreamHandler`` to the package logger, once per process.

    ``stream`` defaults to the ``sys.stderr`` in effect at call time so a
    redirected stderr (e.g. a test runner) receives the output.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in [h for h in pkg_logger.handlers if isinstance(h, logging.NullHandler)]:
        pkg_logger.removeHandler(h)

    resolved = resolve_level(level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or os.getenv(_FORMAT_ENV) or _DEFAULT_FORMAT))

    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(resolved)
    pkg_logger.propagate = False
    _CONFIGURED = True


def reset_logging() -> None:
    """Drop package handlers so the next ``configure_logging`` starts fresh."""

    global _CONFIGURED
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(pkg_logger.handlers):
        pkg_logger.removeHandler(h)
    pkg_logger.setLevel(logging.NOTSET)
    pkg_logger.propagate = True
    _CONFIGURED = False


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "reset_logging", "resolve_level"]
