"""Process-wide logging setup shared by the API and the CLI."""

from __future__ import annotations

import logging
import sys

from despesas.core.settings import get_settings

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_HANDLER_NAME = "despesas-stdout"


def configure_logging(level: str | None = None) -> None:
    """Route log records to stdout at the configured level.

    Safe to call more than once: the stdout handler is installed only once.
    """

    root = logging.getLogger()
    root.setLevel((level or get_settings().log_level).upper())
    if any(handler.get_name() == _HANDLER_NAME for handler in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(handler)
