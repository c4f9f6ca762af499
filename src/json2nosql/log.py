"""Logging setup for the json2nosql command-line tool."""

from __future__ import annotations

import logging
import sys


class ContextFormatter(logging.Formatter):
    """Formatter that tolerates records without backend/structure context."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "backend"):
            record.backend = "-"
        if not hasattr(record, "structure"):
            record.structure = "-"
        return super().format(record)


def configure_logging(level: int | str = logging.WARNING) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ContextFormatter(
        "%(asctime)s %(levelname)s %(name)s "
        "[backend=%(backend)s structure=%(structure)s] - %(message)s"
    ))
    logging.basicConfig(
        level=level,
        handlers=[handler],
        force=True,
    )
