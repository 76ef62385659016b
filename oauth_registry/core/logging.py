"""Logging configuration for oauth-registry.

setup_logging() installs one stdout handler on the root logger:

  _ContainerFormatter (default) writes one line per record, with the
    registry context appended as key=value pairs.

  _JsonFormatter (LOG_JSON=true) writes one JSON object per line, with the
    registry context as top-level keys.

The registry context is whatever the caller passed via ``extra=``:
registration_id, client_id and field. Client secrets are never passed to
the logger; RegisteredClient.__repr__ omits the secret as well.
"""

from __future__ import annotations

import json
import logging
import sys

_CONTEXT_FIELDS = ("registration_id", "client_id", "field")


def _context(record: logging.LogRecord) -> dict[str, object]:
    return {
        key: value
        for key in _CONTEXT_FIELDS
        if (value := getattr(record, key, None)) is not None
    }


class _ContainerFormatter(logging.Formatter):
    """Single-line formatter for container stdout.

    WARNING and above get [filename:lineno] so a rejected registration can
    be traced to the check that raised it.
    """

    _BASE_FMT = "%(asctime)s %(levelname)-8s %(name)s  %(message)s"
    _LOC_SUFFIX = "  [%(filename)s:%(lineno)d]"

    def __init__(self) -> None:
        super().__init__(self._BASE_FMT, datefmt="%Y-%m-%dT%H:%M:%S%z")
        self._warning_style = logging.PercentStyle(self._BASE_FMT + self._LOC_SUFFIX)
        self._info_style = logging.PercentStyle(self._BASE_FMT)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        base = super().formatTime(record, datefmt)
        # Milliseconds go before the +0000 offset
        return f"{base[:-5]}.{int(record.msecs):03d}{base[-5:]}"

    def formatMessage(self, record: logging.LogRecord) -> str:
        style = (
            self._warning_style
            if record.levelno >= logging.WARNING
            else self._info_style
        )
        line = style.format(record)
        context = _context(record)
        if context:
            line += "  " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


class _JsonFormatter(logging.Formatter):
    """JSON formatter for machine-parseable log output."""

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S%z")

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, object] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update(_context(record))

        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level_name: str, *, json_format: bool = False) -> None:
    """Configure the root logger.

    Args:
        level_name: Log level string (debug/info/warning/error)
        json_format: If True, emit JSON lines. If False, human-readable.
                     Controlled by LOG_JSON in Settings.
    """
    level = getattr(logging, level_name.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_JsonFormatter() if json_format else _ContainerFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    # SQLAlchemy echoes every statement at INFO; keep it out of DEBUG runs
    for name in ("sqlalchemy.engine", "sqlalchemy.pool", "alembic"):
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
