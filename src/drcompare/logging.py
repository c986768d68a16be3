"""Logging Utilities
====================

Root logging setup shared by the CLI and library callers.

Contents
--------
Classes
^^^^^^^
* :class:`JsonFormatter` – One JSON object per log line.

Functions
^^^^^^^^^
* :func:`configure_logging` – Replace root handlers (plain or structured).
* :func:`configure_logging_from_config` – Apply a ``logging`` config section.
* :func:`get_logging_config` – Introspect the active root configuration.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

DEFAULT_FORMAT = "%(asctime)s %(name)-28s %(levelname)-8s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """Serialize log records as single-line JSON objects.

    Fields: ``time``, ``name``, ``level``, ``message`` and ``exception`` when
    the record carries exception info.
    """

    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - simple serializer
        payload = {
            "time": self.formatTime(record, self.datefmt),
            "name": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _make_formatter(fmt: Optional[str], structured: bool) -> logging.Formatter:
    if structured:
        return JsonFormatter(datefmt=DATE_FORMAT)
    return logging.Formatter(fmt or DEFAULT_FORMAT, datefmt=DATE_FORMAT)


def configure_logging(
    level: str = "INFO",
    fmt: Optional[str] = None,
    file: Optional[str] = None,
    structured: bool = False,
) -> None:
    """Configure the root logger.

    Existing root handlers are removed, a stderr handler is installed and,
    when ``file`` is given, a file handler with the same formatter.

    Parameters
    ----------
    level : str, default="INFO"
        Logging level name. Unknown names fall back to ``INFO``.
    fmt : str, optional
        Format string for plain logs. Ignored when ``structured=True``.
    file : str, optional
        Log file path; parent directories are created.
    structured : bool, default=False
        Use :class:`JsonFormatter` for every handler.
    """
    lvl = getattr(logging, str(level).upper(), None)
    if not isinstance(lvl, int):
        lvl = logging.INFO

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    handler: logging.Handler = logging.StreamHandler()
    handler.setFormatter(_make_formatter(fmt, structured))
    handler.setLevel(lvl)
    root.addHandler(handler)
    root.setLevel(lvl)

    if file:
        fpath = Path(file)
        fpath.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(fpath)
        fh.setFormatter(_make_formatter(fmt, structured))
        fh.setLevel(lvl)
        root.addHandler(fh)

    # matplotlib font discovery is noisy at DEBUG
    logging.getLogger("matplotlib").setLevel(max(lvl, logging.WARNING))


def configure_logging_from_config(section: Any) -> None:
    """Apply a ``logging`` section (``level``, ``file``, ``structured``)."""
    configure_logging(
        level=section.level,
        file=section.file,
        structured=bool(section.structured),
    )


def get_logging_config() -> dict:
    """Return the active root logging configuration.

    Returns
    -------
    dict
        Mapping with keys ``level`` (str), ``file`` (str or None) and
        ``structured`` (bool).
    """
    root = logging.getLogger()
    file_path = None
    structured = False
    for h in root.handlers:
        if isinstance(h, logging.FileHandler):
            file_path = getattr(h, "baseFilename", None)
        if isinstance(h.formatter, JsonFormatter):
            structured = True
    return {"level": logging.getLevelName(root.level), "file": file_path, "structured": structured}


__all__ = ["JsonFormatter", "configure_logging", "configure_logging_from_config", "get_logging_config"]
