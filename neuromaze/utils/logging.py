"""Logging setup for the server and headless runs."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s"


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Route every ``neuromaze.*`` logger to stdout, and to *log_file* if given.

    Replaces whatever handlers the root logger already had, so calling it
    twice (server restart, repeated CLI runs in one process) does not
    duplicate output.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        root.addHandler(handler)
