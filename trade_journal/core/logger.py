"""
Logging for the trade_journal package tree. Console goes to stderr so that
CLI reports on stdout stay clean; a file handler is added when configured.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "trade_journal"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    log_dir: Optional[Path] = None,
    log_file: Optional[str] = None,
    console: bool = True,
) -> logging.Logger:
    """
    Configure the package logger. Handlers are replaced on every call and the
    logger does not propagate, so repeated CLI runs in one process never double-log.
    With console=False and no file, records are dropped via a NullHandler.
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    pkg = logging.getLogger(PACKAGE_LOGGER)
    pkg.setLevel(log_level)
    for handler in list(pkg.handlers):
        pkg.removeHandler(handler)
        handler.close()
    pkg.propagate = False

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if console:
        stream = logging.StreamHandler(sys.stderr)
        stream.setFormatter(formatter)
        pkg.addHandler(stream)

    if log_dir and log_file:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / log_file, encoding="utf-8")
        fh.setFormatter(formatter)
        pkg.addHandler(fh)

    if not pkg.handlers:
        pkg.addHandler(logging.NullHandler())
    return pkg
