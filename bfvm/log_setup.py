"""
Logging setup for bfvm front ends.

Library modules only ever call logging.getLogger(__name__); handlers are
installed here, once, by whatever program embeds the machine. Console
output goes through rich on stderr, because stdout carries the Brainfuck
program's own bytes.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import DEFAULT_LOGGER_NAME, FILE_LOG_DATEFMT, FILE_LOG_FORMAT


def setup_logging(
    name: str = DEFAULT_LOGGER_NAME,
    level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    replace: bool = False,
) -> logging.Logger:
    """
    Configure and return the named logger.

    Idempotent: if the logger already has handlers it is returned as-is, so
    calling this from several entry points does not duplicate output. Pass
    replace=True to close the existing handlers and install fresh ones (a
    front end that is run more than once in the same process).

    Args:
        name: Logger name. "bfvm" covers every library module.
        level: Level of the logger itself.
        console_level: Threshold for the rich console handler.
        log_file: Optional path; when given, everything at DEBUG and above
            is also written there.
        replace: Close and drop any handlers already on the logger first.
    """
    logger = logging.getLogger(name)
    if replace:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
    if logger.handlers:
        return logger
    logger.setLevel(level)

    # ── File handler: captures everything (DEBUG+) ──
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt=FILE_LOG_DATEFMT))
        logger.addHandler(fh)

    # ── Console handler ──
    ch = RichHandler(
        console=Console(stderr=True),
        level=console_level,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    logger.addHandler(ch)

    logger.debug("Logger initialized: %s (console level %s)",
                 name, logging.getLevelName(console_level))
    if log_file is not None:
        logger.debug("Log file: %s", log_file)

    return logger
