"""
Logging helpers for sigcompare.

Library modules only call get_logger(__name__). Scripts and examples may call
configure_logging() to see the output; sigcompare never configures the root logger.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "sigcompare"
DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Attach a stderr handler to the sigcompare logger.

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG"). Defaults to the SIGCOMPARE_LOG_LEVEL env var,
        or "INFO" if unset.
    fmt, datefmt:
        Formatter settings. Default to DEFAULT_FMT / DEFAULT_DATEFMT.
    force:
        Replace existing handlers instead of keeping a previously added one.
    """
    if level is None:
        level = os.environ.get("SIGCOMPARE_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    formatter = logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return logging.getLogger(name), or the package logger if name is None."""
    return logging.getLogger(name or LOGGER_NAME)
