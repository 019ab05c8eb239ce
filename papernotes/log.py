"""Logging setup for the paper-notes CLI.

Stderr carries diagnostics only; rendered notes are printed to stdout so the
output can be piped.  ``requests`` and the openai SDK log every connection
through ``urllib3`` and ``httpx``; those loggers are held at WARNING unless
``verbose`` is set.
"""

import logging
import sys
from pathlib import Path

_FMT = "%(asctime)s  %(levelname)-7s %(name)s: %(message)s"
_DATE = "%H:%M:%S"

_TRANSPORT_LOGGERS = ("urllib3", "httpx", "openai")


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    """Configure the ``papernotes`` logger for one run.

    Args:
        verbose:  DEBUG level for ``papernotes`` and full transport logging
                  (scratch paths, request sizes, HTTP connection lines).
        log_file: Optional extra ``FileHandler`` target; parents are created.

    Safe to call repeatedly; existing handlers are replaced.
    """
    logger = logging.getLogger("papernotes")
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    fmt = logging.Formatter(_FMT, datefmt=_DATE)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(fmt)
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    transport_level = logging.NOTSET if verbose else logging.WARNING
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
