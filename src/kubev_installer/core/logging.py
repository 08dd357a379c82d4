from __future__ import annotations

import logging
import sys
import time
from typing import Optional, TextIO

# Timestamp format used on every line, always UTC.
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class InstallerFormatter(logging.Formatter):
    """Render records as ``[timestamp] message``.

    CRITICAL records are the fatal ones and get a ``FATAL`` marker so the
    last line before a failing exit names the cause.
    """

    converter = time.gmtime

    def __init__(self) -> None:
        super().__init__(fmt="[%(asctime)s] %(message)s", datefmt=TIMESTAMP_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        if record.levelno >= logging.CRITICAL:
            prefix = f"[{self.formatTime(record, self.datefmt)}] "
            line = f"{prefix}FATAL  {line[len(prefix):]}"
        return line


def configure_logging(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure root logging level based on CLI flags.

    Precedence:
    - quiet → ERROR
    - debug → DEBUG
    - verbose / default → INFO

    Output always goes to stderr unless another stream is given.
    """

    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(InstallerFormatter())
    logging.basicConfig(level=level, handlers=[handler], force=True)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger."""

    return logging.getLogger(name if name is not None else __name__)
