"""Query assembly from the prompt argument and piped standard input."""

from __future__ import annotations

import logging
import os
import stat
import sys
from typing import IO, Any

from pipeask._exceptions import InputError

logger = logging.getLogger(__name__)


def _is_redirected(stream: IO[Any]) -> bool:
    # Terminals (and /dev/null) are character devices; pipes and files are not.
    try:
        mode = os.fstat(stream.fileno()).st_mode
    except (OSError, ValueError) as exc:
        raise InputError(f"Error checking stdin: {exc}") from exc
    return not stat.S_ISCHR(mode)


def read_input(stream: IO[Any] | None = None) -> str:
    """Return everything piped into ``stream``, or ``""`` for a terminal.

    ``stream`` defaults to ``sys.stdin``. The whole stream is read into memory.
    """
    if stream is None:
        stream = sys.stdin
    if stream is None:
        return ""
    if not _is_redirected(stream):
        return ""

    buffer = getattr(stream, "buffer", None)
    try:
        if buffer is not None:
            data = buffer.read().decode("utf-8", errors="replace")
        else:
            data = stream.read()
    except (OSError, ValueError) as exc:
        raise InputError(f"Error reading input: {exc}") from exc
    logger.debug("read %d characters from stdin", len(data))
    return data


def build_query(prompt: str, piped: str) -> str:
    """Join the prompt and piped text as ``"<prompt>: <piped>"``."""
    if not piped:
        return prompt
    return f"{prompt}: {piped}"
