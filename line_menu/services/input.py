"""Candidate ingestion from piped input."""

from __future__ import annotations

import logging
import os
from typing import TextIO

from ..models.exceptions import InputError, NoInputError

logger = logging.getLogger(__name__)

NO_INPUT_SUGGESTION = "pipe some lines into line-menu, see 'line-menu --help'"


def parse_candidates(text: str) -> list[str]:
    """Split text into candidate lines, dropping empty ones."""
    return [line for line in text.splitlines() if line]


def read_candidates(stream: TextIO) -> list[str]:
    """Read all candidates from stream.

    Raises:
        NoInputError: stream is an interactive terminal or holds no lines
        InputError: stream does not decode as text
    """
    if stream.isatty():
        raise NoInputError("No input provided", NO_INPUT_SUGGESTION)

    try:
        text = stream.read()
    except UnicodeDecodeError as e:
        raise InputError(
            f"Input is not valid {e.encoding} text: {e.reason} at byte {e.start}",
            "convert the input to UTF-8 first, e.g. with iconv",
        ) from e

    candidates = parse_candidates(text)
    if not candidates:
        raise NoInputError("No input provided", NO_INPUT_SUGGESTION)

    logger.debug(f"Read {len(candidates)} candidates")
    return candidates


def reattach_terminal(tty_path: str = "/dev/tty") -> None:
    """Point fd 0 at the controlling terminal once stdin has been consumed.

    The picker reads keys from stdin, which is the exhausted pipe until
    this runs.

    Raises:
        InputError: no controlling terminal is available
    """
    if os.name != "posix":
        return
    try:
        fd = os.open(tty_path, os.O_RDONLY)
    except OSError as e:
        raise InputError(
            f"Cannot open terminal {tty_path}: {e}",
            "use --filter for non-interactive ranking",
        ) from e
    try:
        os.dup2(fd, 0)
    finally:
        os.close(fd)
    logger.debug(f"Reattached stdin to {tty_path}")
