# src/streamavg/app/services/samples.py
from __future__ import annotations

import logging
import re
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterable, Iterator, Optional

_log = logging.getLogger("streamavg.samples")

# Numeric prefix of a token: decimal, optional exponent, inf/infinity/nan.
_NUMBER = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def parse_samples(lines: Iterable[str]) -> Iterator[float]:
    """
    Lazily turn whitespace-delimited text into floats.

    The sequence ends at end of input OR at the first token that does not
    start with a number; the two cases look the same to the caller.
    A token like "4.5abc" yields 4.5 and then ends the sequence.
    Leftovers end it too even when they look numeric: "1-2" yields 1.0 only.
    """
    for line in lines:
        for token in line.split():
            m = _NUMBER.match(token)
            if m is None:
                _log.debug("Stopping at non-numeric token %r", token)
                return
            yield float(m.group(0))
            if m.end() != len(token):
                _log.debug("Stopping after numeric prefix of %r", token)
                return


def parse_text(text: str) -> Iterator[float]:
    return parse_samples(text.splitlines())


@contextmanager
def open_source(data_file: Optional[Path] = None, stdin: Optional[IO[str]] = None) -> Iterator[IO[str]]:
    """
    Yield the input stream for a run: `data_file` when given, otherwise stdin.
    A file opened here is closed exactly once on every exit path; stdin is never closed.
    Undecodable bytes become U+FFFD, a non-numeric token that ends the stream.
    """
    if data_file is None:
        if stdin is None:
            stdin = sys.stdin
            reconfigure = getattr(stdin, "reconfigure", None)
            if reconfigure is not None:
                reconfigure(errors="replace")
        yield stdin
        return

    path = Path(data_file)
    if not path.is_file():
        raise FileNotFoundError(f"Data file not found: {path}")
    _log.debug("Reading samples from %s", path)
    with path.open("r", encoding="utf-8", errors="replace") as fh:
        yield fh
