"""Trace file reader.

A trace is plain text holding hexadecimal addresses separated by
whitespace, any number per line. A leading 0x (or +) is optional and
anything after '#' on a line is ignored. Addresses are read lazily, in order.
Files are read as bytes and decoded one line at a time, so an undecodable
line is reported with its line number.
"""
import logging
import re
import sys
from contextlib import contextmanager
from typing import IO, Iterator

from cachetrace.core.address import ADDRESS_BITS, ADDRESS_MASK

logger = logging.getLogger(__name__)

HEX_TOKEN = re.compile(r'\+?(0[xX])?[0-9a-fA-F]+')


class TraceFormatError(ValueError):
    def __init__(self, lineno: int, token: str, reason: str):
        self.lineno = lineno
        self.token = token
        super().__init__(f"line {lineno}: {reason}: {token!r}")


def parse_address(token: str, lineno: int = 0) -> int:
    if not HEX_TOKEN.fullmatch(token):
        raise TraceFormatError(lineno, token, "not a hexadecimal address")
    value = int(token, 16)
    if value > ADDRESS_MASK:
        raise TraceFormatError(lineno, token, f"address does not fit in {ADDRESS_BITS} bits")
    return value


def _decode_line(raw, lineno: int) -> str:
    if isinstance(raw, str):
        return raw
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError:
        raise TraceFormatError(lineno, raw.decode('utf-8', 'replace').strip(), "not UTF-8 text") from None


def iter_addresses(stream: IO) -> Iterator[int]:
    """Yield addresses from a text or binary line stream."""
    for lineno, raw in enumerate(stream, start=1):
        line = _decode_line(raw, lineno).split('#', 1)[0]
        for token in line.split():
            yield parse_address(token, lineno)


@contextmanager
def _open_trace(path: str):
    if path == '-':
        yield sys.stdin.buffer
    else:
        with open(path, 'rb') as fh:
            yield fh


def read_trace(path: str) -> Iterator[int]:
    """Yield the addresses of the trace at `path` ('-' reads stdin).

    The file is opened on first iteration and closed when the generator
    is exhausted or closed. Open failures (missing file, directory, no
    permission) raise OSError then.
    """
    logger.debug("reading trace from %s", 'stdin' if path == '-' else path)
    with _open_trace(path) as fh:
        count = 0
        for address in iter_addresses(fh):
            count += 1
            yield address
    logger.debug("read %d addresses", count)
