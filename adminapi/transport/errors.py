"""Transport failure classification.

A failure is retryable only when the server never produced a response:
connect/read/write/pool timeouts, connection resets, DNS failures
(permanent or temporary), unreachable networks and protocol errors raised
before a response arrived. All of these surface from httpx as
``httpx.TransportError`` subclasses.

A failure where the server did answer, even with an HTTP error status, is
never retried: the response carries the backend's error information and
goes straight to the normalizer.
"""

from __future__ import annotations

import errno
import socket

import httpx

# socket.gaierror codes mapped to the names operators grep for
_GAI_CODES: dict[int, str] = {
    socket.EAI_AGAIN: "EAI_AGAIN",
    socket.EAI_NONAME: "ENOTFOUND",
}
if hasattr(socket, "EAI_NODATA"):
    _GAI_CODES[socket.EAI_NODATA] = "ENOTFOUND"


def is_retryable(error: BaseException) -> bool:
    """True if no HTTP response was received for the failed attempt."""
    if isinstance(error, httpx.HTTPStatusError):
        return False
    return isinstance(error, httpx.TransportError)


def has_response(error: BaseException) -> bool:
    """True if the server produced a response for this failure."""
    return isinstance(error, httpx.HTTPStatusError)


def error_code(error: BaseException) -> str:
    """Short code describing a failure, for log lines.

    Walks the cause chain looking for a socket-level errno before falling
    back to the httpx exception class.
    """
    for exc in _cause_chain(error):
        if isinstance(exc, socket.gaierror) and exc.errno in _GAI_CODES:
            return _GAI_CODES[exc.errno]
        if isinstance(exc, (socket.timeout, TimeoutError)):
            return "ETIMEDOUT"
        if isinstance(exc, OSError) and exc.errno in errno.errorcode:
            return errno.errorcode[exc.errno]

    if isinstance(error, httpx.TimeoutException):
        return "ETIMEDOUT"
    if isinstance(error, httpx.HTTPStatusError):
        return str(error.response.status_code)
    return type(error).__name__


def _cause_chain(error: BaseException):
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__
