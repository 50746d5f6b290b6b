# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from collections.abc import Iterator
from enum import Enum

import httpx


class FailureKind(str, Enum):
    """Stable reason codes for probes that got no usable response."""

    TIMEOUT = "timeout"
    DNS = "dns"
    REFUSED = "refused"
    TLS = "tls"
    OTHER = "error"


class AliveError(Exception):
    """Base class for errors raised by alive."""


class InputError(AliveError):
    """User input rejected before the engine runs (missing targets, bad timeout, empty file)."""


class TimeoutValueError(InputError, ValueError):
    """Timeout override is not a positive millisecond count within bounds."""


class TargetValidationError(AliveError, ValueError):
    """A target string failed syntactic validation; `reason` becomes the outcome note."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class DeadlineExceeded(TimeoutError):
    """Raised when a probe outlives its overall deadline."""


# Checked in order; the first kind matching anywhere in the cause chain wins.
_STRUCTURED_KINDS: tuple[tuple[FailureKind, tuple[type[BaseException], ...]], ...] = (
    (FailureKind.TIMEOUT, (httpx.TimeoutException, TimeoutError, socket.timeout)),
    (FailureKind.DNS, (socket.gaierror, socket.herror)),
    (FailureKind.REFUSED, (ConnectionRefusedError,)),
    (FailureKind.TLS, (ssl.SSLError, ssl.CertificateError)),
)

_MESSAGE_KINDS: tuple[tuple[FailureKind, tuple[str, ...]], ...] = (
    (FailureKind.TIMEOUT, ("timed out", "timeout", "deadline exceeded")),
    (
        FailureKind.DNS,
        (
            "no such host",
            "name or service not known",
            "nodename nor servname",
            "temporary failure in name resolution",
            "getaddrinfo failed",
            "no address associated with hostname",
        ),
    ),
    (FailureKind.REFUSED, ("connection refused", "actively refused")),
    (FailureKind.TLS, ("certificate", "ssl", "tls", "handshake")),
)


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def classify_message(text: str | None) -> FailureKind:
    """Last-resort classification from error text when no structured cause is available."""
    lowered = (text or "").lower()
    for kind, needles in _MESSAGE_KINDS:
        if any(needle in lowered for needle in needles):
            return kind
    return FailureKind.OTHER


def classify_exception(exc: BaseException) -> FailureKind:
    """
    Map a transport failure to a FailureKind.

    httpx wraps the underlying OSError (gaierror, ConnectionRefusedError,
    SSLError) as the cause of its ConnectError, so the whole chain is
    inspected before falling back to message matching.
    """
    chain = list(_exception_chain(exc))
    for kind, exc_types in _STRUCTURED_KINDS:
        if any(isinstance(item, exc_types) for item in chain):
            return kind
    for item in chain:
        kind = classify_message(str(item))
        if kind is not FailureKind.OTHER:
            return kind
    return FailureKind.OTHER


__all__ = [
    "AliveError",
    "DeadlineExceeded",
    "FailureKind",
    "InputError",
    "TargetValidationError",
    "TimeoutValueError",
    "classify_exception",
    "classify_message",
]
