# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Syntactic target validation; no DNS or network access."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from ..errors import TargetValidationError

ALLOWED_SCHEMES = frozenset({"http", "https"})

REASON_BAD_URL = "bad url"
REASON_BAD_SCHEME = "scheme must be http or https"
REASON_MISSING_HOST = "missing host"
REASON_BAD_HOST = "bad host"

# scheme "://" authority; the authority runs to the first path, query or fragment delimiter.
_ABSOLUTE_URL_RE = re.compile(r"^(?P<scheme>[A-Za-z][A-Za-z0-9+.-]*)://(?P<authority>[^/?#]*)")


def validate_target(target: str) -> None:
    """Raise TargetValidationError with a short reason when `target` cannot be probed."""
    match = _ABSOLUTE_URL_RE.match(target)
    if match is None:
        raise TargetValidationError(REASON_BAD_URL)
    try:
        parts = urlsplit(target)
    except ValueError as exc:
        raise TargetValidationError(REASON_BAD_URL) from exc

    if match.group("scheme").lower() not in ALLOWED_SCHEMES:
        raise TargetValidationError(REASON_BAD_SCHEME)

    host = match.group("authority").rpartition("@")[2]
    if not host:
        raise TargetValidationError(REASON_MISSING_HOST)
    if any(ch.isspace() for ch in host):
        raise TargetValidationError(REASON_BAD_HOST)
    # A single unbracketed colon is accepted as host:port.
    if host.count(":") > 1 and not host.startswith("["):
        raise TargetValidationError(REASON_BAD_HOST)

    try:
        parts.port
    except ValueError as exc:
        raise TargetValidationError(REASON_BAD_URL) from exc


__all__ = [
    "ALLOWED_SCHEMES",
    "REASON_BAD_HOST",
    "REASON_BAD_SCHEME",
    "REASON_BAD_URL",
    "REASON_MISSING_HOST",
    "validate_target",
]
