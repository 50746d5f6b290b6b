# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by the prober."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..errors import FailureKind, classify_message

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    timeout: float | None = None
    allow_redirects: bool = True


@dataclass
class HttpResponse:
    """Normalized HTTP response; the body is drained by the client and never kept."""

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    error_kind: FailureKind | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def content_length(self) -> int | None:
        """Declared Content-Length, or None when absent or unparseable."""
        raw = header_value(self.headers, "content-length")
        if raw is None:
            return None
        try:
            value = int(raw.strip())
        except ValueError:
            return None
        return value if value >= 0 else None

    @property
    def failure_kind(self) -> FailureKind:
        """Reason code for a failed response, falling back to message matching."""
        if self.error_kind is not None:
            return self.error_kind
        return classify_message(self.error_message)

    @classmethod
    def failure(cls, kind: FailureKind, message: str = "", error_type: str | None = None) -> HttpResponse:
        return cls(ok=False, error_kind=kind, error_message=message or kind.value, error_type=error_type)


def header_value(headers: Mapping[str, str] | None, name: str) -> str | None:
    """Case-insensitive header lookup."""
    if not headers:
        return None
    target = name.lower()
    for key, value in headers.items():
        if str(key).lower() == target:
            return value
    return None
