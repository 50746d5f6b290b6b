# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport seam between the prober and the network."""

from __future__ import annotations

from dataclasses import replace
from typing import Protocol

from ..config import HttpSettings, load_http_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """
    Sends one probe request.

    Transport failures are reported, not raised: the response comes back with
    `ok=False` and an `error_kind` so the prober can record a `down` outcome.
    """

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None: ...


class HttpClientFactory(Protocol):
    """Builds a client for one batch, optionally bound to that batch's timeout."""

    def __call__(self, settings: HttpSettings, *, timeout: float | None = None) -> HttpClient: ...


def create_default_http_client(settings: HttpSettings | None = None, *, timeout: float | None = None) -> HttpClient:
    """Build the httpx-backed client; `timeout` (seconds) replaces the settings' default."""
    from .httpx_client import HttpxClient

    settings = settings or load_http_settings()
    if timeout is not None:
        settings = replace(settings, timeout=timeout)
    return HttpxClient(settings)
