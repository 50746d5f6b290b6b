# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Programmable HttpClient implementations for tests and offline use."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from ..errors import FailureKind
from .client import HttpClient
from .models import HttpRequest, HttpResponse

Responder = Callable[[HttpRequest], HttpResponse]


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient for tests.

    Responses are keyed by URL and may be an HttpResponse or a callable that
    builds one from the request. An optional per-URL delay simulates network
    latency; it is capped at the request timeout, after which a timeout
    failure is returned like a real transport would.
    """

    def __init__(self, responses: dict[str, HttpResponse | Responder] | None = None):
        self._responses: dict[str, HttpResponse | Responder] = dict(responses or {})
        self._delays: dict[str, float] = {}
        self._lock = threading.Lock()
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse | Responder, *, delay: float = 0.0) -> None:
        self._responses[url] = response
        if delay:
            self._delays[url] = delay

    def request(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)

        delay = self._delays.get(request.url, 0.0)
        if delay:
            if request.timeout is not None and delay >= request.timeout:
                time.sleep(request.timeout)
                return HttpResponse.failure(FailureKind.TIMEOUT, "timed out", "ReadTimeout")
            time.sleep(delay)

        response = self._responses.get(request.url)
        if response is None:
            return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")
        if callable(response):
            return response(request)
        return response

    def close(self) -> None:
        self.closed = True
