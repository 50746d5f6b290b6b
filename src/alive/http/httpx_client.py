# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
import socket
import threading
import time
from contextlib import suppress
from typing import Any

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import DeadlineExceeded, classify_exception
from .client import HttpClient
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

# httpcore trace events whose return value is the connection's network stream.
_STREAM_EVENTS = frozenset({"connection.connect_tcp.complete", "connection.start_tls.complete"})


def _shutdown(sock: socket.socket) -> None:
    with suppress(OSError):
        sock.shutdown(socket.SHUT_RDWR)


class RequestDeadline:
    """
    Overall time budget for one request.

    Passed to httpx as the `trace` extension so it sees every socket the
    request opens. When the budget runs out a timer shuts those sockets down,
    which unblocks whatever read or handshake is in flight. Sockets opened
    after expiry are shut down as soon as they are reported.
    """

    def __init__(self, timeout: float):
        self.timeout = timeout
        self.at = time.monotonic() + timeout
        self.expired = False
        self._sockets: list[socket.socket] = []
        self._lock = threading.Lock()
        self._timer = threading.Timer(timeout, self._expire)
        self._timer.daemon = True

    def __enter__(self) -> "RequestDeadline":
        self._timer.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self._timer.cancel()

    def passed(self) -> bool:
        return self.expired or time.monotonic() > self.at

    def trace(self, event: str, info: dict[str, Any]) -> None:
        if event not in _STREAM_EVENTS:
            return
        stream = info.get("return_value")
        sock = stream.get_extra_info("socket") if stream is not None else None
        if sock is None:
            return
        with self._lock:
            self._sockets.append(sock)
            expired = self.expired
        if expired:
            _shutdown(sock)

    def _expire(self) -> None:
        with self._lock:
            self.expired = True
            sockets = list(self._sockets)
        logger.debug("Request deadline of %gs reached; shutting down %d socket(s)", self.timeout, len(sockets))
        for sock in sockets:
            _shutdown(sock)


class HttpxClient(HttpClient):
    """
    Synchronous httpx client wrapper.

    Every request is bounded twice: httpx enforces the per-phase timeout, and
    a `RequestDeadline` of the same length caps the whole exchange. Keep-alive
    is off so each request opens (and reports) its own connection.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
            trust_env=self.settings.trust_env,
            limits=httpx.Limits(max_keepalive_connections=0),
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout

        with RequestDeadline(timeout) as deadline:
            try:
                with self._client.stream(
                    request.method,
                    request.url,
                    headers=headers,
                    timeout=timeout,
                    follow_redirects=request.allow_redirects,
                    extensions={"trace": deadline.trace},
                ) as resp:
                    if deadline.passed():
                        raise DeadlineExceeded(f"deadline exceeded after {timeout:g}s")
                    drained, complete = self._drain(resp, deadline)
            except Exception as exc:  # noqa: BLE001
                if deadline.expired and not isinstance(exc, DeadlineExceeded):
                    logger.debug("Request to %s cut off at deadline: %s", request.url, exc)
                    exc = DeadlineExceeded(f"deadline exceeded after {timeout:g}s")
                return HttpResponse(
                    ok=False,
                    error_message=str(exc) or type(exc).__name__,
                    error_type=type(exc).__name__,
                    error_kind=classify_exception(exc),
                )

        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers=dict(resp.headers),
            url=str(resp.url),
            meta={
                "body_bytes_drained": drained,
                "body_drain_complete": complete,
            },
        )

    @staticmethod
    def _drain(resp: httpx.Response, deadline: RequestDeadline) -> tuple[int, bool]:
        """Read and discard the body until EOF or the deadline."""
        drained = 0
        try:
            for chunk in resp.iter_raw():
                drained += len(chunk)
                if deadline.passed():
                    return drained, False
        except (httpx.HTTPError, OSError, ValueError) as exc:
            logger.debug("Body drain for %s stopped early: %s", resp.url, exc)
            return drained, False
        return drained, True

    def close(self) -> None:
        self._client.close()
