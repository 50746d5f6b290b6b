# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level alive facade: normalize raw targets and run a checked batch."""

from __future__ import annotations

from collections.abc import Iterable
from contextlib import suppress

from .check import Dispatcher, Prober, normalize
from .config import CheckSettings, HttpSettings, load_check_settings, load_http_settings
from .http.client import HttpClient, HttpClientFactory, create_default_http_client
from .models import Batch, ProbeOutcome


class Alive:
    """
    Convenience wrapper around the check engine.

    With no injected client, every `check` call builds its own HTTP client
    configured with that call's timeout and closes it afterwards. An injected
    client is shared across calls and closed by `close()`.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        settings: CheckSettings | None = None,
        http_settings: HttpSettings | None = None,
        http_client_factory: HttpClientFactory | None = None,
    ):
        self.http_client = http_client
        self.settings = settings or load_check_settings()
        self.http_settings = http_settings or load_http_settings()
        self.http_client_factory = http_client_factory or create_default_http_client

    def check(
        self,
        raw: Iterable[str],
        timeout: float | None = None,
        *,
        concurrency: int | None = None,
    ) -> list[ProbeOutcome]:
        """Normalize `raw` and probe every target; `timeout` is in seconds."""
        batch = normalize(raw)
        if not batch:
            return []
        used_timeout = self.settings.timeout if timeout is None else timeout
        used_concurrency = self.settings.concurrency if concurrency is None else concurrency

        if self.http_client is not None:
            return self._run(self.http_client, batch, used_timeout, used_concurrency)

        client = self.http_client_factory(self.http_settings, timeout=used_timeout)
        try:
            return self._run(client, batch, used_timeout, used_concurrency)
        finally:
            with suppress(Exception):
                client.close()

    def _run(self, client: HttpClient, batch: Batch, timeout: float, concurrency: int) -> list[ProbeOutcome]:
        prober = Prober(client, allow_redirects=self.http_settings.allow_redirects)
        return Dispatcher(prober, concurrency=concurrency).run(batch, timeout)

    def close(self) -> None:
        with suppress(Exception):
            if self.http_client is not None and hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> "Alive":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()
