# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single-target HTTP probe and outcome classification."""

from __future__ import annotations

import logging
import time

from ..errors import TargetValidationError
from ..http.client import HttpClient
from ..http.models import HttpRequest
from ..models import ProbeOutcome
from .validate import validate_target

logger = logging.getLogger(__name__)


class Prober:
    """Issues one timeout-bounded GET per target through an injected HttpClient."""

    def __init__(self, http_client: HttpClient, *, allow_redirects: bool = True):
        self.http_client = http_client
        self.allow_redirects = allow_redirects

    def probe(self, target: str, timeout: float) -> ProbeOutcome:
        target = target.strip()
        try:
            validate_target(target)
        except TargetValidationError as exc:
            return ProbeOutcome.invalid(target, exc.reason)

        started = time.perf_counter()
        response = self.http_client.request(
            HttpRequest(
                url=target,
                method="GET",
                timeout=timeout,
                allow_redirects=self.allow_redirects,
            )
        )
        latency = time.perf_counter() - started

        if not response.ok or response.status_code is None:
            reason = response.failure_kind.value
            logger.debug(
                "Probe failed for %s: %s (%s) -> %s",
                target,
                response.error_message,
                response.error_type,
                reason,
            )
            return ProbeOutcome.down(target, latency, reason)

        return ProbeOutcome.responded(
            target,
            status_code=response.status_code,
            latency=latency,
            content_length=response.content_length,
        )


__all__ = ["Prober"]
