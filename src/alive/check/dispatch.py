# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Bounded-parallel dispatch of a batch across worker threads.

Each entry is handed to the pool tagged with its batch index and its outcome is
written to that slot of a pre-sized list, so the returned order is the batch
order no matter which probe finishes first. Slots are written exactly once by
the worker that took the entry; leaving the executor block is the barrier.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor

from ..config import DEFAULT_CONCURRENCY
from ..errors import FailureKind, TargetValidationError
from ..models import Batch, ProbeOutcome
from .probe import Prober
from .validate import validate_target

logger = logging.getLogger(__name__)


class Dispatcher:
    """Runs validation and probing for every batch entry with at most `concurrency` workers."""

    def __init__(self, prober: Prober, concurrency: int = DEFAULT_CONCURRENCY):
        self.prober = prober
        self.concurrency = _check_concurrency(concurrency)

    def run(self, batch: Batch, timeout: float, concurrency: int | None = None) -> list[ProbeOutcome]:
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        limit = self.concurrency if concurrency is None else _check_concurrency(concurrency)
        if not batch:
            return []

        workers = min(limit, len(batch))
        slots: list[ProbeOutcome | None] = [None] * len(batch)
        started = time.perf_counter()
        logger.debug("Checking %d targets with %d workers (timeout %.3fs)", len(batch), workers, timeout)

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="alive-probe") as executor:
            for index, target in enumerate(batch):
                executor.submit(self._work, slots, index, target, timeout)

        logger.debug("Checked %d targets in %.3fs", len(batch), time.perf_counter() - started)
        outcomes = [outcome for outcome in slots if outcome is not None]
        if len(outcomes) != len(batch):
            raise RuntimeError(f"dispatcher lost {len(batch) - len(outcomes)} of {len(batch)} outcomes")
        return outcomes

    def _work(self, slots: list[ProbeOutcome | None], index: int, target: str, timeout: float) -> None:
        slots[index] = self.check_one(target, timeout)

    def check_one(self, target: str, timeout: float) -> ProbeOutcome:
        """Validate then probe one target; never raises."""
        started = time.perf_counter()
        try:
            validate_target(target)
            return self.prober.probe(target, timeout)
        except TargetValidationError as exc:
            return ProbeOutcome.invalid(target, exc.reason)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Probe worker crashed for %s: %s", target, exc)
            return ProbeOutcome.down(target, time.perf_counter() - started, FailureKind.OTHER.value)


def _check_concurrency(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"concurrency must be a positive integer, got {value!r}")
    return value


__all__ = ["Dispatcher"]
