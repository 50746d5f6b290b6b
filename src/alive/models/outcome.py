# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe outcome domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

# Deduplicated, sorted targets for one check; see check.normalize.
Batch = tuple[str, ...]


class ProbeState(str, Enum):
    INVALID = "invalid"
    UP = "up"
    WARN = "warn"
    DOWN = "down"


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of validating and probing one target."""

    target: str
    state: ProbeState
    status_code: int | None = None
    latency: float | None = None
    content_length: int | None = None
    note: str | None = None

    @property
    def latency_ms(self) -> int | None:
        if self.latency is None:
            return None
        return round(self.latency * 1000)

    @classmethod
    def invalid(cls, target: str, reason: str) -> ProbeOutcome:
        return cls(target=target, state=ProbeState.INVALID, note=reason)

    @classmethod
    def down(cls, target: str, latency: float, reason: str) -> ProbeOutcome:
        return cls(target=target, state=ProbeState.DOWN, latency=latency, note=reason)

    @classmethod
    def responded(
        cls,
        target: str,
        status_code: int,
        latency: float,
        content_length: int | None = None,
    ) -> ProbeOutcome:
        state = ProbeState.UP if status_code < 400 else ProbeState.WARN
        size = content_length if content_length is not None and content_length > 0 else None
        return cls(
            target=target,
            state=state,
            status_code=status_code,
            latency=latency,
            content_length=size,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "target": self.target,
            "state": self.state.value,
            "status_code": self.status_code,
            "latency_ms": self.latency_ms,
            "content_length": self.content_length,
            "note": self.note,
        }
