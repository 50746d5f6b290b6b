# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tab-separated rendering of probe outcomes."""

from __future__ import annotations

from collections.abc import Sequence

from ..models import ProbeOutcome

HEADER = ("target", "state", "code", "latency", "size", "note")
EMPTY_REPORT = "no targets\n"
_ABSENT = "-"


def _seconds(millis: int) -> str:
    return f"{millis / 1000:.3f}".rstrip("0").rstrip(".")


def format_latency(latency: float | None) -> str:
    """Millisecond-rounded latency: `45ms`, `1.5s`, or `1m5.123s` from a minute up."""
    if latency is None or latency <= 0:
        return _ABSENT
    millis = round(latency * 1000)
    if millis < 1000:
        return f"{millis}ms"
    if millis < 60_000:
        return f"{_seconds(millis)}s"
    minutes, rest = divmod(millis, 60_000)
    return f"{minutes}m{_seconds(rest)}s"


def _row(outcome: ProbeOutcome) -> tuple[str, ...]:
    code = str(outcome.status_code) if outcome.status_code else _ABSENT
    size = str(outcome.content_length) if outcome.content_length and outcome.content_length > 0 else _ABSENT
    return (
        outcome.target,
        outcome.state.value,
        code,
        format_latency(outcome.latency),
        size,
        outcome.note or _ABSENT,
    )


def render_table(outcomes: Sequence[ProbeOutcome]) -> str:
    if not outcomes:
        return EMPTY_REPORT
    lines = ["\t".join(HEADER)]
    lines.extend("\t".join(_row(outcome)) for outcome in outcomes)
    return "\n".join(lines) + "\n"


__all__ = ["EMPTY_REPORT", "HEADER", "format_latency", "render_table"]
