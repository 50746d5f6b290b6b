# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for alive."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .outcome import Batch, ProbeOutcome, ProbeState

__all__ = [
    "Batch",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "ProbeOutcome",
    "ProbeState",
]
