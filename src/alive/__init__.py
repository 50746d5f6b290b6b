# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
alive package entrypoint.

This package checks HTTP/HTTPS targets for reachability. Raw target strings
are normalized into a sorted batch, probed concurrently with a per-target
timeout, and reported in batch order as up, warn, down or invalid. HTTP
behavior is abstracted behind an injectable client interface, and outcomes
are modeled with typed dataclasses.
"""

from .check import Dispatcher, Prober, normalize, render_table, validate_target
from .config import CheckSettings, HttpSettings, load_check_settings, load_http_settings, parse_timeout_ms
from .errors import FailureKind, InputError, TargetValidationError, TimeoutValueError
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .models import Batch, ProbeOutcome, ProbeState
from .runtime import Alive
from .version import __version__

__all__ = [
    "Alive",
    "Batch",
    "CheckSettings",
    "Dispatcher",
    "FailureKind",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "InputError",
    "ProbeOutcome",
    "ProbeState",
    "Prober",
    "StubHttpClient",
    "TargetValidationError",
    "TimeoutValueError",
    "create_default_http_client",
    "load_check_settings",
    "load_http_settings",
    "normalize",
    "parse_timeout_ms",
    "render_table",
    "setup_logging",
    "validate_target",
    "__version__",
]
