# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging setup shared by the CLI and the HTTP server."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "ALIVE_LOG_LEVEL"
_UVICORN_LEVELS = {"critical", "error", "warning", "info", "debug"}

# httpx logs a line per request at INFO and httpcore traces every socket
# event at DEBUG; a batch of probes would drown the report.
_TRANSPORT_LOGGERS = ("httpx", "httpcore")


def resolve_level(level: str | None = None) -> int:
    """Level from the argument, else `ALIVE_LOG_LEVEL`, else WARNING."""
    name = (level or os.getenv(LOG_LEVEL_ENV) or "WARNING").strip().upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | None = None) -> int:
    """
    Configure root logging for CLI/server use and return the effective level.

    Transport loggers stay at WARNING unless DEBUG was asked for.
    """
    effective = resolve_level(level)
    logging.basicConfig(level=effective, format="%(levelname)s %(name)s: %(message)s")
    transport_level = logging.DEBUG if effective <= logging.DEBUG else logging.WARNING
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
    return effective


def uvicorn_log_level(level: int) -> str:
    """Map a stdlib level onto the names uvicorn accepts."""
    name = str(logging.getLevelName(level)).lower()
    return name if name in _UVICORN_LEVELS else "warning"


__all__ = ["LOG_LEVEL_ENV", "resolve_level", "setup_logging", "uvicorn_log_level"]
