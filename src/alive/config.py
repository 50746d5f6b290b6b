# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for alive."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from .errors import TimeoutValueError
from .version import __version__

DEFAULT_USER_AGENT = f"alive/{__version__}"
DEFAULT_TIMEOUT_MS = 3500
MAX_TIMEOUT_MS = 120_000
DEFAULT_CONCURRENCY = 8
DEFAULT_PORT = 4177

_MS_RE = re.compile(r"[+-]?[0-9]+")


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_timeout_ms(raw: str | int) -> float:
    """
    Parse a millisecond timeout override and return it in seconds.

    Accepts positive integers up to MAX_TIMEOUT_MS; anything else is a user
    input error.
    """
    text = str(raw).strip()
    if not _MS_RE.fullmatch(text) or int(text) <= 0:
        raise TimeoutValueError("timeout must be positive milliseconds")
    count = int(text)
    if count > MAX_TIMEOUT_MS:
        raise TimeoutValueError("timeout too large")
    return count / 1000


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = DEFAULT_TIMEOUT_MS / 1000
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    trust_env: bool = True

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("ALIVE_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            user_agent=os.getenv("ALIVE_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("ALIVE_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("ALIVE_HTTP_VERIFY_SSL", cls.verify_ssl),
            trust_env=_bool_env("ALIVE_HTTP_TRUST_ENV", cls.trust_env),
        )


@dataclass
class CheckSettings:
    """Engine and front-end defaults."""

    concurrency: int = DEFAULT_CONCURRENCY
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT

    @property
    def timeout(self) -> float:
        return self.timeout_ms / 1000

    @classmethod
    def from_env(cls) -> "CheckSettings":
        concurrency = _int_env("ALIVE_CONCURRENCY", cls.concurrency)
        if concurrency <= 0:
            concurrency = cls.concurrency
        timeout_ms = cls.timeout_ms
        raw_timeout = os.getenv("ALIVE_TIMEOUT_MS")
        if raw_timeout is not None:
            try:
                timeout_ms = round(parse_timeout_ms(raw_timeout) * 1000)
            except TimeoutValueError:
                timeout_ms = cls.timeout_ms
        port = _int_env("ALIVE_PORT", cls.port)
        if not 0 < port < 65536:
            port = cls.port
        return cls(
            concurrency=concurrency,
            timeout_ms=timeout_ms,
            host=os.getenv("ALIVE_HOST", cls.host),
            port=port,
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_check_settings() -> CheckSettings:
    """Load engine settings from environment with sensible defaults."""
    return CheckSettings.from_env()
