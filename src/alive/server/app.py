# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP front end.

Endpoints:
  GET /       - plain-text usage hint
  GET /check  - check repeated `url` params (or one `target`), optional `timeout` in ms
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.responses import PlainTextResponse

from ..check import render_table
from ..config import CheckSettings, load_check_settings, parse_timeout_ms
from ..errors import TimeoutValueError
from ..log import uvicorn_log_level
from ..runtime import Alive

logger = logging.getLogger(__name__)

INDEX_TEXT = """alive

try:
  /check?url=https://example.com
  /check?url=https://example.com&url=https://www.python.org
  /check?url=https://example.com&timeout=1200
"""

check_router = APIRouter()


@check_router.get("/", response_class=PlainTextResponse)
def index() -> str:
    return INDEX_TEXT


@check_router.get("/check", response_class=PlainTextResponse)
def check(
    request: Request,
    url: list[str] = Query(default=[]),
    target: str | None = None,
    timeout: str | None = None,
) -> PlainTextResponse:
    """Probe the requested targets and return the tab-separated report."""
    targets = list(url)
    if not targets and target and target.strip():
        targets = [target.strip()]
    if not targets:
        return PlainTextResponse("missing url query\n", status_code=400)

    settings: CheckSettings = request.app.state.settings
    used_timeout = settings.timeout
    if timeout and timeout.strip():
        try:
            used_timeout = parse_timeout_ms(timeout)
        except TimeoutValueError:
            return PlainTextResponse("invalid timeout\n", status_code=400)

    checker: Alive = request.app.state.checker
    outcomes = checker.check(targets, used_timeout)
    return PlainTextResponse(render_table(outcomes))


def create_app(settings: CheckSettings | None = None, checker: Alive | None = None) -> FastAPI:
    settings = settings or load_check_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        app.state.checker.close()

    app = FastAPI(title="alive", lifespan=lifespan)
    app.state.settings = settings
    app.state.checker = checker or Alive(settings=settings)
    app.include_router(check_router)
    return app


def serve(settings: CheckSettings | None = None) -> None:
    """Run the HTTP front end with uvicorn until interrupted."""
    import uvicorn

    settings = settings or load_check_settings()
    app = create_app(settings)
    logger.info("alive serving on %s:%d", settings.host, settings.port)
    print(f"alive serving on :{settings.port}")
    level = uvicorn_log_level(logging.getLogger().getEffectiveLevel())
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=level)
