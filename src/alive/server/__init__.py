# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP front end built on FastAPI."""

from .app import check_router, create_app, serve

__all__ = ["check_router", "create_app", "serve"]
