# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Health-check engine: normalize, validate, probe and dispatch."""

from .dispatch import Dispatcher
from .normalize import normalize
from .probe import Prober
from .report import render_table
from .validate import validate_target

__all__ = ["Dispatcher", "Prober", "normalize", "render_table", "validate_target"]
