# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Turn raw target strings into a deterministic batch."""

from __future__ import annotations

from collections.abc import Iterable

from ..models import Batch


def normalize(raw: Iterable[str]) -> Batch:
    """Trim, drop blanks, deduplicate and sort targets in codepoint order."""
    unique = {item.strip() for item in raw}
    unique.discard("")
    return tuple(sorted(unique))


__all__ = ["normalize"]
