"""Input validation for user-entered selection counts."""

from __future__ import annotations

import math
import numbers
from typing import Any

INVALID_COUNT_MESSAGE = "Enter number of rows to select across all pages"


class InvalidSelectionCount(ValueError):
    """A "select N rows" request with a missing, non-numeric or non-positive N."""

    def __init__(self, raw: Any) -> None:
        self.raw = raw
        super().__init__(f"{INVALID_COUNT_MESSAGE} (got {raw!r}).")


def parse_selection_count(raw: Any) -> int:
    """Parse a row count typed into the "select N rows" input.

    Accepts ints, integral floats and numeric strings (surrounding
    whitespace allowed). Fractional values are truncated, so "12.7"
    selects 12 rows.
    """
    if raw is None or isinstance(raw, bool):
        raise InvalidSelectionCount(raw)

    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            raise InvalidSelectionCount(raw)
        try:
            value = float(text)
        except ValueError:
            raise InvalidSelectionCount(raw) from None
    elif isinstance(raw, numbers.Real):
        value = float(raw)
    else:
        raise InvalidSelectionCount(raw)

    if not math.isfinite(value):
        raise InvalidSelectionCount(raw)
    count = int(value)
    if count < 1:
        raise InvalidSelectionCount(raw)
    return count
