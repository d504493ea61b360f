"""Utility helpers (status output, small predicates) for the map restyler."""
from __future__ import annotations

import re
from typing import Any

HEX_COLOR_RE = re.compile(r'#[0-9a-fA-F]{6}')


def log_progress(message: str) -> None:
    """Lightweight stdout status line with flush so the caller sees it immediately."""
    print(message, flush=True)


def is_hex_color(value: Any) -> bool:
    """Return True if value is a 7-character ``#RRGGBB`` string."""
    return isinstance(value, str) and HEX_COLOR_RE.fullmatch(value) is not None
