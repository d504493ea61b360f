"""Normalization of untrusted style descriptions into complete StyleObjects.

Language-model output is treated as untrusted: it may arrive as a parsed
object, as JSON text, or not at all, and any field may be missing or hold
something other than a ``#RRGGBB`` color. ``normalize`` never fails; every
role ends up with a validated color.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from config.schemas import ROLE_ORDER, StyleObject, StyleRole
from restyle_core.core.util import is_hex_color

logger = logging.getLogger(__name__)

DEFAULT_STYLE_NAME = 'AI style'

DEFAULT_COLORS: Dict[StyleRole, str] = {
    StyleRole.WATER: '#a0d8ef',
    StyleRole.LAND: '#fff2e6',
    StyleRole.ROADS: '#ff85c1',
    StyleRole.BUILDINGS: '#f0e5ff',
    StyleRole.LABELS: '#222222',
}

_CODE_FENCE_RE = re.compile(r'^```(?:json)?\s*(.*?)\s*```$', re.DOTALL | re.IGNORECASE)


@dataclass
class ParseResult:
    """Outcome of reading a raw response at the boundary.

    ``kind`` is one of ``structured``, ``text``, ``absent`` or ``unsupported``. On failure
    ``error`` is set and ``style`` is empty.
    """
    kind: str
    style: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _parse_text(text: str) -> ParseResult:
    stripped = text.strip()
    fenced = _CODE_FENCE_RE.match(stripped)
    if fenced:
        stripped = fenced.group(1)
    if not stripped:
        return ParseResult('text', error='empty response text')
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError as e:
        return ParseResult('text', error=f'invalid JSON: {e}')
    if not isinstance(data, dict):
        return ParseResult('text', error=f'expected a JSON object, got {type(data).__name__}')
    return ParseResult('text', style=data)


def parse_raw_style(raw: Any) -> ParseResult:
    """Classify and parse a raw style response. Never raises."""
    if raw is None:
        return ParseResult('absent')
    if isinstance(raw, Mapping):
        return ParseResult('structured', style=dict(raw))
    if isinstance(raw, bytes):
        try:
            raw = raw.decode('utf-8')
        except UnicodeDecodeError as e:
            return ParseResult('text', error=f'undecodable response: {e}')
    if isinstance(raw, str):
        return _parse_text(raw)
    return ParseResult('unsupported', error=f'unsupported response type {type(raw).__name__}')


def _pick_color(*candidates: Any) -> Optional[str]:
    for value in candidates:
        if is_hex_color(value):
            return value
    return None


def normalize(
    raw: Any,
    overrides: Optional[Mapping[str, Any]] = None,
    default_name: str = DEFAULT_STYLE_NAME,
) -> StyleObject:
    """Build a complete StyleObject from an untrusted ``raw`` and ``overrides``.

    Precedence per role: valid override, then valid value from ``raw``, then
    the built-in default. Colors from either source are checked against the
    ``#RRGGBB`` format and dropped if they fail.
    """
    parsed = parse_raw_style(raw)
    if not parsed.ok:
        logger.warning("Could not parse style response (%s); using defaults", parsed.error)
    source = parsed.style
    overrides = overrides if isinstance(overrides, Mapping) else {}

    colors: Dict[str, str] = {}
    for role in ROLE_ORDER:
        override = overrides.get(role.value)
        if override is not None and not is_hex_color(override):
            logger.warning("Ignoring invalid override for %s: %r", role.value, override)
        candidate = source.get(role.value)
        if candidate is not None and not is_hex_color(candidate):
            logger.info("Dropping invalid %s color from response: %r", role.value, candidate)
        colors[role.value] = _pick_color(override, candidate) or DEFAULT_COLORS[role]

    name = source.get('name')
    if not isinstance(name, str) or not name.strip():
        name = default_name
    return StyleObject(name=name.strip(), **colors)
