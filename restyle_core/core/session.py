"""Picker state and apply actions for one restyled map."""
from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Optional, Set

from config.schemas import ROLE_ORDER, ApplyReport, RoleKeywords, StyleObject, StyleRole
from restyle_core.core.normalize import DEFAULT_COLORS
from restyle_core.core.orchestrate import apply_style
from restyle_core.core.util import is_hex_color, log_progress

logger = logging.getLogger(__name__)

MANUAL_STYLE_NAME = 'Manual override'


class SessionBusyError(RuntimeError):
    """Raised when a prompt is submitted while another is still in flight."""


class StyleSession:
    """Holds the map surface and the picker colors bound to each role.

    Applies are serialised: while one ``apply_prompt`` is waiting on the
    model, a second prompt or a manual apply raises ``SessionBusyError`` and
    leaves the pickers and the map untouched.
    """

    def __init__(
        self,
        surface,
        generator=None,
        keywords: Optional[RoleKeywords] = None,
        status: Callable[[str], None] = log_progress,
    ):
        self.surface = surface
        self.generator = generator
        self.keywords = keywords or RoleKeywords.default()
        self.status = status
        self.controls: Dict[str, str] = {role.value: DEFAULT_COLORS[role] for role in ROLE_ORDER}
        self.pinned: Set[str] = set()
        self._apply_lock = threading.Lock()

    def read_pickers(self) -> Dict[str, str]:
        return dict(self.controls)

    def set_picker(self, role: str, color: str, pin: bool = True) -> None:
        """Set a picker color; pinned roles are sent as overrides with prompts."""
        role = StyleRole(role).value
        if not is_hex_color(color):
            raise ValueError(f"Invalid color for {role}: {color!r}. Expected #RRGGBB")
        self.controls[role] = color
        if pin:
            self.pinned.add(role)

    def unpin(self, role: str) -> None:
        self.pinned.discard(StyleRole(role).value)

    def overrides(self) -> Dict[str, str]:
        return {role: self.controls[role] for role in sorted(self.pinned)}

    def apply(self, style: StyleObject) -> ApplyReport:
        return apply_style(self.surface, style, self.keywords, self.controls, self.status)

    def _acquire(self) -> None:
        if not self._apply_lock.acquire(blocking=False):
            raise SessionBusyError("A style request is already in progress")

    def apply_manual(self, pickers: Optional[Dict[str, str]] = None) -> ApplyReport:
        """Apply the current picker colors as a manual style.

        ``pickers`` are validated and set (and pinned) first; if any is invalid
        a ``ValueError`` is raised before anything changes.
        """
        pickers = pickers or {}
        for role, color in pickers.items():
            StyleRole(role)
            if not is_hex_color(color):
                raise ValueError(f"Invalid color for {role}: {color!r}. Expected #RRGGBB")
        self._acquire()
        try:
            for role, color in pickers.items():
                self.set_picker(role, color)
            current = {role: color for role, color in self.read_pickers().items() if is_hex_color(color)}
            style = StyleObject.from_dict({**current, 'name': MANUAL_STYLE_NAME})
            return self.apply(style)
        finally:
            self._apply_lock.release()

    def apply_prompt(self, prompt: str) -> ApplyReport:
        """Generate a style from ``prompt`` (pinned pickers sent as overrides) and apply it."""
        prompt = (prompt or '').strip()
        if not prompt:
            raise ValueError("Enter a prompt")
        if self.generator is None:
            raise RuntimeError("No style generator configured")
        self._acquire()
        try:
            self.status("Status: calling AI...")
            try:
                style = self.generator.generate(prompt, self.overrides())
            except Exception:
                logger.exception("AI style request failed")
                self.status("Status: AI error (check console)")
                raise
            return self.apply(style)
        finally:
            self._apply_lock.release()

    def export_document(self):
        """Return a copy of the current style document."""
        return self.surface.to_document()
