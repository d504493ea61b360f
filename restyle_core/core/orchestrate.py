"""Apply a StyleObject to every role on a map surface."""
from __future__ import annotations

import logging
from typing import Callable, MutableMapping, Optional

from config.schemas import ROLE_ORDER, ApplyReport, RoleKeywords, StyleObject
from restyle_core.core.classify import classify
from restyle_core.core.paint import apply_color_to_layers
from restyle_core.core.util import log_progress

logger = logging.getLogger(__name__)


def apply_style(
    surface,
    style: StyleObject,
    keywords: Optional[RoleKeywords] = None,
    controls: Optional[MutableMapping[str, str]] = None,
    status: Callable[[str], None] = log_progress,
) -> ApplyReport:
    """Classify the surface's layers per role and color each match.

    Roles without a color are skipped. A role that matches no layer is
    reported as a warning and the pass continues. After all roles, any
    ``controls`` (picker state keyed by role name) are set to the applied
    colors.

    Returns:
        ApplyReport: matched and failed layer ids per role.
    """
    table = keywords or RoleKeywords.default()
    report = ApplyReport(style_name=style.name)
    status(f"Status: applying style {style.name or ''}".rstrip())

    for role in ROLE_ORDER:
        color = style.get(role)
        if not color:
            report.skipped.append(role.value)
            continue
        role_keywords = table.for_role(role)
        matched = classify(surface.layers(), role, table)
        report.matched[role.value] = [layer.id for layer in matched]
        if not matched:
            logger.warning("No layers matched for %s %s", role.value, list(role_keywords))
            status(f"Warning: no layers matched for {role.value}")
            continue
        failed = apply_color_to_layers(surface, matched, color)
        if failed:
            report.failed[role.value] = failed

    if controls is not None:
        for role, color in style.colors().items():
            controls[role.value] = color

    status("Status: style applied")
    return report
