"""Keyword classification of render layers into style roles."""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from config.schemas import ROLE_ORDER, RoleKeywords, StyleRole
from restyle_core.core.surface import RenderLayer


def layer_matches(layer: RenderLayer, keywords: Iterable[str]) -> bool:
    """True if any keyword is a substring of the layer id or source-layer name.

    Plain containment, not token matching: ``roadside_parking`` matches ``road``.
    """
    layer_id = (layer.id or "").lower()
    source_layer = (layer.source_layer or "").lower()
    return any(k in layer_id or k in source_layer for k in keywords)


def classify(
    layers: Sequence[RenderLayer],
    role: StyleRole,
    keywords: Optional[RoleKeywords] = None,
) -> List[RenderLayer]:
    """Return every layer belonging to ``role``, in original layer order.

    Membership is boolean and non-exclusive: the same layer may be returned
    for several roles. An empty list is a valid result.
    """
    table = keywords or RoleKeywords.default()
    role_keywords = table.for_role(role)
    if not role_keywords:
        return []
    return [layer for layer in layers if layer_matches(layer, role_keywords)]


def classify_all(
    layers: Sequence[RenderLayer],
    keywords: Optional[RoleKeywords] = None,
) -> Dict[StyleRole, List[RenderLayer]]:
    """Classify ``layers`` for every role in the fixed role order."""
    table = keywords or RoleKeywords.default()
    return {role: classify(layers, role, table) for role in ROLE_ORDER}
