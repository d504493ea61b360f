"""Apply a role color to a layer's paint properties by render type."""
from __future__ import annotations

import logging
from typing import Any, List, Sequence, Tuple

from restyle_core.core.surface import LayerType, RenderLayer

logger = logging.getLogger(__name__)

# Semi-transparent white keeps labels legible against the new text color
LABEL_HALO_COLOR = '#ffffff33'

_DIRECT_CHANNELS = {
    LayerType.BACKGROUND: 'background-color',
    LayerType.FILL: 'fill-color',
    LayerType.LINE: 'line-color',
}


def _exposes(surface, layer_id: str, prop: str) -> bool:
    return surface.get_paint_property(layer_id, prop) is not None


def plan_paint(surface, layer: RenderLayer, color: str) -> List[Tuple[str, Any]]:
    """Return the (property, value) pairs that coloring ``layer`` would set.

    Symbol layers prefer ``text-color`` and fall back to ``icon-color``; the
    halo is reset whenever the layer has one. Unrecognised types get
    ``fill-color`` and/or ``line-color`` only if already present, so an
    empty plan is normal for raster-like layers.
    """
    layer_id = layer.id
    channel = _DIRECT_CHANNELS.get(layer.type)
    if channel:
        return [(channel, color)]

    changes: List[Tuple[str, Any]] = []
    if layer.type == LayerType.SYMBOL:
        if _exposes(surface, layer_id, 'text-color'):
            changes.append(('text-color', color))
        elif _exposes(surface, layer_id, 'icon-color'):
            changes.append(('icon-color', color))
        if _exposes(surface, layer_id, 'text-halo-color'):
            changes.append(('text-halo-color', LABEL_HALO_COLOR))
        return changes

    if _exposes(surface, layer_id, 'fill-color'):
        changes.append(('fill-color', color))
    if _exposes(surface, layer_id, 'line-color'):
        changes.append(('line-color', color))
    return changes


def apply_color(surface, layer: RenderLayer, color: str) -> bool:
    """Color one layer on ``surface``. Never raises.

    Returns False if any lookup or mutation failed; in that case every
    property already written for this layer is restored.
    """
    written: List[Tuple[str, Any]] = []
    try:
        for prop, value in plan_paint(surface, layer, color):
            previous = surface.get_paint_property(layer.id, prop)
            surface.set_paint_property(layer.id, prop, value)
            written.append((prop, previous))
        return True
    except Exception as e:
        logger.warning("apply_color failed for %s: %s", layer.id, e)
        for prop, previous in reversed(written):
            try:
                surface.set_paint_property(layer.id, prop, previous)
            except Exception as restore_error:
                logger.warning("could not restore %s on %s: %s", prop, layer.id, restore_error)
        return False


def apply_color_to_layers(surface, layers: Sequence[RenderLayer], color: str) -> List[str]:
    """Color every layer independently; return the ids that failed."""
    return [layer.id for layer in layers if not apply_color(surface, layer, color)]
