"""Render layers and the map surface they live on.

The surface wraps a MapLibre style document (the object returned by
``map.getStyle()``). Only ``layers[*].id``, ``type``, ``source-layer`` and
``paint`` are read or written; every other key is passed through untouched.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class LayerType(str, Enum):
    BACKGROUND = "background"
    FILL = "fill"
    LINE = "line"
    SYMBOL = "symbol"
    OTHER = "other"

    @classmethod
    def from_raw(cls, raw_type: Any) -> "LayerType":
        try:
            return cls(raw_type)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class RenderLayer:
    """Read-only snapshot of one style layer.

    Attributes:
        id: Layer identifier, unique within the style.
        type: Render type used to pick the paint channel.
        source_layer: Vector tile sub-layer name, if any.
        raw_type: The type string as it appears in the document (e.g. ``raster``).
        paint: Paint properties present when the snapshot was taken.
    """

    id: str
    type: LayerType = LayerType.OTHER
    source_layer: Optional[str] = None
    raw_type: Optional[str] = None
    paint: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RenderLayer":
        raw_type = data.get("type")
        paint = data.get("paint")
        return cls(
            id=str(data.get("id") or ""),
            type=LayerType.from_raw(raw_type),
            source_layer=data.get("source-layer"),
            raw_type=raw_type,
            paint=dict(paint) if isinstance(paint, dict) else {},
        )


class StyleDocumentMap:
    """Map surface backed by an in-memory style document.

    Mirrors the two capabilities the engine needs from a live map: listing
    the loaded layers, and reading/setting a named paint property by layer id.
    """

    def __init__(self, document: Optional[Dict[str, Any]] = None):
        self._document: Dict[str, Any] = document if document is not None else {}
        self._document.setdefault("layers", [])

    def _layer_dicts(self) -> List[Dict[str, Any]]:
        layers = self._document.get("layers") or []
        return [layer for layer in layers if isinstance(layer, dict)]

    def _find(self, layer_id: str) -> Dict[str, Any]:
        for layer in self._layer_dicts():
            if layer.get("id") == layer_id:
                return layer
        raise KeyError(f"Layer '{layer_id}' does not exist in the map's style")

    def layers(self) -> List[RenderLayer]:
        """Return a snapshot of the currently loaded layers in style order."""
        return [RenderLayer.from_dict(layer) for layer in self._layer_dicts()]

    def get_paint_property(self, layer_id: str, name: str) -> Any:
        """Return the paint value, or None when the layer does not set it."""
        paint = self._find(layer_id).get("paint")
        if not isinstance(paint, dict):
            return None
        return paint.get(name)

    def set_paint_property(self, layer_id: str, name: str, value: Any) -> None:
        """Set a paint property; ``None`` removes it, resetting to the style default."""
        layer = self._find(layer_id)
        paint = layer.get("paint")
        if not isinstance(paint, dict):
            paint = layer["paint"] = {}
        if value is None:
            paint.pop(name, None)
        else:
            paint[name] = value

    def to_document(self) -> Dict[str, Any]:
        """Deep copy of the current document, safe to serialize or hand out."""
        return copy.deepcopy(self._document)
