"""Style document utilities for the map restyler.

Provides loading (local file or URL), minimal JSON Schema validation, and
export of MapLibre style documents.
"""
from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

import jsonschema
import requests

USER_AGENT = "MapRestyler/1.0"

# Only the fields the engine touches are constrained; the rest is pass-through.
STYLE_DOCUMENT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["layers"],
    "properties": {
        "layers": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "type"],
                "properties": {
                    "id": {"type": "string"},
                    "type": {"type": "string"},
                    "source-layer": {"type": "string"},
                    "paint": {"type": "object"},
                },
            },
        },
    },
}


def _is_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


def load_style_document(source: str, timeout: int = 10) -> Optional[Dict[str, Any]]:
    """Load a style document from a path or an http(s) URL.

    Returns None if the source is missing, unreachable, or not a JSON object.
    """
    if not source:
        return None
    try:
        if _is_url(source):
            resp = requests.get(source, headers={"User-Agent": USER_AGENT}, timeout=timeout)
            resp.raise_for_status()
            data = resp.json()
        else:
            with open(source, "r", encoding="utf-8") as f:
                data = json.load(f)
    except FileNotFoundError:
        return None
    except (requests.RequestException, ValueError):
        # ValueError covers json.JSONDecodeError from both branches
        return None
    return data if isinstance(data, dict) else None


def validate_style_document(document: Dict[str, Any]) -> Optional[str]:
    """Validate the parts of a style document the engine relies on.

    Returns an error message string if invalid, otherwise None.
    """
    try:
        jsonschema.validate(instance=document, schema=STYLE_DOCUMENT_SCHEMA)
        return None
    except jsonschema.ValidationError as e:  # keep message short for the caller
        return e.message


def save_style_document(document: Dict[str, Any], path: str) -> str:
    """Write a style document as pretty-printed JSON and return the absolute path."""
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)
    return os.path.abspath(path)
