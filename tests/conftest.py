"""Configuration and fixtures for pytest."""
import copy
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent.absolute()))

from restyle_core.core.surface import StyleDocumentMap

SAMPLE_DOCUMENT = {
    "version": 8,
    "name": "Sample",
    "sources": {"maplibre": {"type": "vector", "url": "https://example.local/tiles.json"}},
    "layers": [
        {"id": "background", "type": "background", "paint": {"background-color": "#d8f2ff"}},
        {"id": "coastline", "type": "line", "source": "maplibre", "source-layer": "water_lines",
         "paint": {"line-color": "#198ec8"}},
        {"id": "countries-fill", "type": "fill", "source": "maplibre", "source-layer": "landcover",
         "paint": {"fill-color": "#ffffff"}},
        {"id": "road_primary", "type": "line", "source": "maplibre", "source-layer": "transportation",
         "paint": {"line-color": "#aaaaaa", "line-width": 2}},
        {"id": "building-3d", "type": "fill-extrusion", "source": "maplibre", "source-layer": "building",
         "paint": {"fill-extrusion-color": "#cccccc"}},
        {"id": "place_label", "type": "symbol", "source": "maplibre", "source-layer": "place",
         "layout": {"text-field": "{name}"},
         "paint": {"text-color": "#333333", "text-halo-color": "#ffffff"}},
        {"id": "poi_icon", "type": "symbol", "source": "maplibre", "source-layer": "poi",
         "paint": {"icon-color": "#555555"}},
        {"id": "hillshade", "type": "raster", "source": "maplibre"},
    ],
}


class FakeChatClient:
    """Stand-in for the OpenAI client exposing ``chat.completions.create``."""

    def __init__(self, content=None, error=None, choices=True):
        self.content = content
        self.error = error
        self.has_choices = choices
        self.calls = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if not self.has_choices:
            return SimpleNamespace(choices=[])
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def sample_document():
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def surface(sample_document):
    return StyleDocumentMap(sample_document)


@pytest.fixture
def status_lines():
    lines = []
    return lines


@pytest.fixture
def fake_client_factory():
    return FakeChatClient
