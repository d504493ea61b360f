"""Integration tests for the HTTP surface."""
import json

import pytest

from app import create_app
from config import TestingConfig
from restyle_core.core.llm import StyleGenerator
from restyle_core.core.surface import StyleDocumentMap


class NoKeyConfig(TestingConfig):
    OPENAI_API_KEY = None


@pytest.fixture
def make_client(sample_document, fake_client_factory):
    def _make(content='{"water":"#111111","land":"#222222"}', error=None, config_class=TestingConfig):
        fake = fake_client_factory(content=content, error=error)
        generator = StyleGenerator(api_key="test-key", client=fake) if config_class.OPENAI_API_KEY else None
        surface = StyleDocumentMap(sample_document)
        app = create_app(config_class, generator=generator, surface=surface)
        return app.test_client(), fake, surface
    return _make


class TestGenerateStyle:

    def test_returns_normalized_style(self, make_client):
        client, fake, _ = make_client()
        resp = client.post("/api/generate-style",
                           json={"prompt": "sunset desert", "overrides": {"labels": "#000000"}})
        assert resp.status_code == 200
        assert resp.get_json() == {"style": {
            "name": "AI style", "water": "#111111", "land": "#222222",
            "roads": "#ff85c1", "buildings": "#f0e5ff", "labels": "#000000",
        }}
        assert "sunset desert" in fake.calls[0]["messages"][1]["content"]

    def test_missing_credential_is_500(self, make_client):
        client, fake, _ = make_client(config_class=NoKeyConfig)
        resp = client.post("/api/generate-style", json={"prompt": "x"})
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "Missing OPENAI_API_KEY in env"}
        assert fake.calls == []

    def test_upstream_failure_is_500(self, make_client):
        client, _, _ = make_client(error=TimeoutError("model timed out"))
        resp = client.post("/api/generate-style", json={"prompt": "x"})
        assert resp.status_code == 500
        assert "model timed out" in resp.get_json()["error"]

    def test_unparseable_model_output_gives_defaults(self, make_client):
        client, _, _ = make_client(content="not json at all")
        resp = client.post("/api/generate-style", json={"prompt": "x"})
        assert resp.status_code == 200
        assert resp.get_json()["style"]["water"] == "#a0d8ef"

    def test_bad_body_is_400(self, make_client):
        client, _, _ = make_client()
        resp = client.post("/api/generate-style", json={"prompt": 5})
        assert resp.status_code == 400

    def test_empty_body_allowed(self, make_client):
        client, _, _ = make_client()
        resp = client.post("/api/generate-style", data="", content_type="application/json")
        assert resp.status_code == 200


class TestApplyAndExport:

    def test_manual_apply_restyles_map(self, make_client):
        client, _, surface = make_client()
        resp = client.post("/api/apply-style", json={"roads": "#123456"})
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["style"]["name"] == "Manual override"
        assert body["controls"]["roads"] == "#123456"
        assert body["report"]["matched"]["roads"] == ["road_primary"]
        assert surface.get_paint_property("road_primary", "line-color") == "#123456"

    def test_manual_apply_rejects_bad_color(self, make_client):
        client, _, surface = make_client()
        resp = client.post("/api/apply-style", json={"roads": "red", "water": "#000000"})
        assert resp.status_code == 400
        assert surface.get_paint_property("coastline", "line-color") == "#198ec8"

    def test_ai_style_applies_generated_colors(self, make_client):
        client, fake, surface = make_client()
        client.post("/api/apply-style", json={"labels": "#000000"})
        resp = client.post("/api/ai-style", json={"prompt": "sunset desert"})
        assert resp.status_code == 200
        assert surface.get_paint_property("coastline", "line-color") == "#111111"
        assert surface.get_paint_property("place_label", "text-color") == "#000000"
        assert '"labels": "#000000"' in fake.calls[0]["messages"][1]["content"]

    def test_ai_style_requires_prompt(self, make_client):
        client, _, _ = make_client()
        resp = client.post("/api/ai-style", json={"prompt": "  "})
        assert resp.status_code == 400

    def test_unpin_unknown_role(self, make_client):
        client, _, _ = make_client()
        assert client.delete("/api/pickers/sky/pin").status_code == 404
        assert client.delete("/api/pickers/water/pin").get_json() == {"pinned": []}

    def test_download_style(self, make_client, sample_document):
        client, _, _ = make_client()
        client.post("/api/apply-style", json={"water": "#0000ff"})
        resp = client.get("/api/style.json")
        assert resp.status_code == 200
        assert "attachment" in resp.headers["Content-Disposition"]
        document = json.loads(resp.data)
        assert document["sources"] == sample_document["sources"]
        assert document["layers"][1]["paint"]["line-color"] == "#0000ff"

    def test_roles_listing(self, make_client):
        client, _, _ = make_client()
        body = client.get("/api/roles").get_json()
        assert body["keywords"]["buildings"] == ["building", "structure"]
        assert body["controls"]["labels"] == "#222222"

    def test_cors_headers(self, make_client):
        client, _, _ = make_client()
        resp = client.get("/api/roles", headers={"Origin": "https://example.local"})
        assert resp.headers.get("Access-Control-Allow-Origin") in ("*", "https://example.local")
