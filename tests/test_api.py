"""Tests for glyphtext FastAPI endpoints."""

from fastapi.testclient import TestClient

from glyphtext.main import app

client = TestClient(app)


class TestHealthEndpoint:
    def test_health_returns_200(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["service"] == "glyphtext"

    def test_health_includes_version(self):
        resp = client.get("/health")
        data = resp.json()
        assert "version" in data


class TestComposeEndpoint:
    def test_compose_png_returns_image(self):
        resp = client.post("/compose", json={"text": "this is rude.", "scale": 4})
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "image/png"
        assert resp.content[:4] == b"\x89PNG"

    def test_compose_svg_returns_svg(self):
        resp = client.post(
            "/compose/svg",
            json={"text": "the quick brown fox", "fill": "#1A365D", "stroke": "#FFFFFF"},
        )
        assert resp.status_code == 200
        assert "image/svg+xml" in resp.headers["content-type"]
        assert "<svg" in resp.text
        assert 'class="block-glyph the"' in resp.text
        assert 'fill="#1A365D"' in resp.text

    def test_compose_svg_default_scale(self):
        resp = client.post("/compose/svg", json={"text": "it"})
        assert resp.status_code == 200
        assert 'viewBox="0 0 84 40"' in resp.text

    def test_compose_svg_without_overrides(self):
        resp = client.post("/compose/svg", json={"text": "the", "use_overrides": False})
        assert resp.status_code == 200
        assert 'class="block-glyph the"' not in resp.text
        assert 'class="block-glyph t"' in resp.text

    def test_compose_svg_whitespace_is_empty_document(self):
        resp = client.post("/compose/svg", json={"text": "   "})
        assert resp.status_code == 200
        assert "<polygon" not in resp.text

    def test_compose_unknown_symbol_returns_422(self):
        resp = client.post("/compose/svg", json={"text": "h3llo"})
        assert resp.status_code == 422
        assert "Unknown primary symbol" in resp.json()["detail"]

    def test_compose_png_empty_returns_422(self):
        resp = client.post("/compose", json={"text": "   "})
        assert resp.status_code == 422

    def test_compose_invalid_color_returns_422(self):
        resp = client.post("/compose", json={"text": "hello", "fill": "red"})
        assert resp.status_code == 422

    def test_compose_empty_text_returns_422(self):
        resp = client.post("/compose", json={"text": ""})
        assert resp.status_code == 422

    def test_compose_depth_out_of_range_returns_422(self):
        resp = client.post("/compose/svg", json={"text": "hello", "nesting_depth": 7})
        assert resp.status_code == 422
