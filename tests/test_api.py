"""Tests for filet FastAPI endpoints."""

import base64
import xml.etree.ElementTree as ET

from fastapi.testclient import TestClient

from filet.main import app

client = TestClient(app)

DATA_URI_PREFIX = "data:image/svg+xml;base64,"

BLOCK_GLYPH = [["█", "█", "█"], ["█", "░", "█"], ["█", "█", "█"]]


def _svg_root(url: str) -> ET.Element:
    assert url.startswith(DATA_URI_PREFIX)
    return ET.fromstring(base64.b64decode(url[len(DATA_URI_PREFIX) :]))


class TestHealthEndpoint:
    def test_health_returns_200(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["service"] == "filet"

    def test_health_includes_version(self):
        resp = client.get("/health")
        data = resp.json()
        assert "version" in data


class TestGenerateEndpoint:
    def test_generate_returns_data_uri(self):
        resp = client.post("/api/pattern/generate", json={"digits": "7"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["digits"] == "7"
        assert data["width"] == 5
        assert data["height"] == 7
        root = _svg_root(data["pattern"]["url"])
        assert root.get("width") == "100"
        assert root.get("height") == "140"

    def test_generate_with_gauge(self):
        resp = client.post(
            "/api/pattern/generate",
            json={
                "digits": "19",
                "gauge": {"stitches_per_inch": 8, "rows_per_inch": 8},
            },
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["width"] == 22
        assert data["height"] == 14

    def test_generate_with_cell_size(self):
        resp = client.post("/api/pattern/generate", json={"digits": "12", "cell_size": 10})
        assert resp.status_code == 200
        root = _svg_root(resp.json()["pattern"]["url"])
        assert root.get("width") == "110"

    def test_generate_tags_and_alt(self):
        resp = client.post("/api/pattern/generate", json={"digits": "2-0-2-4"})
        assert resp.status_code == 200
        pattern = resp.json()["pattern"]
        assert pattern["alt"] == 'Filet crochet pattern for "2024"'
        assert pattern["tags"] == ["2024", "combined", "filet", "crochet", "pattern", "2", "0", "4"]

    def test_generate_without_digits_returns_422(self):
        resp = client.post("/api/pattern/generate", json={"digits": "abc"})
        assert resp.status_code == 422
        assert resp.json()["detail"] == "No valid digits provided"

    def test_generate_empty_string_returns_422(self):
        resp = client.post("/api/pattern/generate", json={"digits": ""})
        assert resp.status_code == 422

    def test_generate_missing_digits_returns_422(self):
        resp = client.post("/api/pattern/generate", json={})
        assert resp.status_code == 422

    def test_generate_rejects_out_of_range_gauge(self):
        for gauge in (
            {"stitches_per_inch": 0, "rows_per_inch": 4},
            {"stitches_per_inch": 4, "rows_per_inch": 21},
        ):
            resp = client.post("/api/pattern/generate", json={"digits": "1", "gauge": gauge})
            assert resp.status_code == 422

    def test_generate_rejects_too_many_digits(self):
        resp = client.post("/api/pattern/generate", json={"digits": "1" * 33})
        assert resp.status_code == 422
        assert "Too many digits" in resp.json()["detail"]

    def test_generate_rejects_bad_cell_size(self):
        resp = client.post("/api/pattern/generate", json={"digits": "1", "cell_size": 0})
        assert resp.status_code == 422

    def test_generated_pattern_is_listed(self):
        resp = client.post("/api/pattern/generate", json={"digits": "8675309"})
        image_id = resp.json()["pattern"]["id"]
        listed = client.get("/api/images").json()
        assert image_id in [image["id"] for image in listed["images"]]
        assert listed["count"] == len(listed["images"])


class TestDigitPatternEndpoints:
    def test_list_all(self):
        resp = client.get("/api/digit-patterns")
        assert resp.status_code == 200
        patterns = resp.json()["patterns"]
        assert len(patterns) >= 10

    def test_list_default_set(self):
        resp = client.get("/api/digit-patterns/set/true")
        assert resp.status_code == 200
        patterns = resp.json()["patterns"]
        assert len(patterns) == 10
        assert all(p["is_default"] for p in patterns)
        zero = next(p for p in patterns if p["digit"] == "0")
        assert zero["pattern"][0] == ["█"] * 5
        assert (zero["width"], zero["height"]) == (5, 7)

    def test_create_list_and_delete_custom(self):
        resp = client.post(
            "/api/digit-patterns",
            json={
                "name": "Boxy 3",
                "description": "square three",
                "digit": "3",
                "pattern": BLOCK_GLYPH,
                "width": 3,
                "height": 3,
            },
        )
        assert resp.status_code == 200
        created = resp.json()["pattern"]
        assert created["is_default"] is False
        assert created["pattern"] == BLOCK_GLYPH

        custom = client.get("/api/digit-patterns/set/false").json()["patterns"]
        assert created["id"] in [p["id"] for p in custom]

        resp = client.delete(f"/api/digit-patterns/{created['id']}")
        assert resp.status_code == 200
        assert resp.json() == {"success": True}

        resp = client.delete(f"/api/digit-patterns/{created['id']}")
        assert resp.status_code == 404

    def test_custom_glyph_used_in_generation(self):
        resp = client.post(
            "/api/digit-patterns",
            json={
                "name": "Tiny 6",
                "digit": "6",
                "pattern": BLOCK_GLYPH,
                "width": 3,
                "height": 3,
            },
        )
        pattern_id = resp.json()["pattern"]["id"]
        try:
            resp = client.post(
                "/api/pattern/generate",
                json={"digits": "6", "pattern_set_id": 1},
            )
            assert resp.status_code == 200
            data = resp.json()
            assert (data["width"], data["height"]) == (3, 3)
        finally:
            client.delete(f"/api/digit-patterns/{pattern_id}")

    def test_create_pads_ragged_pattern(self):
        resp = client.post(
            "/api/digit-patterns",
            json={
                "name": "Ragged",
                "digit": "2",
                "pattern": [["█"], ["█", "█"]],
                "width": 2,
                "height": 3,
            },
        )
        assert resp.status_code == 200
        created = resp.json()["pattern"]
        assert created["pattern"] == [["█", "░"], ["█", "█"], ["░", "░"]]
        client.delete(f"/api/digit-patterns/{created['id']}")

    def test_create_rejects_bad_digit(self):
        resp = client.post(
            "/api/digit-patterns",
            json={"name": "x", "digit": "12", "pattern": BLOCK_GLYPH, "width": 3, "height": 3},
        )
        assert resp.status_code == 422

    def test_create_rejects_missing_fields(self):
        resp = client.post("/api/digit-patterns", json={"name": "x", "digit": "1"})
        assert resp.status_code == 422

    def test_create_rejects_oversized_glyph(self):
        resp = client.post(
            "/api/digit-patterns",
            json={"name": "x", "digit": "1", "pattern": BLOCK_GLYPH, "width": 16, "height": 3},
        )
        assert resp.status_code == 422

    def test_delete_unknown_returns_404(self):
        resp = client.delete("/api/digit-patterns/999999")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Pattern not found"


class TestImageEndpoints:
    def test_search_blank_returns_first_page(self):
        resp = client.get("/api/images/search")
        assert resp.status_code == 200
        data = resp.json()
        assert data["count"] == 8
        assert [image["id"] for image in data["images"]] == list(range(1, 9))

    def test_search_exact_tag_first(self):
        resp = client.get("/api/images/search", params={"q": "digit4"})
        assert resp.status_code == 200
        images = resp.json()["images"]
        assert images[0]["tags"][:2] == ["4", "digit4"]

    def test_search_is_capped(self):
        resp = client.get("/api/images/search", params={"q": "crochet"})
        assert resp.json()["count"] <= 8

    def test_search_no_results(self):
        resp = client.get("/api/images/search", params={"q": "zebra"})
        assert resp.json() == {"images": [], "count": 0}
