import re

import pytest
from fastapi.testclient import TestClient

from floppy_label.config import get_settings
from floppy_label.main import create_app


@pytest.fixture(autouse=True)
def configure_settings(monkeypatch):
    monkeypatch.setenv("ENABLE_CACHE", "true")
    monkeypatch.setenv("CACHE_MAX_ENTRIES", "16")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


def test_health_endpoint(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_size_catalog(client):
    response = client.get("/api/sizes")
    assert response.status_code == 200
    body = response.json()
    assert [entry["id"] for entry in body["sizes"]] == ["tiny", "small", "medium", "large", "hero"]
    assert body["sizes"][-1] == {"id": "hero", "pixels": 600, "border": 3, "slide_hover": True}
    assert body["theme"]["disk_color"] == "#2a2a2a"


def test_size_profile_endpoint(client):
    assert client.get("/api/sizes/large").json() == {"pixels": 400, "border": 2, "slide_hover": True}
    assert client.get("/api/sizes/150").json() == {"pixels": 150.0, "border": 1, "slide_hover": False}
    assert client.get("/api/sizes/inf").status_code == 422


def test_gradient_endpoint(client):
    response = client.post("/api/gradient", json={"text": "Test Label", "shape": "linear"})
    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"gradient", "textColor", "textShadow", "colors"}
    assert re.match(r"^linear-gradient\(\d+deg", body["gradient"])
    assert body["textColor"] in ("#ffffff", "#000000")
    assert client.post("/api/gradient", json={"text": "Test Label", "shape": "linear"}).json() == body


def test_gradient_endpoint_overrides(client):
    payload = {
        "text": "X",
        "shape": "linear",
        "options": {"colors": ["hsl(0,50%,20%)", "hsl(120,50%,20%)"], "angle": 45},
    }
    body = client.post("/api/gradient", json=payload).json()
    assert body["gradient"] == "linear-gradient(45deg, hsl(0,50%,20%) 0%, hsl(120,50%,20%) 100%)"
    assert body["textColor"] == "#ffffff"
    assert body["colors"] == ["hsl(0,50%,20%)", "hsl(120,50%,20%)"]


def test_gradient_endpoint_uses_default_shape(monkeypatch):
    monkeypatch.setenv("DEFAULT_GRADIENT_SHAPE", "conic")
    get_settings.cache_clear()
    with TestClient(create_app()) as test_client:
        body = test_client.post("/api/gradient", json={"text": "Disk"}).json()
    assert body["gradient"].startswith("conic-gradient(from ")


def test_gradient_endpoint_rejects_unknown_shape(client):
    response = client.post("/api/gradient", json={"text": "Disk", "shape": "spiral"})
    assert response.status_code == 422


def test_scale_endpoint(client):
    assert client.post("/api/scale", json={"naturalWidth": 500, "containerWidth": 200}).json() == {
        "scale": pytest.approx(0.4)
    }
    assert client.post("/api/scale", json={"naturalWidth": 100, "containerWidth": 200}).json() == {
        "scale": pytest.approx(1.5)
    }
    assert client.post("/api/scale", json={"naturalWidth": 0, "containerWidth": 200}).json() == {"scale": 1.0}


def test_fit_endpoint_scales_primary_line_only(client):
    response = client.post("/api/label/fit", json={"naturalWidths": [500, 500], "containerWidth": 200})
    assert response.status_code == 200
    assert response.json()["scales"] == [pytest.approx(0.4), 1.0]


def test_paint_endpoint(client):
    payload = {"name": "My App", "theme": {"enableGradient": True, "gradientType": "radial"}}
    body = client.post("/api/label/paint", json=payload).json()
    assert body["labelColor"].startswith("radial-gradient(circle at ")
    assert body["labelTextColor"] in ("#ffffff", "#000000")
    assert body["diskHighlight"] == "#444444"


def test_paint_endpoint_without_gradient(client):
    body = client.post("/api/label/paint", json={"name": "My App"}).json()
    assert body["labelColor"] == "#ffffff"
    assert body["labelTextShadow"] == "none"


def test_cache_statistics(client):
    client.post("/api/gradient", json={"text": "Cached", "shape": "linear"})
    client.post("/api/gradient", json={"text": "Cached", "shape": "linear"})
    client.post("/api/scale", json={"naturalWidth": 300, "containerWidth": 200})
    caches = {entry["name"]: entry for entry in client.get("/api/cache").json()["caches"]}
    assert caches["gradient"]["hits"] == 1
    assert caches["gradient"]["misses"] == 1
    assert caches["scale"]["entries"] == 1
    assert caches["scale"]["max_entries"] == 16


def test_cache_disabled(monkeypatch):
    monkeypatch.setenv("ENABLE_CACHE", "false")
    get_settings.cache_clear()
    app = create_app()
    with TestClient(app) as test_client:
        response = test_client.get("/api/cache")
        gradient = test_client.post("/api/gradient", json={"text": "Uncached"})
    get_settings.cache_clear()
    assert response.status_code == 404
    assert response.json()["detail"] == "Caching disabled"
    assert gradient.status_code == 200
