"""
HTTP surface tests — health, catalog, calculate endpoint.
"""


def _fence_request(**overrides):
    fields = {
        "fence_type": "featheredge",
        "sides": [{"length_mm": 6000, "enabled": True}],
        "fence_height_mm": 1800,
        "post_spacing_target_mm": 2400,
        "board_width_mm": 150,
        "board_overlap_mm": 30,
        "post_depth_mm": 600,
        "waste_percent": 20,
    }
    fields.update(overrides)
    return {"fields": fields}


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_job_types(client):
    resp = client.get("/api/takeoff/job-types")
    assert resp.status_code == 200
    assert resp.json()["job_types"] == ["fence"]


def test_fence_catalog(client):
    resp = client.get("/api/takeoff/fence/catalog")
    assert resp.status_code == 200
    data = resp.json()
    assert "1830x1800" in data["panel_sizes"]
    assert data["post_types"]["timber-75"]["width"] == 75
    assert set(data["fence_types"]) == {"panel", "featheredge", "hit-miss"}


def test_calculate_fence(client):
    resp = client.post("/api/takeoff/fence", json=_fence_request())
    assert resp.status_code == 200
    data = resp.json()
    assert data["job_type"] == "fence"
    result = data["result"]
    assert result["posts"]["count"] == 4
    assert result["sides"][0]["actual_spacing_mm"] == 2000
    assert result["boards"]["count"] == 60     # 50 boards + 20% waste
    assert any(item["section"] == "RAILS" for item in result["items"])


def test_calculate_fence_nothing_to_build(client):
    resp = client.post("/api/takeoff/fence", json=_fence_request(sides=[]))
    assert resp.status_code == 200
    assert resp.json()["result"] is None


def test_calculate_unknown_job_type(client):
    resp = client.post("/api/takeoff/pergola", json={"fields": {}})
    assert resp.status_code == 404


def test_calculate_requires_fields_object(client):
    resp = client.post("/api/takeoff/fence", json={"sides": []})
    assert resp.status_code == 422
