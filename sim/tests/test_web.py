"""Tests for the JSON web API."""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).parent.parent))

from tycoon_sim import web
from tycoon_sim.models import Material


@pytest.fixture
def client(two_city_world):
    web.set_world(two_city_world)
    return TestClient(web.app)


def test_world(client):
    resp = client.get("/api/world")
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "Two Cities"
    assert len(data["cities"]) == 3


def test_stock(client):
    resp = client.get("/api/businesses/0/stock")
    assert resp.status_code == 200
    assert resp.json()["stock"] == {
        "money": {"quantity": 250, "gross_in": 0, "gross_out": 0},
    }


def test_stock_unknown_business(client):
    assert client.get("/api/businesses/9/stock").status_code == 404


def test_buy_scale_and_turn(client):
    resp = client.post("/api/acquire/site", json={"owner_id": 0, "city_id": 0, "site_id": 1})
    assert resp.status_code == 200

    # Energy market: import energy for 2$ each
    resp = client.post("/api/scale", json={
        "owner_id": 0, "city_id": 0, "site_id": 1, "recipe_index": 0, "increment": 1,
    })
    assert resp.json() == {"changed": True, "scale": 1, "max_scale": 5}

    resp = client.post("/api/turn", json={})
    assert resp.json() == {"turn": 1}

    stock = web.get_world().businesses[0].stock
    assert stock[Material.MONEY] == 250 - 20 - 2
    assert stock[Material.ENERGY] == 1


def test_multi_turn(client):
    resp = client.post("/api/turn", json={"count": 3})
    assert resp.json() == {"turn": 3}
    assert client.post("/api/turn", json={"count": 0}).status_code == 400


def test_acquire_refused(client):
    client.post("/api/acquire/site", json={"owner_id": 0, "city_id": 0, "site_id": 0})
    resp = client.post("/api/acquire/site", json={"owner_id": 1, "city_id": 0, "site_id": 0})
    assert resp.status_code == 400
    assert "already owned" in resp.json()["detail"]


def test_acquire_unknown_site(client):
    resp = client.post("/api/acquire/site", json={"owner_id": 0, "city_id": 9, "site_id": 0})
    assert resp.status_code == 404


def test_acquire_connection(client):
    resp = client.post("/api/acquire/connection", json={"owner_id": 1, "connection_id": 1})
    assert resp.status_code == 200
    assert web.get_world().connections[1].owner_id == 1


def test_scale_on_foreign_site(client):
    resp = client.post("/api/scale", json={
        "owner_id": 1, "city_id": 0, "site_id": 0, "recipe_index": 0,
    })
    assert resp.status_code == 400


def test_scale_unknown_business(client):
    resp = client.post("/api/scale", json={
        "owner_id": 99, "city_id": 0, "site_id": 0, "recipe_index": 0,
    })
    assert resp.status_code == 404


def test_scale_refused_when_unaffordable(client):
    client.post("/api/acquire/site", json={"owner_id": 0, "city_id": 0, "site_id": 0})
    resp = client.post("/api/scale", json={
        "owner_id": 0, "city_id": 0, "site_id": 0, "recipe_index": 0,
    })
    assert resp.json()["changed"] is False


def test_generate(client):
    resp = client.post("/api/generate", json={"seed": 4, "cities": 3, "businesses": 1,
                                              "starting_money": 99})
    assert resp.status_code == 200
    assert resp.json()["cities"] == 3
    assert web.get_world().businesses[0].stock == {Material.MONEY: 99}


def test_load_scenario(client, scenario_path):
    resp = client.post("/api/scenario", json={"filename": scenario_path.name})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Two Cities"


def test_load_missing_scenario(client):
    resp = client.post("/api/scenario", json={"filename": "nope.yaml"})
    assert resp.status_code == 404


@pytest.mark.parametrize("filename", [
    "",
    ".",
    "../../../pyproject.toml",
    "../scenarios/../../cli.py",
    "../scenarios/../scenarios/two_cities.yaml",
])
def test_load_scenario_outside_directory(client, filename):
    resp = client.post("/api/scenario", json={"filename": filename})
    assert resp.status_code == 404
    assert web.get_world().name == "Two Cities"


def test_load_malformed_scenario(client, tmp_path, monkeypatch):
    (tmp_path / "bad.yaml").write_text("cities: [1]\n")
    monkeypatch.setattr(web, "SCENARIOS_DIR", tmp_path)
    resp = client.post("/api/scenario", json={"filename": "bad.yaml"})
    assert resp.status_code == 400
    assert "Invalid scenario" in resp.json()["detail"]


@pytest.mark.parametrize("field", ["cities", "businesses"])
def test_generate_rejects_negative_counts(client, field):
    resp = client.post("/api/generate", json={field: -1})
    assert resp.status_code == 422
    assert web.get_world().name == "Two Cities"
