import pytest

from backend import main
from liftcore.driver import RideDriver


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(main, "driver", RideDriver(main.driver.elevator))
    return main.app.test_client()


def test_state_starts_idle(client):
    resp = client.get("/state")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["driver_state"] == "idle"
    assert body["readout"]["bubble_text"] == "Push a button and let's get started!"


def test_go_pause_reset(client):
    body = client.post("/control", json={"action": "go", "floor": 20}).get_json()
    assert body["accepted"] is True
    assert body["driver_state"] == "running"
    assert body["target_floor"] == 20

    body = client.post("/control", json={"action": "go", "floor": 10}).get_json()
    assert body["accepted"] is False

    body = client.post("/control", json={"action": "pause"}).get_json()
    assert body["driver_state"] == "paused"

    assert client.get("/state").get_json()["driver_state"] == "paused"

    body = client.post("/control", json={"action": "reset"}).get_json()
    assert body["accepted"] is True
    assert body["driver_state"] == "idle"
    assert body["current_floor"] == 1


def test_same_floor_go_is_refused(client):
    body = client.post("/control", json={"action": "go", "floor": 1}).get_json()

    assert body["accepted"] is False
    assert body["driver_state"] == "idle"


def test_bad_control_requests(client):
    assert client.post("/control", json={"action": "fly"}).status_code == 400
    assert client.post("/control", json={"action": "go", "floor": "top"}).status_code == 400
    assert client.post("/control", data="not json").status_code == 400
