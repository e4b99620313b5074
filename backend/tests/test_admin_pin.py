from classboard.core.config import get_settings


def test_verify_pin(client):
    settings = get_settings()
    assert client.post("/api/auth/pin", json={"pin": settings.admin_pin}).json() == {"ok": True}

    wrong = client.post("/api/auth/pin", json={"pin": "0000"})
    assert wrong.status_code == 401
    assert wrong.json()["message"] == "Invalid admin PIN"


def test_mutations_require_pin(client):
    response = client.post(
        "/api/timetable/initialize",
        json={"dayOfWeek": 1, "className": "9º EFAF", "shift": "MORNING"},
    )
    assert response.status_code == 401
    assert client.get("/api/timetable").json() == []


def test_repeated_wrong_pins_are_rate_limited(client):
    limit = get_settings().pin_rate_limit_max_attempts
    for _ in range(limit):
        assert client.post("/api/auth/pin", json={"pin": "0000"}).status_code == 401
    blocked = client.post("/api/auth/pin", json={"pin": get_settings().admin_pin})
    assert blocked.status_code == 429
    assert "Retry-After" in blocked.headers
