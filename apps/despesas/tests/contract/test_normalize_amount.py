from __future__ import annotations

from fastapi.testclient import TestClient


def test_input_event_formats_digits_as_cents(client: TestClient) -> None:
    response = client.post(
        "/api/amounts/normalize",
        json={"event": "input", "value": "R$ 0,255", "previous": "R$ 0,25"},
    )

    assert response.status_code == 200
    assert response.json() == {"display": "R$ 2,55", "amount": "2.55", "valid": True}


def test_input_event_rewrites_period_to_comma(client: TestClient) -> None:
    with_period = client.post(
        "/api/amounts/normalize", json={"event": "input", "value": "12.5"}
    )
    with_comma = client.post(
        "/api/amounts/normalize", json={"event": "input", "value": "12,5"}
    )

    assert with_period.json() == with_comma.json()
    assert with_period.json()["display"] == "R$ 1,25"


def test_blur_event_keeps_zero_display(client: TestClient) -> None:
    response = client.post(
        "/api/amounts/normalize", json={"event": "blur", "value": "R$ 0,00"}
    )

    assert response.json() == {"display": "R$ 0,00", "amount": "0.00", "valid": False}


def test_blur_event_keeps_unparseable_display(client: TestClient) -> None:
    response = client.post(
        "/api/amounts/normalize", json={"event": "blur", "value": "abc"}
    )

    assert response.json() == {"display": "abc", "amount": "0.00", "valid": False}


def test_unknown_event_returns_400(client: TestClient) -> None:
    response = client.post(
        "/api/amounts/normalize", json={"event": "submit", "value": "1"}
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_input_event_accepts_long_digit_runs(client: TestClient) -> None:
    response = client.post(
        "/api/amounts/normalize", json={"event": "input", "value": "9" * 40}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["amount"] == "9" * 38 + ".99"
    assert body["display"].startswith("R$ 99.999.999.")
    assert body["display"].endswith(".999,99")
    assert body["valid"] is True
