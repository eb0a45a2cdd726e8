import pytest

from api.index import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_interpret(client):
    response = client.post(
        "/api/interpret",
        json={"transcript": "I spent 50 dirhams on groceries", "default_currency": "USD"},
    )
    assert response.status_code == 200
    data = response.get_json()
    assert data["is_error"] is False
    assert data["expense"]["amount"] == "50"
    assert data["expense"]["currency_code"] == "AED"


def test_interpret_needs_correction_is_still_200(client):
    response = client.post("/api/interpret", json={"transcript": "", "default_currency": "USD"})
    assert response.status_code == 200
    assert response.get_json()["is_error"] is True


def test_interpret_missing_transcript(client):
    response = client.post("/api/interpret", json={"default_currency": "USD"})
    assert response.status_code == 400


def test_interpret_not_json(client):
    response = client.post("/api/interpret", data="hello", content_type="text/plain")
    assert response.status_code == 400


def test_interpret_wrong_type(client):
    response = client.post("/api/interpret", json={"transcript": 42})
    assert response.status_code == 400


def test_resolve_currency(client):
    response = client.get("/api/currency/resolve", query_string={"text": "25 AED for lunch"})
    assert response.status_code == 200
    assert response.get_json()["currency"]["code"] == "AED"


def test_resolve_currency_none(client):
    response = client.get("/api/currency/resolve", query_string={"text": "lunch"})
    assert response.get_json()["currency"] is None


def test_resolve_currency_missing_text(client):
    assert client.get("/api/currency/resolve").status_code == 400


def test_classify(client):
    response = client.get("/api/category/classify", query_string={"text": "Took a taxi home"})
    assert response.status_code == 200
    assert response.get_json()["category"] == "Transportation"


def test_classify_missing_text(client):
    assert client.get("/api/category/classify").status_code == 400
