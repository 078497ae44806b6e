import asyncio
import logging

from fastapi.testclient import TestClient
from starlette.requests import Request

from main import app, polyline_error_handler
from polyline_codec.core.exceptions import ChunkDecodingError
from polyline_codec.services.polyline import polyline_service
from conftest import REFERENCE_POINTS, REFERENCE_POLYLINE


def locations(points):
    return [{"lat": lat, "lng": lon} for lat, lon in points]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_encode(client):
    response = client.post("/api/polyline/encode", json={
        "coordinates": locations(REFERENCE_POINTS),
        "levels": [3, 2, 1],
    })

    assert response.status_code == 200
    assert response.json() == {
        "encoded_polyline": REFERENCE_POLYLINE,
        "encoded_levels": "BA@",
        "precision": 1e5,
    }


def test_encode_with_precision(client):
    response = client.post("/api/polyline/encode", json={
        "coordinates": locations([(0, 0), (1, 1)]),
        "precision": 1,
    })

    assert response.status_code == 200
    assert response.json()["encoded_polyline"] == "??AA"
    assert response.json()["encoded_levels"] is None


def test_encode_rejects_out_of_range_location(client):
    response = client.post("/api/polyline/encode", json={
        "coordinates": locations([(91, 0)]),
    })
    assert response.status_code == 422


def test_encode_rejects_non_positive_precision(client):
    response = client.post("/api/polyline/encode", json={
        "coordinates": locations(REFERENCE_POINTS),
        "precision": 0,
    })
    assert response.status_code == 422


def test_encode_rejects_negative_level(client):
    response = client.post("/api/polyline/encode", json={
        "coordinates": locations(REFERENCE_POINTS),
        "levels": [1, -1, 1],
    })

    assert response.status_code == 422
    assert response.json()["detail"].startswith("InvalidLevel")


def test_encode_rejects_too_many_coordinates(client, monkeypatch):
    monkeypatch.setattr(polyline_service, "max_coordinates", 2)

    response = client.post("/api/polyline/encode", json={
        "coordinates": locations(REFERENCE_POINTS),
    })
    assert response.status_code == 413


def test_decode(client):
    response = client.post("/api/polyline/decode", json={
        "encoded_polyline": REFERENCE_POLYLINE,
        "encoded_levels": "BA@",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["coordinates"] == locations(REFERENCE_POINTS)
    assert body["levels"] == [3, 2, 1]
    assert body["precision"] == 1e5


def test_decode_empty(client):
    response = client.post("/api/polyline/decode", json={"encoded_polyline": ""})

    assert response.status_code == 200
    assert response.json()["coordinates"] == []
    assert response.json()["levels"] is None


def test_decode_truncated_polyline(client):
    response = client.post("/api/polyline/decode", json={
        "encoded_polyline": REFERENCE_POLYLINE[:-1],
    })

    assert response.status_code == 422
    assert response.json()["detail"].startswith("ChunkDecodingError")


def test_decode_unterminated_levels(client):
    response = client.post("/api/polyline/decode", json={
        "encoded_polyline": REFERENCE_POLYLINE,
        "encoded_levels": "BA_",
    })

    assert response.status_code == 422
    assert response.json()["detail"].startswith("ChunkExtractionError")


def test_levels_round_trip(client):
    response = client.post("/api/polyline/levels/encode", json={"levels": [3, 0, 32, 174]})
    assert response.status_code == 200
    assert response.json() == {"encoded_levels": "B?_@mD"}

    response = client.post("/api/polyline/levels/decode", json={"encoded_levels": "B?_@mD"})
    assert response.status_code == 200
    assert response.json() == {"levels": [3, 0, 32, 174]}


def test_levels_decode_rejects_malformed(client):
    response = client.post("/api/polyline/levels/decode", json={"encoded_levels": "B?_"})

    assert response.status_code == 422
    assert response.json()["detail"].startswith("ChunkExtractionError")


def test_polyline_error_handler():
    request = Request({
        "type": "http",
        "method": "POST",
        "scheme": "http",
        "server": ("testserver", 80),
        "path": "/api/polyline/decode",
        "query_string": b"",
        "headers": [],
    })

    response = asyncio.run(polyline_error_handler(request, ChunkDecodingError("truncated")))

    assert response.status_code == 422
    assert response.body == b'{"detail":"truncated","error":"ChunkDecodingError"}'


def test_router_logs_successful_calls(client, caplog):
    with caplog.at_level(logging.INFO, logger="polyline_codec"):
        client.post("/api/polyline/decode", json={"encoded_polyline": REFERENCE_POLYLINE})

    assert "Polyline decoded successfully: points=3" in caplog.text


def test_router_logs_and_reraises_unexpected_errors(monkeypatch, caplog):
    def broken_decode(request):
        raise RuntimeError("boom")

    monkeypatch.setattr(polyline_service, "decode", broken_decode)

    with TestClient(app, raise_server_exceptions=False) as test_client:
        with caplog.at_level(logging.ERROR, logger="polyline_codec"):
            response = test_client.post("/api/polyline/decode", json={"encoded_polyline": ""})

    assert response.status_code == 500
    assert "Error decoding polyline: RuntimeError: boom" in caplog.text
