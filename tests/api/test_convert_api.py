import logging
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from fxrates.core.wiring import get_conversion_service
from fxrates.main import app
from fxrates.services.conversion_service import ConversionService
from fxrates.utils.ttl_cache import TtlCache


@pytest.fixture
def loader():
    return MagicMock()


@pytest.fixture
def client(loader):
    service = ConversionService(loader, TtlCache(10.0))
    app.dependency_overrides[get_conversion_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_convert(client, loader):
    loader.get_rate.return_value = 4.0

    resp = client.get("/api/convert", params={"from_currency": "usd", "to_currency": "pln", "amount": 10})
    assert resp.status_code == 200
    assert resp.json() == {
        "from_currency": "USD",
        "to_currency": "PLN",
        "amount": 10.0,
        "converted_amount": 40.0,
    }


def test_convert_reuses_cached_rate_across_requests(client, loader):
    loader.get_rate.return_value = 4.0

    for amount in (1, 2, 3):
        resp = client.get("/api/convert", params={"from_currency": "USD", "to_currency": "PLN", "amount": amount})
        assert resp.status_code == 200
    loader.get_rate.assert_called_once_with("USD", "PLN")


def test_negative_amount_is_bad_request(client, loader):
    resp = client.get("/api/convert", params={"from_currency": "USD", "to_currency": "PLN", "amount": -1})
    assert resp.status_code == 400
    loader.get_rate.assert_not_called()


def test_blank_currency_is_bad_request(client):
    resp = client.get("/api/convert", params={"from_currency": " ", "to_currency": "PLN", "amount": 1})
    assert resp.status_code == 400


def test_loader_failure_is_bad_gateway(client, loader):
    loader.get_rate.side_effect = RuntimeError("upstream down")

    resp = client.get("/api/convert", params={"from_currency": "USD", "to_currency": "PLN", "amount": 1})
    assert resp.status_code == 502
    assert "USD->PLN" in resp.json()["detail"]


def test_missing_amount_is_validation_error(client):
    resp = client.get("/api/convert", params={"from_currency": "USD", "to_currency": "PLN"})
    assert resp.status_code == 422


@pytest.mark.parametrize("amount", ["nan", "inf", "-inf"])
def test_non_finite_amount_is_bad_request(client, loader, amount):
    resp = client.get("/api/convert", params={"from_currency": "USD", "to_currency": "PLN", "amount": amount})
    assert resp.status_code == 400
    assert "finite" in resp.json()["detail"]
    loader.get_rate.assert_not_called()


def test_requests_are_timed(client, caplog):
    caplog.set_level(logging.INFO, logger="fxrates.main")

    client.get("/api/health")

    messages = [r.getMessage() for r in caplog.records if r.name == "fxrates.main"]
    assert any(m.startswith("TIMING: GET /api/health -> 200 in ") for m in messages)


def test_shutdown_without_requests_builds_no_service():
    get_conversion_service.cache_clear()

    with TestClient(app):
        pass

    assert get_conversion_service.cache_info().currsize == 0


def test_shutdown_closes_shared_loader():
    get_conversion_service.cache_clear()
    service = ConversionService(MagicMock(), TtlCache(10.0))
    with patch("fxrates.core.wiring.build_conversion_service", return_value=service):
        get_conversion_service()

    try:
        with TestClient(app):
            pass
        service.loader.close.assert_called_once()
    finally:
        get_conversion_service.cache_clear()
