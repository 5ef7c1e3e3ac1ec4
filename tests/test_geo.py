import math

import pytest
import requests

from app_utils import geo


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload if payload is not None else []

    def json(self):
        return self._payload


def test_distance_is_zero_for_same_point():
    assert geo.calculate_distance(40.7, -73.9, 40.7, -73.9) == 0


def test_distance_between_neighborhood_centroids():
    # Harlem -> East Harlem is a bit under 2 km
    dist = geo.calculate_distance(40.8116, -73.9465, 40.7957, -73.9389)
    assert 1500 < dist < 2000


def test_distance_is_infinite_when_coordinates_missing():
    assert math.isinf(geo.calculate_distance(None, -73.9, 40.7, -73.9))


def test_nearest_neighborhood_within_borough():
    assert geo.nearest_neighborhood(40.7080, -73.9575, "Brooklyn", max_distance=1000) == "Williamsburg"


def test_nearest_neighborhood_respects_max_distance():
    # Central Park is far from every Staten Island centroid
    assert geo.nearest_neighborhood(40.7812, -73.9665, "Staten Island", max_distance=2500) is None


def test_nearest_neighborhood_unknown_borough():
    assert geo.nearest_neighborhood(40.7, -73.9, "Hoboken", max_distance=10_000) is None


def test_geocode_address_builds_query_and_parses_result(monkeypatch):
    calls = []

    def fake_get(url, params=None, headers=None, timeout=None):
        calls.append((url, params, headers, timeout))
        return FakeResponse(200, [{"lat": "40.6942", "lon": "-73.9194", "display_name": "Bushwick, Brooklyn"}])

    monkeypatch.setattr(geo.requests, "get", fake_get)

    result = geo.geocode_address("10 Broadway", "Brooklyn")

    assert result == {"latitude": 40.6942, "longitude": -73.9194, "display_name": "Bushwick, Brooklyn"}
    url, params, headers, timeout = calls[0]
    assert url.endswith("/search")
    assert params["q"] == "10 Broadway, Brooklyn, New York, NY"
    assert params["limit"] == 1
    assert "User-Agent" in headers
    assert timeout == geo.config.GEOCODER_TIMEOUT


@pytest.mark.parametrize(
    "response",
    [FakeResponse(200, []), FakeResponse(503, None), FakeResponse(200, [{"display_name": "no coords"}])],
)
def test_geocode_address_returns_none_on_bad_responses(monkeypatch, response):
    monkeypatch.setattr(geo.requests, "get", lambda *a, **kw: response)

    assert geo.geocode_address("1 Nowhere Ln") is None


def test_geocode_address_swallows_network_errors(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(geo.requests, "get", boom)

    assert geo.geocode_address("1 Main St", "Queens") is None


def test_geocode_address_skips_blank_address(monkeypatch):
    monkeypatch.setattr(geo.requests, "get", lambda *a, **kw: pytest.fail("should not call"))

    assert geo.geocode_address("   ") is None
