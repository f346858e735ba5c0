"""
Unit tests for the Nominatim reverse geocoder.
HTTP traffic is served by httpx.MockTransport.
"""

import httpx
import pytest

from utils.geocoding import UNKNOWN_LOCATION, GeocodeResult, NominatimGeocoder


def make_geocoder(handler) -> NominatimGeocoder:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return NominatimGeocoder(
        base_url="https://geo.test/", user_agent="AppointmentBotTests/1.0", client=client
    )


@pytest.mark.asyncio
async def test_resolve_success():
    """Test short name and display name are returned."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(
            200,
            json={"name": "Tashkent", "display_name": "Tashkent, Uzbekistan"},
        )

    geocoder = make_geocoder(handler)
    result = await geocoder.resolve(41.31, 69.28)
    await geocoder.aclose()

    assert result == GeocodeResult(
        short_address="Tashkent", full_address="Tashkent, Uzbekistan"
    )
    assert not result.degraded

    request = seen["request"]
    assert request.url.path == "/reverse"
    assert request.url.params["lat"] == "41.31"
    assert request.url.params["lon"] == "69.28"
    assert request.url.params["format"] == "json"
    assert request.url.params["zoom"] == "18"
    assert request.headers["User-Agent"] == "AppointmentBotTests/1.0"


@pytest.mark.asyncio
async def test_resolve_without_name_uses_fallback_short_address():
    """Test a display name without a short name keeps the full address."""

    def handler(request):
        return httpx.Response(200, json={"name": "", "display_name": "Some road, Tashkent"})

    geocoder = make_geocoder(handler)
    result = await geocoder.resolve(41.31, 69.28)

    assert result.short_address == UNKNOWN_LOCATION
    assert result.full_address == "Some road, Tashkent"
    assert not result.degraded


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"error": "Unable to geocode"}),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, content=b"<html>oops</html>"),
        httpx.Response(503, text="Service Unavailable"),
    ],
)
async def test_resolve_bad_responses_degrade(response):
    """Test error payloads and statuses never raise."""
    geocoder = make_geocoder(lambda request: response)

    result = await geocoder.resolve(0.0, 0.0)

    assert result == GeocodeResult.unknown()
    assert result.degraded
    assert result.full_address is None


@pytest.mark.asyncio
async def test_resolve_transport_error_degrades(caplog):
    """Test connection failures are logged and swallowed."""

    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    geocoder = make_geocoder(handler)
    result = await geocoder.resolve(41.31, 69.28)

    assert result.short_address == UNKNOWN_LOCATION
    assert result.degraded
    assert "Reverse geocoding failed" in caplog.text


@pytest.mark.asyncio
async def test_resolve_on_closed_client_degrades():
    """Test a closed HTTP client does not leak its RuntimeError."""
    geocoder = make_geocoder(lambda request: httpx.Response(200, json={}))
    await geocoder.aclose()

    result = await geocoder.resolve(41.31, 69.28)

    assert result == GeocodeResult.unknown()


@pytest.mark.asyncio
async def test_resolve_invalid_url_degrades():
    """Test a malformed base URL degrades instead of raising."""
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={}))
    )
    geocoder = NominatimGeocoder(
        base_url="http://[invalid", user_agent="AppointmentBotTests/1.0", client=client
    )

    result = await geocoder.resolve(41.31, 69.28)

    assert result.degraded
    await client.aclose()


def test_unknown_result():
    result = GeocodeResult.unknown()
    assert result.short_address == "Unknown location"
    assert result.full_address is None
