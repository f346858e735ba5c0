"""
Reverse geocoding through OpenStreetMap Nominatim.
Turns device coordinates into a readable address for the booking summary.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from config import settings
from utils.exceptions import GeocodeError

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Unknown location"

_REVERSE_PATH = "/reverse"


@dataclass(frozen=True)
class GeocodeResult:
    """
    Outcome of a reverse geocode lookup.

    ``degraded`` is True when the lookup failed and the result only carries
    the fallback short address.
    """

    short_address: str
    full_address: Optional[str] = None
    degraded: bool = False

    @classmethod
    def unknown(cls) -> "GeocodeResult":
        return cls(short_address=UNKNOWN_LOCATION, full_address=None, degraded=True)


class NominatimGeocoder:
    """
    Best-effort Nominatim client.

    One request per call: no retries, no caching. ``resolve`` never raises;
    failures come back as ``GeocodeResult.unknown()``.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the geocoder.

        Args:
            base_url: Nominatim root URL (defaults to GEOCODER_URL from settings)
            user_agent: User-Agent header; Nominatim rejects anonymous clients
            timeout: Request timeout in seconds
            client: Pre-built httpx client (tests inject one with a mock transport)
        """
        self.base_url = (base_url or settings.geocoder_url).rstrip("/")
        self.user_agent = user_agent or settings.geocoder_user_agent
        self.client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.geocoder_timeout
        )

    async def aclose(self) -> None:
        """Close HTTP client."""
        await self.client.aclose()

    async def resolve(self, latitude: float, longitude: float) -> GeocodeResult:
        """Resolve coordinates to a short name and a full description."""
        try:
            return await self._reverse(latitude, longitude)
        except GeocodeError as e:
            logger.warning(f"Reverse geocoding failed for ({latitude}, {longitude}): {e}")
            return GeocodeResult.unknown()

    async def _reverse(self, latitude: float, longitude: float) -> GeocodeResult:
        params = {
            "format": "json",
            "lat": latitude,
            "lon": longitude,
            "zoom": 18,
            "addressdetails": 1,
        }
        try:
            response = await self.client.get(
                f"{self.base_url}{_REVERSE_PATH}",
                params=params,
                headers={"User-Agent": self.user_agent},
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise GeocodeError(f"request failed: {e}") from e
        except RuntimeError as e:
            # httpx raises this when the client has already been closed
            raise GeocodeError(f"client unavailable: {e}") from e
        except ValueError as e:
            raise GeocodeError(f"invalid JSON payload: {e}") from e

        if not isinstance(data, dict):
            raise GeocodeError("unexpected payload shape")

        full_address = data.get("display_name")
        if not full_address:
            # Nominatim answers {"error": "Unable to geocode"} for open sea etc.
            raise GeocodeError(data.get("error") or "no display_name in response")

        return GeocodeResult(
            short_address=data.get("name") or UNKNOWN_LOCATION,
            full_address=full_address,
        )
