"""Mapbox geocoding client for delivery address autocomplete."""

import logging
import re
from typing import Any, Optional
from urllib.parse import quote

import httpx

from app.schemas.address import AddressDetails, AddressSuggestion
from app.services.errors import RemoteStoreError

logger = logging.getLogger(__name__)

# Searches shorter than this return no suggestions
MIN_QUERY_LENGTH = 3

_STATE_ZIP_RE = re.compile(r"([A-Z]{2})\s*(\d{5})")

_DEFAULT_BASE_URL = "https://api.mapbox.com/geocoding/v5/mapbox.places"


class AddressClient:
    """Address search against the Mapbox forward geocoding API.

    The access token is fixed at construction; pass ``http_client`` to share
    a connection pool or to stub the API in tests.
    """

    def __init__(
        self,
        token: str,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: str = _DEFAULT_BASE_URL,
        country: str = "US",
        limit: int = 5,
    ) -> None:
        if not token:
            raise ValueError("A Mapbox access token is required")
        self._token = token
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(connect=5.0, read=10.0, write=5.0, pool=5.0),
        )
        self._owns_client = http_client is None
        self._base_url = base_url.rstrip("/")
        self._country = country
        self._limit = limit

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def search_addresses(self, text: str) -> list[AddressSuggestion]:
        """
        Get address suggestions for partial user input.

        Args:
            text: What the user has typed so far

        Returns:
            Up to ``limit`` suggestions; empty for input under 3 characters

        Raises:
            RemoteStoreError: If the geocoding API fails or is unreachable
        """
        text = (text or "").strip()
        if len(text) < MIN_QUERY_LENGTH:
            return []

        url = f"{self._base_url}/{quote(text, safe='')}.json"
        params = {
            "access_token": self._token,
            "country": self._country,
            "types": "address",
            "limit": str(self._limit),
            "autocomplete": "true",
        }

        try:
            resp = await self._client.get(url, params=params)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("Mapbox API error: HTTP %d", exc.response.status_code)
            raise RemoteStoreError(
                "Failed to search addresses. Please try again."
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Mapbox request failed: %s", exc)
            raise RemoteStoreError(
                "Failed to search addresses. Please try again."
            ) from exc

        try:
            features = resp.json().get("features") or []
        except ValueError as exc:
            logger.error("Mapbox returned a non-JSON body: %s", exc)
            raise RemoteStoreError(
                "Failed to search addresses. Please try again."
            ) from exc
        return [_feature_to_suggestion(feature) for feature in features]


def _feature_to_suggestion(feature: dict[str, Any]) -> AddressSuggestion:
    place_name = feature.get("place_name", "")
    parts = place_name.split(", ")
    return AddressSuggestion(
        id=str(feature.get("id", "")),
        place_name=place_name,
        main_text=parts[0] or place_name,
        secondary_text=", ".join(parts[1:]),
        context=feature.get("context") or [],
    )


def parse_suggestion(suggestion: AddressSuggestion) -> AddressDetails:
    """
    Split a suggestion into street, city, state, zip and country.

    Components come from the suggestion's context entries; when city or
    state is missing there, the place name is parsed as
    ``"street, city, ST 12345, country"``.
    """
    street = suggestion.main_text
    city = state = zip_code = ""
    country = "United States"

    for entry in suggestion.context:
        entry_id = entry.get("id", "")
        if entry_id.startswith("postcode."):
            zip_code = entry.get("text", "")
        elif entry_id.startswith("place."):
            city = entry.get("text", "")
        elif entry_id.startswith("region."):
            short_code = entry.get("short_code")
            state = short_code.replace("US-", "") if short_code else entry.get("text", "")
        elif entry_id.startswith("country."):
            country = entry.get("text", "")

    if not city or not state:
        parts = suggestion.place_name.split(", ")
        if len(parts) >= 3:
            street, city = parts[0], parts[1]
            m = _STATE_ZIP_RE.search(parts[2])
            if m:
                state, zip_code = m.group(1), m.group(2)

    return AddressDetails(
        street=street.strip(),
        city=city.strip(),
        state=state.strip(),
        zip_code=zip_code.strip(),
        country=country.strip(),
        formatted_address=suggestion.place_name,
    )
