"""
Google Places client used to enrich activity locations.

lookup(text) resolves free text to a preview dict (Text Search, then Place
Details). It returns None when Google has no match and raises
PlaceLookupError on timeouts, HTTP failures, non-OK API statuses and
malformed bodies, so callers can choose their own fallback.

search_locations(query) feeds the location autocomplete and never raises:
any upstream failure is logged and an empty list is returned.

Results are cached in Redis when a cache is configured. Cache outages are
logged and otherwise ignored.
"""

import asyncio
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError
from redis.exceptions import RedisError

from app.core.cache import RedisCache
from app.core.config import settings
from app.core.exceptions import PlaceLookupError
from app.core.logger import logger
from app.schemas.places.place import LocationSuggestion, OpeningHours, PlaceDetails

_DETAIL_FIELDS = [
    "place_id",
    "name",
    "formatted_address",
    "rating",
    "user_ratings_total",
    "photos",
    "opening_hours",
    "website",
    "url",
]

# Statuses that mean "the request worked, there is just nothing to return"
_EMPTY_STATUSES = {"ZERO_RESULTS", "NOT_FOUND"}

_MAX_PHOTOS = 5


class PlaceLookupService:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://maps.googleapis.com/maps/api",
        timeout: float = 5.0,
        cache: Optional[RedisCache] = None,
        cache_ttl: int = 3600,
        photo_max_width: int = 400,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._cache = cache
        self._cache_ttl = cache_ttl
        self._photo_max_width = photo_max_width
        self._transport = transport

    # -- public API ---------------------------------------------------------

    async def lookup(self, text: str) -> Optional[Dict[str, Any]]:
        text = (text or "").strip()
        if not text:
            return None
        self._require_key()

        cache_key = RedisCache.build_key("places", "lookup", text)
        cached = await self._cache_get(cache_key)
        if cached:
            return cached

        preview = await self._bounded(self._lookup(text), f"lookup '{text}'")
        if preview:
            await self._cache_set(cache_key, preview)
        return preview

    async def details(self, place_id: str) -> Optional[Dict[str, Any]]:
        place_id = (place_id or "").strip()
        if not place_id:
            return None
        self._require_key()

        cache_key = RedisCache.build_key("places", "details", place_id)
        cached = await self._cache_get(cache_key)
        if cached:
            return cached

        async def _fetch():
            async with self._client() as client:
                return await self._details(client, place_id)

        preview = await self._bounded(_fetch(), f"details '{place_id}'")
        if preview:
            await self._cache_set(cache_key, preview)
        return preview

    async def search_locations(self, query: str) -> List[Dict[str, Any]]:
        query = (query or "").strip()
        if not query or not self._api_key:
            return []

        cache_key = RedisCache.build_key("places", "search", query)
        cached = await self._cache_get(cache_key)
        if cached:
            return cached

        try:
            suggestions = await self._bounded(self._autocomplete(query), f"search '{query}'")
        except PlaceLookupError as e:
            logger.warning(f"⚠️ Location search failed for '{query}': {e}")
            return []

        if suggestions:
            await self._cache_set(cache_key, suggestions)
        return suggestions

    # -- Google calls -------------------------------------------------------

    async def _lookup(self, text: str) -> Optional[Dict[str, Any]]:
        async with self._client() as client:
            data = await self._request(client, "place/textsearch/json", {"query": text})
            results = data.get("results") or []
            if not results:
                logger.info(f"No place found for '{text}'")
                return None
            first = results[0]
            if not isinstance(first, dict) or not first.get("place_id"):
                raise PlaceLookupError("Text search result did not include a place_id")
            return await self._details(client, first["place_id"])

    async def _details(self, client: httpx.AsyncClient, place_id: str) -> Optional[Dict[str, Any]]:
        data = await self._request(
            client,
            "place/details/json",
            {"place_id": place_id, "fields": ",".join(_DETAIL_FIELDS)},
        )
        if data.get("status") in _EMPTY_STATUSES:
            return None
        result = data.get("result")
        if not isinstance(result, dict):
            raise PlaceLookupError("Place details response did not contain a result")
        return self._normalise(result, place_id)

    async def _autocomplete(self, query: str) -> List[Dict[str, Any]]:
        async with self._client() as client:
            data = await self._request(client, "place/autocomplete/json", {"input": query})

        suggestions = []
        for prediction in data.get("predictions") or []:
            if not isinstance(prediction, dict):
                continue
            structured = prediction.get("structured_formatting") or {}
            description = prediction.get("description") or ""
            name = structured.get("main_text") or description
            if not name:
                continue
            suggestions.append(
                LocationSuggestion(
                    place_id=prediction.get("place_id"),
                    name=name,
                    formatted=description,
                    secondary=structured.get("secondary_text") or "",
                ).model_dump()
            )
        return suggestions

    async def _request(self, client: httpx.AsyncClient, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await client.get(
                f"{self._base_url}/{path}",
                params={**params, "key": self._api_key},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise PlaceLookupError(f"Google Places request failed: {e}") from e
        except ValueError as e:
            raise PlaceLookupError("Google Places returned a malformed body") from e

        if not isinstance(data, dict):
            raise PlaceLookupError("Google Places returned a malformed body")

        status = data.get("status")
        if status and status != "OK" and status not in _EMPTY_STATUSES:
            message = data.get("error_message") or status
            raise PlaceLookupError(f"Google Places API error: {message}")
        return data

    # -- helpers ------------------------------------------------------------

    def _normalise(self, result: Dict[str, Any], place_id: str) -> Dict[str, Any]:
        photos = []
        for photo in (result.get("photos") or [])[:_MAX_PHOTOS]:
            if isinstance(photo, dict) and photo.get("photo_reference"):
                photos.append(self._photo_url(photo["photo_reference"]))

        hours = result.get("opening_hours")
        try:
            place = PlaceDetails(
                place_id=result.get("place_id") or place_id,
                name=result.get("name") or "",
                formatted_address=result.get("formatted_address") or result.get("vicinity"),
                rating=result.get("rating"),
                user_ratings_total=result.get("user_ratings_total"),
                photos=photos,
                opening_hours=OpeningHours(**hours) if isinstance(hours, dict) else None,
                website=result.get("website"),
                google_maps_url=result.get("url"),
            )
        except (TypeError, ValidationError) as e:
            raise PlaceLookupError(f"Unexpected place details shape: {e}") from e
        return place.model_dump(exclude_none=True)

    def _photo_url(self, reference: str) -> str:
        return (
            f"{self._base_url}/place/photo?maxwidth={self._photo_max_width}"
            f"&photo_reference={reference}&key={self._api_key}"
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    def _require_key(self):
        if not self._api_key:
            raise PlaceLookupError("GOOGLE_PLACES_API_KEY is not configured")

    async def _bounded(self, coro, what: str):
        try:
            return await asyncio.wait_for(coro, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise PlaceLookupError(f"Place {what} timed out after {self._timeout}s") from e

    async def _cache_get(self, key: str):
        if self._cache is None:
            return None
        try:
            return await self._cache.get(key)
        except RedisError as e:
            logger.warning(f"⚠️ Place cache read failed for {key}: {e}")
            return None

    async def _cache_set(self, key: str, value: Any):
        if self._cache is None:
            return
        try:
            await self._cache.set(key, value, expire=self._cache_ttl)
        except RedisError as e:
            logger.warning(f"⚠️ Place cache write failed for {key}: {e}")


def build_place_lookup(cache: Optional[RedisCache] = None) -> PlaceLookupService:
    return PlaceLookupService(
        api_key=settings.GOOGLE_PLACES_API_KEY,
        base_url=settings.GOOGLE_PLACES_BASE_URL,
        timeout=settings.PLACE_LOOKUP_TIMEOUT_SECONDS,
        cache=cache,
        cache_ttl=settings.PLACE_CACHE_TTL_SECONDS,
        photo_max_width=settings.PLACE_PHOTO_MAX_WIDTH,
    )
