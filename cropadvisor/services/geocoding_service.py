"""Location search (Open-Meteo geocoding) and reverse lookup (Nominatim)."""

from __future__ import annotations

from typing import Any

from cropadvisor.schemas.weather import Location
from cropadvisor.services.weather_service import ProviderClient

MIN_QUERY_LENGTH = 2
SEARCH_RESULT_COUNT = 10


def display_name(name: str, admin1: str | None, country: str) -> str:
	return f"{name}{f', {admin1}' if admin1 else ''}, {country}"


def location_from_search_result(item: dict[str, Any]) -> Location:
	name = str(item.get("name") or "Unknown Location")
	country = str(item.get("country") or "Unknown Country")
	admin1 = str(item.get("admin1") or "")
	return Location(
		id=str(item.get("id") or f"{item.get('latitude')},{item.get('longitude')}"),
		name=name,
		country=country,
		admin1=admin1,
		latitude=float(item["latitude"]),
		longitude=float(item["longitude"]),
		elevation=item.get("elevation"),
		timezone=str(item.get("timezone") or "auto"),
		country_code=str(item.get("country_code") or ""),
		display_name=display_name(name, admin1, country),
	)


def location_from_reverse_result(payload: dict[str, Any], latitude: float, longitude: float) -> Location | None:
	address = payload.get("address") if isinstance(payload, dict) else None
	if not isinstance(address, dict) or not address:
		return None

	name = next(
		(
			address[field]
			for field in ("city", "town", "village", "municipality", "county")
			if address.get(field)
		),
		"Unknown Location",
	)
	admin1 = next(
		(address[field] for field in ("state", "region", "province") if address.get(field)),
		"",
	)
	country = address.get("country") or "Unknown Country"
	return Location(
		id=str(payload.get("place_id") or f"{latitude},{longitude}"),
		name=name,
		country=country,
		admin1=admin1,
		latitude=latitude,
		longitude=longitude,
		timezone="auto",
		country_code=str(address.get("country_code") or "").upper(),
		display_name=display_name(name, admin1, country),
	)


class GeocodingService(ProviderClient):
	async def search(self, query: str) -> list[Location]:
		"""Cities and villages matching ``query``; short queries return nothing."""
		term = (query or "").strip()
		if len(term) < MIN_QUERY_LENGTH:
			return []

		params = {
			"name": term,
			"count": SEARCH_RESULT_COUNT,
			"language": "en",
			"format": "json",
		}
		payload = await self._get_json(self.settings.openmeteo_geocoding_url, params, op="geocoding_search")
		results = payload.get("results") if isinstance(payload, dict) else None
		if not results:
			return []
		return [location_from_search_result(item) for item in results if isinstance(item, dict)]

	async def reverse(self, latitude: float, longitude: float) -> Location | None:
		params = {
			"lat": str(latitude),
			"lon": str(longitude),
			"format": "json",
			"addressdetails": "1",
			"accept-language": "en",
		}
		# Nominatim rejects requests without an identifying User-Agent
		headers = {"User-Agent": self.settings.http_user_agent}
		payload = await self._get_json(
			self.settings.nominatim_reverse_url,
			params,
			op="geocoding_reverse",
			headers=headers,
		)
		return location_from_reverse_result(payload, latitude, longitude)
