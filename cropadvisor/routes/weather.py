"""Weather and location lookup routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request, status

from cropadvisor.schemas.weather import Location, WeatherResponse
from cropadvisor.services.geocoding_service import GeocodingService
from cropadvisor.services.weather_service import WeatherProviderError, WeatherService

router = APIRouter(tags=["weather"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, WeatherProviderError):
		return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="weather failure")


@router.get("/weather", response_model=WeatherResponse)
async def get_weather(
	request: Request,
	latitude: float = Query(ge=-90, le=90),
	longitude: float = Query(ge=-180, le=180),
	timezone: str = Query(default="auto", max_length=64),
) -> WeatherResponse:
	service = WeatherService(getattr(request.app.state, "redis", None))
	try:
		report, cached = await service.get_weather_cached(latitude, longitude, timezone)
		return WeatherResponse(cached=cached, weather=report)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/locations/search", response_model=list[Location])
async def search_locations(q: str = Query(max_length=200)) -> list[Location]:
	try:
		return await GeocodingService().search(q)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/locations/reverse", response_model=Location)
async def reverse_location(
	latitude: float = Query(ge=-90, le=90),
	longitude: float = Query(ge=-180, le=180),
) -> Location:
	try:
		location = await GeocodingService().reverse(latitude, longitude)
		if location is None:
			raise LookupError(f"No address found at {latitude},{longitude}")
		return location
	except Exception as exc:
		raise _map_error(exc) from exc
