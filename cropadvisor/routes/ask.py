"""Farming assistant route."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request, status

from cropadvisor.models.enums import AskLanguageEnum
from cropadvisor.schemas.ask import AskRequest, AskResponse, ExamplePromptsResponse
from cropadvisor.schemas.weather import Location
from cropadvisor.services.geocoding_service import GeocodingService
from cropadvisor.services.llm_service import LLMService, LLMServiceError, example_prompts
from cropadvisor.services.weather_service import WeatherProviderError, WeatherService

router = APIRouter(prefix="/ask", tags=["ask"])

_logger = logging.getLogger("cropadvisor.ask")


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, (LLMServiceError, WeatherProviderError)):
		return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="ask failure")


async def _resolve_location(service: WeatherService, latitude: float, longitude: float) -> Location | None:
	"""Location stored with the cached weather, else a reverse lookup."""
	location = await service.cached_location(latitude, longitude)
	if location is not None:
		return location
	try:
		return await GeocodingService().reverse(latitude, longitude)
	except WeatherProviderError as exc:
		# the answer only loses its location line
		_logger.warning("ask_location_unresolved", extra={"error": str(exc)})
		return None


@router.post("", response_model=AskResponse)
async def ask(payload: AskRequest, request: Request) -> AskResponse:
	try:
		weather = None
		location = None
		if payload.latitude is not None and payload.longitude is not None:
			service = WeatherService(getattr(request.app.state, "redis", None))
			location = await _resolve_location(service, payload.latitude, payload.longitude)
			weather, _cached = await service.get_weather_cached(
				payload.latitude,
				payload.longitude,
				location=location,
			)
		return await LLMService().ask(
			payload.question,
			payload.language,
			crop_type=payload.crop_type,
			weather=weather,
			location=location,
			history=payload.history,
		)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/prompts", response_model=ExamplePromptsResponse)
async def get_example_prompts(language: AskLanguageEnum = AskLanguageEnum.en) -> ExamplePromptsResponse:
	return ExamplePromptsResponse(language=language, prompts=example_prompts(language))
