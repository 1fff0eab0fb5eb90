"""Crop advisory routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request, status

from cropadvisor.core import compute_insights
from cropadvisor.models.crops import CROP_PROFILES, CropProfile, get_profile
from cropadvisor.schemas.insights import Insights, InsightsRequest, LiveInsightsResponse
from cropadvisor.schemas.weather import coordinate_key
from cropadvisor.services.analytics_service import AnalyticsService
from cropadvisor.services.weather_service import WeatherProviderError, WeatherService

router = APIRouter(tags=["insights"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, WeatherProviderError):
		return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="insights failure")


def _require_profile(crop_type: str) -> CropProfile:
	profile = get_profile(crop_type)
	if profile is None:
		raise LookupError(f"Unknown crop type {crop_type!r}")
	return profile


@router.get("/crops", response_model=dict[str, CropProfile])
async def list_crops() -> dict[str, CropProfile]:
	return {str(crop): profile for crop, profile in CROP_PROFILES.items()}


@router.post("/insights", response_model=Insights)
async def create_insights(payload: InsightsRequest) -> Insights:
	try:
		_require_profile(payload.crop_type)
		insights = compute_insights(payload.crop_type, payload.current, payload.forecast)
		if insights is None:
			raise ValueError("insufficient weather input")
		return insights
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/insights/{crop_type}", response_model=LiveInsightsResponse)
async def get_live_insights(
	crop_type: str,
	request: Request,
	latitude: float = Query(ge=-90, le=90),
	longitude: float = Query(ge=-180, le=180),
	timezone: str = Query(default="auto", max_length=64),
) -> LiveInsightsResponse:
	"""Fetch (or reuse) the forecast for a point and run the advisory engine on it."""
	redis = getattr(request.app.state, "redis", None)
	try:
		_require_profile(crop_type)
		report, cached = await WeatherService(redis).get_weather_cached(latitude, longitude, timezone)
		insights = compute_insights(crop_type, report.current, report.forecast)
		if insights is None:
			raise ValueError("insufficient weather input")
		await AnalyticsService(redis).record(report, insights)
		return LiveInsightsResponse(
			location_key=coordinate_key(latitude, longitude),
			cached=cached,
			insights=insights,
		)
	except Exception as exc:
		raise _map_error(exc) from exc
