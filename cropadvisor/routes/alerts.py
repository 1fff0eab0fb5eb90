"""Weather and crop alert routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Path, Query, Request, status

from cropadvisor.models.crops import get_profile
from cropadvisor.schemas.alerts import AlertsResponse, DismissResponse
from cropadvisor.schemas.weather import coordinate_key
from cropadvisor.services.alerts_service import AlertsService
from cropadvisor.services.weather_service import WeatherProviderError, WeatherService

router = APIRouter(prefix="/alerts", tags=["alerts"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, WeatherProviderError):
		return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	if isinstance(exc, RuntimeError):
		return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="alerts failure")


@router.get("", response_model=AlertsResponse)
async def get_alerts(
	request: Request,
	latitude: float = Query(ge=-90, le=90),
	longitude: float = Query(ge=-180, le=180),
	crop_type: str | None = Query(default=None, max_length=50),
	timezone: str = Query(default="auto", max_length=64),
) -> AlertsResponse:
	redis = getattr(request.app.state, "redis", None)
	try:
		if crop_type is not None and get_profile(crop_type) is None:
			raise LookupError(f"Unknown crop type {crop_type!r}")
		report, _cached = await WeatherService(redis).get_weather_cached(latitude, longitude, timezone)
		return await AlertsService(redis).get_alerts(report, coordinate_key(latitude, longitude), crop_type)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.post("/{alert_id}/dismiss", response_model=DismissResponse)
async def dismiss_alert(
	request: Request,
	alert_id: str = Path(min_length=1, max_length=100),
) -> DismissResponse:
	service = AlertsService(getattr(request.app.state, "redis", None))
	try:
		dismissed = await service.dismiss(alert_id)
		return DismissResponse(alert_id=alert_id, dismissed=dismissed)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.delete("/dismissed", status_code=status.HTTP_204_NO_CONTENT)
async def clear_dismissed(request: Request) -> None:
	service = AlertsService(getattr(request.app.state, "redis", None))
	try:
		await service.clear_dismissed()
	except Exception as exc:
		raise _map_error(exc) from exc
