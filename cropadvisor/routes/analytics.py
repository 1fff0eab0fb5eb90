"""Weather history analytics routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, Request, status

from cropadvisor.models.enums import ChartMetricEnum
from cropadvisor.schemas.analytics import ChartSeries, HistoryResponse, IrrigationInsights, WeatherTrends
from cropadvisor.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["analytics"])

Days = Annotated[int, Query(ge=1, le=30)]


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="analytics failure")


@router.get("/history", response_model=HistoryResponse)
async def get_history(request: Request, days: Days = 7) -> HistoryResponse:
	service = AnalyticsService(getattr(request.app.state, "redis", None))
	try:
		return await service.history(days)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/charts/{metric}", response_model=ChartSeries)
async def get_chart(metric: ChartMetricEnum, request: Request, days: Days = 7) -> ChartSeries:
	service = AnalyticsService(getattr(request.app.state, "redis", None))
	try:
		return await service.chart(metric, days)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/irrigation", response_model=IrrigationInsights)
async def get_irrigation(request: Request, days: Days = 7) -> IrrigationInsights:
	service = AnalyticsService(getattr(request.app.state, "redis", None))
	try:
		result = await service.irrigation(days)
		if result is None:
			raise LookupError("No weather history recorded yet")
		return result
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/trends", response_model=WeatherTrends)
async def get_trends(request: Request, days: Days = 7) -> WeatherTrends:
	service = AnalyticsService(getattr(request.app.state, "redis", None))
	try:
		result = await service.trends(days)
		if result is None:
			raise LookupError("No weather history recorded yet")
		return result
	except Exception as exc:
		raise _map_error(exc) from exc
