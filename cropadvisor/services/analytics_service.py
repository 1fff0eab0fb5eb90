"""Rolling daily weather history and the chart/trend views derived from it."""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Sequence

from redis.asyncio import Redis

from cropadvisor.config import get_settings
from cropadvisor.core.numeric import round_half_up
from cropadvisor.models.enums import ChartMetricEnum
from cropadvisor.schemas.analytics import (
	ChartPoint,
	ChartSeries,
	DataPoint,
	HistoryResponse,
	IrrigationInsights,
	WeatherTrends,
)
from cropadvisor.schemas.insights import Insights
from cropadvisor.schemas.weather import WeatherReport

HISTORY_KEY = "analytics:history"
# average daily rain below this suggests supplemental irrigation
IRRIGATION_NEEDED_AVG_MM = 5

_logger = logging.getLogger("cropadvisor.analytics")

_METRIC_FIELDS: dict[ChartMetricEnum, str] = {
	ChartMetricEnum.temperature: "temperature",
	ChartMetricEnum.humidity: "humidity",
	ChartMetricEnum.wind_speed: "wind_speed",
	ChartMetricEnum.rain_probability: "rain_probability",
	ChartMetricEnum.crop_risk: "crop_risk_score",
}


def _one_decimal(value: float) -> float:
	return round_half_up(value * 10) / 10


def build_data_point(report: WeatherReport, insights: Insights | None, day: dt.date) -> DataPoint:
	current = report.current
	return DataPoint(
		date=day,
		temperature=current.temperature,
		humidity=current.humidity,
		wind_speed=current.wind_speed,
		precipitation=current.precipitation,
		rain_probability=report.forecast[0].rain_probability if report.forecast else 0.0,
		uv_index=current.uv_index,
		crop_risk_score=insights.crop_loss_risk if insights is not None else None,
	)


def upsert_point(points: Sequence[DataPoint], point: DataPoint, max_days: int) -> list[DataPoint]:
	"""Replace the same-day entry (or append), sort by date, keep the newest ``max_days``."""
	by_date = {item.date: item for item in points}
	existing = by_date.get(point.date)
	if existing is not None and point.crop_risk_score is None:
		point = point.model_copy(update={"crop_risk_score": existing.crop_risk_score})
	by_date[point.date] = point
	ordered = sorted(by_date.values(), key=lambda item: item.date)
	return ordered[-max_days:]


def history_range(points: Sequence[DataPoint], days: int, today: dt.date) -> list[DataPoint]:
	cutoff = today - dt.timedelta(days=days)
	return [item for item in points if item.date >= cutoff]


def chart_series(points: Sequence[DataPoint], metric: ChartMetricEnum, days: int) -> ChartSeries:
	field = _METRIC_FIELDS[metric]
	chart_points: list[ChartPoint] = []
	for item in points:
		value = getattr(item, field)
		if value is None:
			# only the crop risk score is optional; days without it are skipped
			continue
		chart_points.append(ChartPoint(date=f"{item.date:%b} {item.date.day}", value=value))
	return ChartSeries(metric=metric, days=days, points=chart_points)


def irrigation_insights(points: Sequence[DataPoint]) -> IrrigationInsights | None:
	if not points:
		return None

	total = sum(item.precipitation for item in points)
	average = total / len(points)
	rainy_days = sum(1 for item in points if item.precipitation > 0)
	avg_probability = sum(item.rain_probability for item in points) / len(points)

	return IrrigationInsights(
		total_precipitation=_one_decimal(total),
		avg_precipitation=_one_decimal(average),
		days_with_rain=rainy_days,
		avg_rain_probability=round_half_up(avg_probability),
		irrigation_needed=average < IRRIGATION_NEEDED_AVG_MM,
	)


def _positive_mean(values: Sequence[float]) -> float:
	recorded = [value for value in values if value > 0]
	return sum(recorded) / len(recorded) if recorded else 0.0


def weather_trends(points: Sequence[DataPoint]) -> WeatherTrends | None:
	"""Averages over recorded (non-zero) values plus a per-point drift."""
	if not points:
		return None

	count = len(points)
	temp_trend = (points[-1].temperature - points[0].temperature) / count if count >= 2 else 0.0
	humidity_trend = (points[-1].humidity - points[0].humidity) / count if count >= 2 else 0.0

	return WeatherTrends(
		avg_temperature=_one_decimal(_positive_mean([item.temperature for item in points])),
		avg_humidity=_one_decimal(_positive_mean([item.humidity for item in points])),
		avg_wind_speed=_one_decimal(_positive_mean([item.wind_speed for item in points])),
		temp_trend=_one_decimal(temp_trend),
		humidity_trend=_one_decimal(humidity_trend),
		data_points=count,
	)


class AnalyticsService:
	def __init__(self, redis_client: Redis | None = None):
		self.redis_client = redis_client
		self.settings = get_settings()

	async def load_points(self) -> list[DataPoint]:
		if self.redis_client is None:
			return []
		raw = await self.redis_client.hgetall(HISTORY_KEY)
		points = [DataPoint.model_validate_json(value) for value in raw.values()]
		return sorted(points, key=lambda item: item.date)

	async def record(
		self,
		report: WeatherReport,
		insights: Insights | None = None,
		today: dt.date | None = None,
	) -> DataPoint:
		"""Store today's data point and prune the history to the retention window."""
		point = build_data_point(report, insights, today or dt.date.today())
		if self.redis_client is None:
			_logger.info("analytics_record_skipped", extra={"reason": "no_cache_backend"})
			return point

		existing = await self.load_points()
		kept = upsert_point(existing, point, self.settings.analytics_history_days)
		kept_dates = {item.date.isoformat() for item in kept}
		stale = [item.date.isoformat() for item in existing if item.date.isoformat() not in kept_dates]

		await self.redis_client.hset(
			HISTORY_KEY,
			mapping={item.date.isoformat(): item.model_dump_json(by_alias=True) for item in kept},
		)
		if stale:
			await self.redis_client.hdel(HISTORY_KEY, *stale)
		# a point older than the retention window is pruned right away
		return next((item for item in kept if item.date == point.date), point)

	async def history(self, days: int = 7, today: dt.date | None = None) -> HistoryResponse:
		points = history_range(await self.load_points(), days, today or dt.date.today())
		return HistoryResponse(days=days, points=points)

	async def chart(self, metric: ChartMetricEnum, days: int = 7, today: dt.date | None = None) -> ChartSeries:
		points = history_range(await self.load_points(), days, today or dt.date.today())
		return chart_series(points, metric, days)

	async def irrigation(self, days: int = 7, today: dt.date | None = None) -> IrrigationInsights | None:
		points = history_range(await self.load_points(), days, today or dt.date.today())
		return irrigation_insights(points)

	async def trends(self, days: int = 7, today: dt.date | None = None) -> WeatherTrends | None:
		points = history_range(await self.load_points(), days, today or dt.date.today())
		return weather_trends(points)
