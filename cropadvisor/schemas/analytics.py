"""Pydantic schemas for weather history analytics."""

from __future__ import annotations

import datetime as dt

from pydantic import Field

from cropadvisor.models.enums import ChartMetricEnum
from cropadvisor.schemas.base import CamelModel


class DataPoint(CamelModel):
	"""One calendar day of recorded conditions."""

	date: dt.date
	temperature: float = 0.0
	humidity: float = 0.0
	wind_speed: float = 0.0
	precipitation: float = 0.0
	rain_probability: float = 0.0
	uv_index: float = 0.0
	crop_risk_score: int | None = None


class HistoryResponse(CamelModel):
	days: int
	points: list[DataPoint] = Field(default_factory=list)


class ChartPoint(CamelModel):
	date: str
	value: float


class ChartSeries(CamelModel):
	metric: ChartMetricEnum
	days: int
	points: list[ChartPoint] = Field(default_factory=list)


class IrrigationInsights(CamelModel):
	total_precipitation: float
	avg_precipitation: float
	days_with_rain: int
	avg_rain_probability: int
	irrigation_needed: bool


class WeatherTrends(CamelModel):
	avg_temperature: float
	avg_humidity: float
	avg_wind_speed: float
	temp_trend: float
	humidity_trend: float
	data_points: int
