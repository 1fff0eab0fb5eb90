"""Pydantic schemas for normalized weather, forecast and location payloads."""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import Field, field_validator

from cropadvisor.schemas.base import CamelModel, FrozenCamelModel


def _none_to_zero(value: Any) -> Any:
	return 0 if value is None else value


class WeatherSnapshot(FrozenCamelModel):
	"""Current conditions in °C, %, mm and km/h."""

	temperature: float
	humidity: float = Field(ge=0, le=100)
	precipitation: float = Field(default=0.0, ge=0)
	wind_speed: float = Field(default=0.0, ge=0)
	uv_index: float = Field(default=0.0, ge=0)

	feels_like: float | None = None
	rain: float = 0.0
	weather_code: int = 0
	cloud_cover: float = 0.0
	wind_direction: float = 0.0
	is_day: bool = True
	condition: str = "clear"
	time: dt.datetime | None = None

	@field_validator(
		"precipitation",
		"wind_speed",
		"uv_index",
		"rain",
		"weather_code",
		"cloud_cover",
		"wind_direction",
		mode="before",
	)
	@classmethod
	def _default_missing(cls, value: Any) -> Any:
		return _none_to_zero(value)


class ForecastDay(FrozenCamelModel):
	"""One forecast day; missing numeric fields read as zero."""

	date: dt.date | None = None
	day_name: str | None = None
	max_temp: float = 0.0
	min_temp: float = 0.0
	precipitation: float = Field(default=0.0, ge=0)
	rain_probability: float = Field(default=0.0, ge=0, le=100)
	wind_speed: float = Field(default=0.0, ge=0)

	weather_code: int = 0
	condition: str = "clear"
	rain: float = 0.0
	wind_direction: float = 0.0
	uv_index: float = 0.0
	sunrise: dt.datetime | None = None
	sunset: dt.datetime | None = None

	@field_validator(
		"max_temp",
		"min_temp",
		"precipitation",
		"rain_probability",
		"wind_speed",
		"weather_code",
		"rain",
		"wind_direction",
		"uv_index",
		mode="before",
	)
	@classmethod
	def _default_missing(cls, value: Any) -> Any:
		return _none_to_zero(value)


class WeatherReport(CamelModel):
	current: WeatherSnapshot
	forecast: list[ForecastDay] = Field(default_factory=list)
	sunrise: dt.datetime | None = None
	sunset: dt.datetime | None = None
	timezone: str = "UTC"
	timezone_abbreviation: str = "UTC"


class Location(CamelModel):
	id: str
	name: str
	country: str
	admin1: str = ""
	latitude: float = Field(ge=-90, le=90)
	longitude: float = Field(ge=-180, le=180)
	elevation: float | None = None
	timezone: str = "auto"
	country_code: str = ""
	display_name: str

	@property
	def cache_key(self) -> str:
		return coordinate_key(self.latitude, self.longitude)


class WeatherResponse(CamelModel):
	location: Location | None = None
	cached: bool
	weather: WeatherReport


def coordinate_key(latitude: float, longitude: float) -> str:
	return f"{latitude:.4f},{longitude:.4f}"


class CachedWeather(CamelModel):
	version: str
	cached_at: dt.datetime
	location: Location | None = None
	weather_data: WeatherReport
