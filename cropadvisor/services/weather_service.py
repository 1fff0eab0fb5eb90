"""Open-Meteo weather client — fetch, normalize and cache-first lookup."""

from __future__ import annotations

import datetime as dt
import logging
import time
from typing import Any

import httpx
from redis.asyncio import Redis

from cropadvisor.config import get_settings
from cropadvisor.core.numeric import round_half_up
from cropadvisor.schemas.weather import ForecastDay, Location, WeatherReport, WeatherSnapshot, coordinate_key
from cropadvisor.services.cache_service import WeatherCache

_logger = logging.getLogger("cropadvisor.weather")

CURRENT_FIELDS = (
	"temperature_2m",
	"relative_humidity_2m",
	"apparent_temperature",
	"precipitation",
	"rain",
	"weather_code",
	"cloud_cover",
	"wind_speed_10m",
	"wind_direction_10m",
	"uv_index",
	"is_day",
)

DAILY_FIELDS = (
	"weather_code",
	"temperature_2m_max",
	"temperature_2m_min",
	"precipitation_sum",
	"rain_sum",
	"precipitation_probability_max",
	"wind_speed_10m_max",
	"wind_direction_10m_dominant",
	"uv_index_max",
	"sunrise",
	"sunset",
)

# WMO 4677 present-weather codes collapsed to display conditions
WEATHER_CONDITIONS: dict[int, str] = {
	0: "clear",
	1: "clear",
	2: "cloudy",
	3: "cloudy",
	45: "foggy",
	48: "foggy",
	**{code: "rainy" for code in (51, 53, 55, 56, 57, 61, 63, 65, 66, 67, 80, 81, 82)},
	**{code: "snowy" for code in (71, 73, 75, 77, 85, 86)},
	95: "stormy",
	96: "stormy",
	99: "stormy",
}

FORECAST_HORIZON_DAYS = 5


class WeatherProviderError(RuntimeError):
	"""Raised when an upstream weather or geocoding provider call fails."""


def weather_condition(code: int | None) -> str:
	return WEATHER_CONDITIONS.get(int(code or 0), "clear")


def _number(value: Any) -> float:
	return float(value) if value is not None else 0.0


def _daily_value(daily: dict[str, Any], field: str, index: int) -> Any:
	series = daily.get(field)
	if not isinstance(series, list) or index >= len(series):
		return None
	return series[index]


def _normalize_current(current: dict[str, Any]) -> WeatherSnapshot:
	code = int(current.get("weather_code") or 0)
	return WeatherSnapshot(
		temperature=round_half_up(_number(current.get("temperature_2m"))),
		feels_like=round_half_up(_number(current.get("apparent_temperature"))),
		humidity=_number(current.get("relative_humidity_2m")),
		precipitation=_number(current.get("precipitation")),
		rain=_number(current.get("rain")),
		weather_code=code,
		cloud_cover=_number(current.get("cloud_cover")),
		wind_speed=round_half_up(_number(current.get("wind_speed_10m"))),
		wind_direction=_number(current.get("wind_direction_10m")),
		uv_index=round_half_up(_number(current.get("uv_index"))),
		is_day=current.get("is_day") == 1,
		condition=weather_condition(code),
		time=current.get("time"),
	)


def _normalize_day(daily: dict[str, Any], index: int) -> ForecastDay:
	day = dt.date.fromisoformat(str(daily["time"][index])[:10])
	code = int(_daily_value(daily, "weather_code", index) or 0)
	return ForecastDay(
		date=day,
		day_name=day.strftime("%a"),
		max_temp=round_half_up(_number(_daily_value(daily, "temperature_2m_max", index))),
		min_temp=round_half_up(_number(_daily_value(daily, "temperature_2m_min", index))),
		weather_code=code,
		condition=weather_condition(code),
		precipitation=_number(_daily_value(daily, "precipitation_sum", index)),
		rain=_number(_daily_value(daily, "rain_sum", index)),
		rain_probability=_number(_daily_value(daily, "precipitation_probability_max", index)),
		wind_speed=round_half_up(_number(_daily_value(daily, "wind_speed_10m_max", index))),
		wind_direction=_number(_daily_value(daily, "wind_direction_10m_dominant", index)),
		uv_index=round_half_up(_number(_daily_value(daily, "uv_index_max", index))),
		sunrise=_daily_value(daily, "sunrise", index),
		sunset=_daily_value(daily, "sunset", index),
	)


def normalize_weather_payload(payload: dict[str, Any]) -> WeatherReport:
	"""Turn a raw Open-Meteo forecast response into a ``WeatherReport``.

	Daily index 0 is today and only feeds sunrise/sunset; the forecast is
	built from the following days, up to five of them.
	"""
	current = payload.get("current") if isinstance(payload, dict) else None
	daily = payload.get("daily") if isinstance(payload, dict) else None
	if not isinstance(current, dict) or not isinstance(daily, dict):
		raise ValueError("weather payload is missing current or daily data")

	times = daily.get("time")
	if not isinstance(times, list) or len(times) < 2:
		raise ValueError("weather payload has an invalid daily time array")

	forecast = [
		_normalize_day(daily, index)
		for index in range(1, min(FORECAST_HORIZON_DAYS, len(times) - 1) + 1)
	]

	return WeatherReport(
		current=_normalize_current(current),
		forecast=forecast,
		sunrise=_daily_value(daily, "sunrise", 0),
		sunset=_daily_value(daily, "sunset", 0),
		timezone=str(payload.get("timezone") or "UTC"),
		timezone_abbreviation=str(payload.get("timezone_abbreviation") or "UTC"),
	)


class ProviderClient:
	"""Shared JSON GET with timing logs and provider error wrapping."""

	def __init__(self, http_client: httpx.AsyncClient | None = None):
		self.http_client = http_client
		self.settings = get_settings()

	async def _get_json(
		self,
		url: str,
		params: dict[str, Any],
		*,
		op: str,
		headers: dict[str, str] | None = None,
	) -> Any:
		start = time.perf_counter()
		try:
			if self.http_client is not None:
				response = await self.http_client.get(url, params=params, headers=headers)
			else:
				async with httpx.AsyncClient(timeout=self.settings.http_timeout_seconds) as client:
					response = await client.get(url, params=params, headers=headers)
			response.raise_for_status()
			payload = response.json()
		except (httpx.HTTPError, ValueError) as exc:
			_provider_timing(op, start, False, str(exc))
			raise WeatherProviderError(f"{op} request failed: {exc}") from exc

		_provider_timing(op, start, True)
		return payload


class WeatherService(ProviderClient):
	def __init__(self, redis_client: Redis | None = None, http_client: httpx.AsyncClient | None = None):
		super().__init__(http_client)
		self.redis_client = redis_client
		self.cache = WeatherCache(redis_client)

	async def get_weather(self, latitude: float, longitude: float, timezone: str = "auto") -> WeatherReport:
		params = {
			"latitude": str(latitude),
			"longitude": str(longitude),
			"timezone": timezone,
			"current": ",".join(CURRENT_FIELDS),
			"daily": ",".join(DAILY_FIELDS),
			"forecast_days": self.settings.forecast_days,
			"timeformat": "iso8601",
		}
		payload = await self._get_json(self.settings.openmeteo_forecast_url, params, op="forecast")
		try:
			return normalize_weather_payload(payload)
		except ValueError as exc:
			_logger.error("weather_payload_invalid", extra={"error": str(exc)})
			raise WeatherProviderError(f"Failed to format weather: {exc}") from exc

	async def get_weather_cached(
		self,
		latitude: float,
		longitude: float,
		timezone: str = "auto",
		location: Location | None = None,
	) -> tuple[WeatherReport, bool]:
		"""Cached report when fresh, otherwise fetch and store; flag says which."""
		key = coordinate_key(latitude, longitude)
		cached = await self.cache.get(key)
		if cached is not None:
			_logger.info("weather_cache_hit", extra={"key": key})
			return cached.weather_data, True

		report = await self.get_weather(latitude, longitude, timezone)
		await self.cache.set(key, report, location)
		return report, False

	async def cached_location(self, latitude: float, longitude: float) -> Location | None:
		cached = await self.cache.get(coordinate_key(latitude, longitude))
		return cached.location if cached is not None else None


def _provider_timing(op: str, start: float, ok: bool, error: str | None = None) -> None:
	duration_ms = round((time.perf_counter() - start) * 1000.0, 2)
	extra = {
		"operation": op,
		"duration_ms": duration_ms,
		"ok": ok,
		"error": error,
	}
	if ok:
		_logger.info("provider_call", extra=extra)
	else:
		_logger.error("provider_call_failed", extra=extra)
