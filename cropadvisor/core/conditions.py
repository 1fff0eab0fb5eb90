"""Condition analyzer — classify current weather against a crop profile."""

from __future__ import annotations

from cropadvisor.models.crops import CropProfile, Range
from cropadvisor.models.enums import ConditionStatusEnum
from cropadvisor.schemas.insights import ConditionReading
from cropadvisor.schemas.weather import WeatherSnapshot

PRECIP_EXCESS_FACTOR = 1.5
WIND_WARNING_FACTOR = 0.8


def range_status(value: float, optimal: Range, absolute: Range) -> ConditionStatusEnum:
	if optimal[0] <= value <= optimal[1]:
		return ConditionStatusEnum.optimal
	if absolute[0] <= value <= absolute[1]:
		return ConditionStatusEnum.good
	if value < absolute[0] or value > absolute[1]:
		return ConditionStatusEnum.critical
	# NaN compares false against every bound
	return ConditionStatusEnum.warning


def temperature_message(temp: float, profile: CropProfile) -> str:
	low, high = profile.temp_optimal
	if temp < profile.temp_min:
		return f"Too cold for optimal growth (min: {profile.temp_min:g}°C)"
	if temp > profile.temp_max:
		return f"Too hot for optimal growth (max: {profile.temp_max:g}°C)"
	if temp < low:
		return f"Slightly below optimal (optimal: {low:g}-{high:g}°C)"
	if temp > high:
		return f"Slightly above optimal (optimal: {low:g}-{high:g}°C)"
	return "Ideal temperature for growth"


def humidity_message(humidity: float, profile: CropProfile) -> str:
	if humidity < profile.humidity_min:
		return "Low humidity - may need irrigation"
	if humidity > profile.humidity_max:
		return "High humidity - risk of fungal diseases"
	if humidity < profile.humidity_optimal[0]:
		return "Slightly low humidity"
	if humidity > profile.humidity_optimal[1]:
		return "Slightly high humidity"
	return "Optimal humidity level"


def precipitation_status(precip: float, profile: CropProfile) -> ConditionStatusEnum:
	low, high = profile.rainfall_optimal
	if low <= precip <= high:
		return ConditionStatusEnum.optimal
	if precip < low:
		return ConditionStatusEnum.low
	if precip > high * PRECIP_EXCESS_FACTOR:
		return ConditionStatusEnum.excessive
	return ConditionStatusEnum.good


def precipitation_message(precip: float, profile: CropProfile) -> str:
	low, high = profile.rainfall_optimal
	if precip < low:
		return "Low rainfall - irrigation may be needed"
	if precip > high * PRECIP_EXCESS_FACTOR:
		return "Excessive rainfall - ensure proper drainage"
	return "Adequate rainfall for crop needs"


def _wind_reading(wind: float, profile: CropProfile) -> ConditionReading:
	if wind > profile.wind_max:
		return ConditionReading(value=wind, status=ConditionStatusEnum.critical, message="High wind may damage crops")
	if wind > profile.wind_max * WIND_WARNING_FACTOR:
		return ConditionReading(value=wind, status=ConditionStatusEnum.warning, message="Moderate wind - monitor closely")
	return ConditionReading(value=wind, status=ConditionStatusEnum.good, message="Wind conditions are favorable")


def _uv_reading(uv: float, profile: CropProfile) -> ConditionReading:
	if uv > profile.uv_index_max:
		return ConditionReading(value=uv, status=ConditionStatusEnum.warning, message="High UV - protect crops from sunburn")
	return ConditionReading(value=uv, status=ConditionStatusEnum.good, message="UV levels are safe")


def analyze_conditions(weather: WeatherSnapshot, profile: CropProfile) -> dict[str, ConditionReading]:
	"""Classify every current metric into a status plus a human-readable message."""
	temp = weather.temperature
	humidity = weather.humidity
	precip = weather.precipitation

	return {
		"temperature": ConditionReading(
			value=temp,
			status=range_status(temp, profile.temp_optimal, (profile.temp_min, profile.temp_max)),
			message=temperature_message(temp, profile),
		),
		"humidity": ConditionReading(
			value=humidity,
			status=range_status(humidity, profile.humidity_optimal, (profile.humidity_min, profile.humidity_max)),
			message=humidity_message(humidity, profile),
		),
		"precipitation": ConditionReading(
			value=precip,
			status=precipitation_status(precip, profile),
			message=precipitation_message(precip, profile),
		),
		"windSpeed": _wind_reading(weather.wind_speed, profile),
		"uvIndex": _uv_reading(weather.uv_index, profile),
	}
