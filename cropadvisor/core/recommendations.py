"""Recommendation generator — prioritized action items in evaluation order."""

from __future__ import annotations

from collections.abc import Sequence

from cropadvisor.core.irrigation import plan_irrigation
from cropadvisor.models.crops import CropProfile
from cropadvisor.models.enums import PriorityEnum, UrgencyEnum
from cropadvisor.schemas.insights import IrrigationRecommendation, Recommendation
from cropadvisor.schemas.weather import ForecastDay, WeatherSnapshot


def _temperature(current: WeatherSnapshot, profile: CropProfile) -> Recommendation | None:
	if current.temperature < profile.temp_min:
		return Recommendation(
			type="temperature",
			priority=PriorityEnum.high,
			message=(
				f"Temperature is below optimal range ({profile.temp_min:g}°C). "
				"Consider using row covers or greenhouses to protect crops."
			),
		)
	if current.temperature > profile.temp_max:
		return Recommendation(
			type="temperature",
			priority=PriorityEnum.high,
			message=(
				f"Temperature is above optimal range ({profile.temp_max:g}°C). "
				"Provide shade and increase irrigation frequency."
			),
		)
	return None


def _humidity(current: WeatherSnapshot, profile: CropProfile) -> Recommendation | None:
	if current.humidity < profile.humidity_min:
		return Recommendation(
			type="humidity",
			priority=PriorityEnum.medium,
			message="Low humidity detected. Increase irrigation frequency or use misting systems.",
		)
	if current.humidity > profile.humidity_max:
		return Recommendation(
			type="humidity",
			priority=PriorityEnum.medium,
			message="High humidity detected. Ensure good air circulation and avoid overhead watering.",
		)
	return None


def _irrigation(irrigation: IrrigationRecommendation) -> Recommendation | None:
	if irrigation.needed and irrigation.urgency == UrgencyEnum.high:
		return Recommendation(type="irrigation", priority=PriorityEnum.high, message=irrigation.message)
	return None


def generate_recommendations(
	current: WeatherSnapshot,
	forecast: Sequence[ForecastDay],
	profile: CropProfile,
	irrigation: IrrigationRecommendation | None = None,
) -> list[Recommendation]:
	if irrigation is None:
		irrigation = plan_irrigation(current, forecast, profile)

	candidates = (
		_temperature(current, profile),
		_humidity(current, profile),
		_irrigation(irrigation),
	)
	return [item for item in candidates if item is not None]
