"""Irrigation planner — rainfall deficit over the horizon and when to water."""

from __future__ import annotations

from collections.abc import Sequence

from cropadvisor.core.numeric import mean, round_half_up
from cropadvisor.models.crops import CropProfile
from cropadvisor.models.enums import UrgencyEnum
from cropadvisor.schemas.insights import IrrigationRecommendation
from cropadvisor.schemas.weather import ForecastDay, WeatherSnapshot

# weekly demand is always projected over 7 days, whatever the forecast length
WEEKLY_DAYS = 7
HIGH_DEFICIT_MM = 50
MEDIUM_DEFICIT_MM = 20
HOT_DAY_MAX_TEMP = 30
HOT_DAY_PENALTY = 10

DAY_NAMES = ("Today", "Tomorrow", "Day 3", "Day 4", "Day 5")
IRRIGATION_SLOT = "(6-8 AM)"
DEFAULT_TIMING = f"Early morning {IRRIGATION_SLOT}"


def horizon_precipitation(current: WeatherSnapshot, forecast: Sequence[ForecastDay]) -> float:
	"""Current precipitation plus the forecast's mean daily rain times its length."""
	average = mean(day.precipitation for day in forecast)
	return current.precipitation + average * len(forecast)


def rainfall_deficit(current: WeatherSnapshot, forecast: Sequence[ForecastDay], profile: CropProfile) -> float:
	weekly_need = profile.rainfall_optimal[1] * WEEKLY_DAYS
	return weekly_need - horizon_precipitation(current, forecast)


def best_irrigation_time(forecast: Sequence[ForecastDay]) -> str:
	"""Calmest, coolest forecast day; the earliest one wins a tie."""
	if not forecast:
		return DEFAULT_TIMING

	def day_score(day: ForecastDay) -> float:
		return day.wind_speed + (HOT_DAY_PENALTY if day.max_temp > HOT_DAY_MAX_TEMP else 0)

	best_index = min(range(len(forecast)), key=lambda idx: (day_score(forecast[idx]), idx))
	label = DAY_NAMES[best_index] if best_index < len(DAY_NAMES) else "Early morning"
	return f"{label} {IRRIGATION_SLOT}"


def plan_irrigation(
	current: WeatherSnapshot,
	forecast: Sequence[ForecastDay],
	profile: CropProfile,
) -> IrrigationRecommendation:
	deficit = rainfall_deficit(current, forecast, profile)
	if deficit <= 0:
		return IrrigationRecommendation()

	amount = round_half_up(deficit)
	timing = best_irrigation_time(forecast)
	if deficit > MEDIUM_DEFICIT_MM:
		urgency = UrgencyEnum.high if deficit > HIGH_DEFICIT_MM else UrgencyEnum.medium
		message = f"Irrigation recommended: {amount}mm needed. Best time: {timing}"
	else:
		urgency = UrgencyEnum.low
		message = f"Light irrigation may be beneficial: {amount}mm. Best time: {timing}"

	return IrrigationRecommendation(
		needed=True,
		urgency=urgency,
		amount=amount,
		timing=timing,
		message=message,
	)
