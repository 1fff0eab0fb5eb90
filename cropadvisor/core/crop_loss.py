"""Crop-loss risk aggregator — additive 0-100 composite of every deviation."""

from __future__ import annotations

from collections.abc import Sequence

from cropadvisor.core.numeric import clamp, round_half_up
from cropadvisor.core.pest_disease import assess_pest_disease
from cropadvisor.models.crops import CropProfile
from cropadvisor.schemas.insights import PestDiseaseRisk
from cropadvisor.schemas.weather import ForecastDay, WeatherSnapshot

TEMP_EXTREME_PENALTY = 30
TEMP_SUBOPTIMAL_PENALTY = 15
HUMIDITY_EXTREME_PENALTY = 20
FLOOD_PENALTY = 25
DROUGHT_PENALTY = 20
WIND_PENALTY = 15
PEST_WEIGHT = 0.3


def weekly_precipitation(current: WeatherSnapshot, forecast: Sequence[ForecastDay]) -> float:
	return current.precipitation + sum(day.precipitation for day in forecast)


def score_crop_loss(
	current: WeatherSnapshot,
	forecast: Sequence[ForecastDay],
	profile: CropProfile,
	pest_risk: PestDiseaseRisk | None = None,
) -> int:
	"""Composite crop-loss risk in [0, 100].

	``pest_risk`` should be the assessment already produced for the same
	request; it is only evaluated here when the caller has none.
	"""
	risk = 0.0

	temp = current.temperature
	if temp < profile.temp_min or temp > profile.temp_max:
		risk += TEMP_EXTREME_PENALTY
	elif temp < profile.temp_optimal[0] or temp > profile.temp_optimal[1]:
		risk += TEMP_SUBOPTIMAL_PENALTY

	if current.humidity < profile.humidity_min or current.humidity > profile.humidity_max:
		risk += HUMIDITY_EXTREME_PENALTY

	precip = weekly_precipitation(current, forecast)
	if precip > profile.rainfall_optimal[1] * 2:
		risk += FLOOD_PENALTY
	elif precip < profile.rainfall_optimal[0] * 0.5:
		risk += DROUGHT_PENALTY

	if current.wind_speed > profile.wind_max:
		risk += WIND_PENALTY

	if pest_risk is None:
		pest_risk = assess_pest_disease(current, forecast, profile)
	risk += pest_risk.risk_score * PEST_WEIGHT

	return int(clamp(round_half_up(risk), 0, 100))
