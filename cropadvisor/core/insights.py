"""Insights assembly — run every advisory component over one set of inputs."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from cropadvisor.core.activities import plan_activities
from cropadvisor.core.conditions import analyze_conditions
from cropadvisor.core.crop_loss import score_crop_loss
from cropadvisor.core.irrigation import plan_irrigation
from cropadvisor.core.pest_disease import assess_pest_disease
from cropadvisor.core.recommendations import generate_recommendations
from cropadvisor.models.crops import CropProfile, get_profile
from cropadvisor.models.enums import CropTypeEnum
from cropadvisor.schemas.insights import Insights
from cropadvisor.schemas.weather import ForecastDay, WeatherSnapshot

_logger = logging.getLogger("cropadvisor.core")


def crop_display_name(crop_type: str) -> str:
	return crop_type[:1].upper() + crop_type[1:]


def compute_insights(
	crop_type: str | CropTypeEnum | None,
	current: WeatherSnapshot | None,
	forecast: Sequence[ForecastDay] = (),
	*,
	profiles: Mapping[CropTypeEnum, CropProfile] | None = None,
) -> Insights | None:
	"""Advisory insights for one crop, or None when the input is insufficient.

	The pest/disease assessment and the irrigation plan are each evaluated
	once and shared with the crop-loss score and the recommendations.
	"""
	if current is None or crop_type is None:
		_logger.debug("insights_skipped", extra={"reason": "missing_input", "crop_type": crop_type})
		return None

	profile = _resolve_profile(crop_type, profiles)
	if profile is None:
		_logger.debug("insights_skipped", extra={"reason": "unknown_crop", "crop_type": str(crop_type)})
		return None

	forecast = tuple(forecast or ())
	crop_id = str(CropTypeEnum(crop_type))

	irrigation = plan_irrigation(current, forecast, profile)
	pest_risk = assess_pest_disease(current, forecast, profile)

	return Insights(
		crop_type=crop_id,
		crop_name=crop_display_name(crop_id),
		current_conditions=analyze_conditions(current, profile),
		irrigation_recommendation=irrigation,
		pest_disease_risk=pest_risk,
		activity_planner=plan_activities(forecast, profile),
		crop_loss_risk=score_crop_loss(current, forecast, profile, pest_risk=pest_risk),
		recommendations=generate_recommendations(current, forecast, profile, irrigation=irrigation),
	)


def _resolve_profile(
	crop_type: str | CropTypeEnum,
	profiles: Mapping[CropTypeEnum, CropProfile] | None,
) -> CropProfile | None:
	if profiles is None:
		return get_profile(crop_type)
	try:
		return profiles.get(CropTypeEnum(crop_type))
	except ValueError:
		return None
