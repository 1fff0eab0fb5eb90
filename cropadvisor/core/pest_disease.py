"""Pest and disease risk estimator.

Each rule category is an ordered tuple of tiers; the first tier whose
predicate matches contributes its weight and a single risk entry. Categories
are evaluated independently and their weights add up.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from cropadvisor.core.numeric import clamp, mean
from cropadvisor.models.crops import CropProfile
from cropadvisor.models.enums import RiskBandEnum, SeverityEnum
from cropadvisor.schemas.insights import PestDiseaseItem, PestDiseaseRisk
from cropadvisor.schemas.weather import ForecastDay, WeatherSnapshot

ROOT_ROT_FACTOR = 1.5


@dataclass(frozen=True, slots=True)
class RiskTier:
	type: str
	severity: SeverityEnum
	weight: int
	message: str
	prevention: str
	matches: Callable[[WeatherSnapshot], bool]

	def to_item(self) -> PestDiseaseItem:
		return PestDiseaseItem(
			type=self.type,
			severity=self.severity,
			message=self.message,
			prevention=self.prevention,
		)


FUNGAL_TIERS: tuple[RiskTier, ...] = (
	RiskTier(
		type="Fungal Diseases",
		severity=SeverityEnum.high,
		weight=40,
		message=(
			"High humidity and warm temperature create ideal conditions for fungal "
			"diseases like powdery mildew and rust."
		),
		prevention="Apply fungicide preventively, ensure good air circulation, avoid overhead watering.",
		matches=lambda w: w.humidity > 75 and w.temperature > 25,
	),
	RiskTier(
		type="Fungal Diseases",
		severity=SeverityEnum.medium,
		weight=20,
		message="Moderate risk of fungal diseases. Monitor crops closely.",
		prevention="Maintain proper spacing, avoid wetting leaves during irrigation.",
		matches=lambda w: w.humidity > 70 and w.temperature > 22,
	),
)

PEST_TIERS: tuple[RiskTier, ...] = (
	RiskTier(
		type="Pest Infestation",
		severity=SeverityEnum.high,
		weight=35,
		message="Hot and dry conditions favor pest activity (aphids, spider mites).",
		prevention="Increase humidity if possible, apply organic pest control, monitor regularly.",
		matches=lambda w: w.temperature > 28 and w.humidity < 50,
	),
	RiskTier(
		type="Pest Infestation",
		severity=SeverityEnum.medium,
		weight=15,
		message="Moderate pest risk. Keep fields clean and monitor.",
		prevention="Use beneficial insects, maintain field hygiene.",
		matches=lambda w: w.temperature > 25 and w.humidity < 55,
	),
)

ROOT_ROT_WEIGHT = 30


def root_rot_item() -> PestDiseaseItem:
	return PestDiseaseItem(
		type="Root Rot",
		severity=SeverityEnum.high,
		message="Excessive rainfall predicted. Risk of waterlogging and root diseases.",
		prevention="Improve drainage, avoid overwatering, use raised beds if possible.",
	)


RISK_BANDS: tuple[tuple[int, RiskBandEnum], ...] = (
	(60, RiskBandEnum.critical),
	(40, RiskBandEnum.high),
	(20, RiskBandEnum.medium),
)


def first_matching_tier(tiers: Sequence[RiskTier], current: WeatherSnapshot) -> RiskTier | None:
	for tier in tiers:
		if tier.matches(current):
			return tier
	return None


def risk_band(score: float) -> RiskBandEnum:
	for cutoff, band in RISK_BANDS:
		if score >= cutoff:
			return band
	return RiskBandEnum.low


def assess_pest_disease(
	current: WeatherSnapshot,
	forecast: Sequence[ForecastDay],
	profile: CropProfile,
) -> PestDiseaseRisk:
	risks: list[PestDiseaseItem] = []
	score = 0

	for tiers in (FUNGAL_TIERS, PEST_TIERS):
		tier = first_matching_tier(tiers, current)
		if tier is not None:
			risks.append(tier.to_item())
			score += tier.weight

	if mean(day.precipitation for day in forecast) > profile.rainfall_optimal[1] * ROOT_ROT_FACTOR:
		risks.append(root_rot_item())
		score += ROOT_ROT_WEIGHT

	clamped = int(clamp(score, 0, 100))
	return PestDiseaseRisk(
		overall_risk=risk_band(clamped),
		risk_score=clamped,
		risks=risks,
	)
