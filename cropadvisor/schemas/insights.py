"""Pydantic schemas for crop advisory insights."""

from __future__ import annotations

from pydantic import Field

from cropadvisor.models.enums import (
	ConditionStatusEnum,
	PriorityEnum,
	RiskBandEnum,
	SeverityEnum,
	UrgencyEnum,
)
from cropadvisor.schemas.base import CamelModel
from cropadvisor.schemas.weather import ForecastDay, WeatherSnapshot


class ConditionReading(CamelModel):
	value: float
	status: ConditionStatusEnum
	message: str


class IrrigationRecommendation(CamelModel):
	needed: bool = False
	urgency: UrgencyEnum = UrgencyEnum.low
	amount: int = Field(default=0, ge=0)
	timing: str = "Not needed"
	message: str = "Natural rainfall is sufficient"


class PestDiseaseItem(CamelModel):
	type: str
	severity: SeverityEnum
	message: str
	prevention: str


class PestDiseaseRisk(CamelModel):
	overall_risk: RiskBandEnum
	risk_score: int = Field(ge=0, le=100)
	risks: list[PestDiseaseItem] = Field(default_factory=list)


class ActivityWindow(CamelModel):
	day: str
	score: int = Field(ge=0, le=100)
	reason: str
	index: int = -1


class ActivityPlan(CamelModel):
	harvest: ActivityWindow
	spray: ActivityWindow
	fertilize: ActivityWindow


class Recommendation(CamelModel):
	type: str
	priority: PriorityEnum
	message: str


class Insights(CamelModel):
	crop_type: str
	crop_name: str
	current_conditions: dict[str, ConditionReading]
	irrigation_recommendation: IrrigationRecommendation
	pest_disease_risk: PestDiseaseRisk
	activity_planner: ActivityPlan
	crop_loss_risk: int = Field(ge=0, le=100)
	recommendations: list[Recommendation] = Field(default_factory=list)


class InsightsRequest(CamelModel):
	crop_type: str = Field(min_length=1, max_length=50)
	current: WeatherSnapshot
	forecast: list[ForecastDay] = Field(default_factory=list, max_length=16)


class LiveInsightsResponse(CamelModel):
	location_key: str
	cached: bool
	insights: Insights
