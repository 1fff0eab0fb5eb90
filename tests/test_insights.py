from __future__ import annotations

from cropadvisor.core import compute_insights
from cropadvisor.models import CROP_PROFILES, ConditionStatusEnum, CropTypeEnum, RiskBandEnum, UrgencyEnum
from factories import make_day, make_snapshot


def test_unknown_or_missing_input_returns_none() -> None:
	current = make_snapshot()
	assert compute_insights("banana", current, []) is None
	assert compute_insights(None, current, []) is None
	assert compute_insights("wheat", None, []) is None


def test_cold_wheat_scenario() -> None:
	insights = compute_insights("wheat", make_snapshot(temperature=3, humidity=55), [make_day(max_temp=8, min_temp=1)])

	assert insights is not None
	assert insights.crop_name == "Wheat"
	assert insights.current_conditions["temperature"].status == ConditionStatusEnum.critical
	assert insights.crop_loss_risk >= 30
	assert insights.recommendations[0].type == "temperature"


def test_humid_rice_scenario() -> None:
	forecast = [make_day(precipitation=0, wind_speed=5, max_temp=30) for _ in range(5)]
	insights = compute_insights(CropTypeEnum.rice, make_snapshot(temperature=27, humidity=80, wind_speed=0), forecast)

	assert insights is not None
	assert insights.crop_type == "rice"
	assert insights.pest_disease_risk.risk_score == 40
	assert insights.pest_disease_risk.overall_risk == RiskBandEnum.high
	assert insights.crop_loss_risk == 32
	assert insights.irrigation_recommendation.urgency == UrgencyEnum.high
	assert [item.type for item in insights.recommendations] == ["irrigation"]


def test_empty_forecast_is_handled() -> None:
	insights = compute_insights("vegetables", make_snapshot(temperature=20, humidity=65), [])

	assert insights is not None
	assert insights.activity_planner.harvest.score == 70
	assert insights.irrigation_recommendation.timing == "Early morning (6-8 AM)"


def test_insights_are_deterministic() -> None:
	current = make_snapshot(temperature=29, humidity=45, precipitation=2, wind_speed=18)
	forecast = [make_day(precipitation=p) for p in (0, 4, 12, 1, 0)]

	first = compute_insights("cotton", current, forecast)
	second = compute_insights("cotton", current, forecast)
	assert first is not None
	assert first.model_dump() == second.model_dump()


def test_edits_to_returned_risks_do_not_leak_into_later_calls() -> None:
	current = make_snapshot(temperature=27, humidity=80)
	forecast = [make_day(precipitation=100) for _ in range(3)]

	first = compute_insights("wheat", current, forecast)
	assert [item.type for item in first.pest_disease_risk.risks] == ["Fungal Diseases", "Root Rot"]
	for item in first.pest_disease_risk.risks:
		item.message = "edited by caller"

	second = compute_insights("wheat", current, forecast)
	assert second.pest_disease_risk.risks[0].message.startswith("High humidity and warm temperature")
	assert second.pest_disease_risk.risks[-1].message == (
		"Excessive rainfall predicted. Risk of waterlogging and root diseases."
	)
	assert all(
		later is not earlier
		for later, earlier in zip(second.pest_disease_risk.risks, first.pest_disease_risk.risks)
	)


def test_wire_format_uses_camel_case() -> None:
	insights = compute_insights("sugarcane", make_snapshot(), [make_day()])
	assert insights is not None

	body = insights.model_dump(by_alias=True, mode="json")
	assert {"cropType", "cropName", "currentConditions", "irrigationRecommendation", "pestDiseaseRisk"} <= set(body)
	assert "windSpeed" in body["currentConditions"]
	assert "riskScore" in body["pestDiseaseRisk"]
	assert body["cropLossRisk"] == insights.crop_loss_risk


def test_custom_profile_table() -> None:
	only_wheat = {CropTypeEnum.wheat: CROP_PROFILES[CropTypeEnum.wheat]}
	assert compute_insights("wheat", make_snapshot(), [], profiles=only_wheat) is not None
	assert compute_insights("rice", make_snapshot(), [], profiles=only_wheat) is None


def test_every_shipped_profile_is_consistent() -> None:
	assert set(CROP_PROFILES) == set(CropTypeEnum)
	for profile in CROP_PROFILES.values():
		assert profile.is_consistent()
