from __future__ import annotations

from cropadvisor.core.irrigation import best_irrigation_time, plan_irrigation, rainfall_deficit
from cropadvisor.models import CROP_PROFILES, CropTypeEnum, UrgencyEnum
from factories import make_day, make_snapshot

WHEAT = CROP_PROFILES[CropTypeEnum.wheat]


def test_no_deficit_means_no_irrigation() -> None:
	plan = plan_irrigation(make_snapshot(precipitation=420), [], WHEAT)

	assert plan.needed is False
	assert plan.urgency == UrgencyEnum.low
	assert plan.amount == 0
	assert plan.timing == "Not needed"
	assert plan.message == "Natural rainfall is sufficient"


def test_sixty_mm_deficit_is_high_urgency() -> None:
	forecast = [make_day(precipitation=72, wind_speed=0, max_temp=20) for _ in range(5)]
	plan = plan_irrigation(make_snapshot(precipitation=0), forecast, WHEAT)

	assert rainfall_deficit(make_snapshot(precipitation=0), forecast, WHEAT) == 60
	assert plan.needed is True
	assert plan.urgency == UrgencyEnum.high
	assert plan.amount == 60
	assert plan.timing == "Today (6-8 AM)"
	assert plan.message == "Irrigation recommended: 60mm needed. Best time: Today (6-8 AM)"


def test_medium_and_low_tiers() -> None:
	medium = plan_irrigation(make_snapshot(precipitation=390), [], WHEAT)
	low = plan_irrigation(make_snapshot(precipitation=410), [], WHEAT)

	assert medium.urgency == UrgencyEnum.medium
	assert medium.amount == 30
	assert low.urgency == UrgencyEnum.low
	assert low.message == "Light irrigation may be beneficial: 10mm. Best time: Early morning (6-8 AM)"


def test_empty_forecast_projects_the_whole_week() -> None:
	plan = plan_irrigation(make_snapshot(precipitation=0), [], WHEAT)
	assert plan.amount == 420
	assert plan.timing == "Early morning (6-8 AM)"


def test_best_time_prefers_calm_cool_days_and_earliest_tie() -> None:
	calm = [make_day(wind_speed=20), make_day(wind_speed=5), make_day(wind_speed=5)]
	hot = [make_day(wind_speed=5, max_temp=35), make_day(wind_speed=12, max_temp=25)]

	assert best_irrigation_time(calm) == "Tomorrow (6-8 AM)"
	assert best_irrigation_time(hot) == "Tomorrow (6-8 AM)"


def test_best_time_beyond_named_days_falls_back_to_early_morning() -> None:
	forecast = [make_day(wind_speed=10) for _ in range(5)] + [make_day(wind_speed=1)]
	assert best_irrigation_time(forecast) == "Early morning (6-8 AM)"
