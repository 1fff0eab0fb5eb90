"""Activity planner — best forecast day for harvesting, spraying and fertilizing."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from cropadvisor.core.numeric import clamp
from cropadvisor.models.crops import CropProfile
from cropadvisor.schemas.insights import ActivityPlan, ActivityWindow
from cropadvisor.schemas.weather import ForecastDay

DAY_NAMES = ("Today", "Tomorrow", "Day 3", "Day 4", "Day 5")
BASELINE_DAY = ForecastDay(precipitation=0, wind_speed=0, max_temp=25)
BASELINE_REASON = "Current conditions"
NO_FORECAST_SCORE = 70


def day_name(index: int) -> str:
	return DAY_NAMES[index] if 0 <= index < len(DAY_NAMES) else f"Day {index + 1}"


def harvest_score(day: ForecastDay, profile: CropProfile) -> int:
	score = 100
	if day.precipitation > 5:
		score -= 40
	if day.wind_speed > profile.wind_max * 0.7:
		score -= 20
	if day.max_temp > profile.temp_max:
		score -= 15
	if day.max_temp < profile.temp_min:
		score -= 15
	return max(score, 0)


def spray_score(day: ForecastDay, next_day: ForecastDay | None) -> int:
	score = 100
	if day.precipitation > 2:
		score -= 50
	if next_day is not None and next_day.precipitation > 5:
		score -= 30
	if day.wind_speed > 15:
		score -= 30
	if day.max_temp > 30:
		score -= 15
	return max(score, 0)


def fertilize_score(day: ForecastDay) -> int:
	score = 100
	if 0 < day.precipitation < 10:
		score += 20
	if day.precipitation > 20:
		score -= 30
	if day.max_temp > 32:
		score -= 15
	return int(clamp(score, 0, 100))


def harvest_reason(day: ForecastDay) -> str:
	if day.precipitation < 2 and day.wind_speed < 15:
		return "Dry and calm conditions"
	if day.precipitation < 5:
		return "Minimal rain expected"
	return "Moderate conditions"


def spray_reason(day: ForecastDay) -> str:
	if day.precipitation < 1 and day.wind_speed < 10:
		return "Dry and calm - ideal for spraying"
	if day.precipitation < 2:
		return "Minimal rain - suitable for spraying"
	return "Moderate conditions"


def fertilize_reason(day: ForecastDay) -> str:
	if 0 < day.precipitation < 10:
		return "Light rain expected - perfect for fertilizer"
	if day.precipitation < 2:
		return "Dry conditions - water after application"
	return "Moderate conditions"


def best_window(
	forecast: Sequence[ForecastDay],
	score_day: Callable[[int], int],
	baseline_score: int,
	reason_for: Callable[[ForecastDay], str],
) -> ActivityWindow:
	best = ActivityWindow(day="Today", score=baseline_score, reason=BASELINE_REASON, index=-1)
	for index, day in enumerate(forecast):
		score = score_day(index)
		# strictly greater: the baseline and earlier days keep ties
		if score > best.score:
			best = ActivityWindow(day=day_name(index), score=score, reason=reason_for(day), index=index)
	return best


def plan_activities(forecast: Sequence[ForecastDay], profile: CropProfile) -> ActivityPlan:
	if not forecast:
		return ActivityPlan(
			harvest=ActivityWindow(day="Today", score=NO_FORECAST_SCORE, reason="Current conditions are suitable"),
			spray=ActivityWindow(day="Today", score=NO_FORECAST_SCORE, reason="Weather is favorable"),
			fertilize=ActivityWindow(day="Today", score=NO_FORECAST_SCORE, reason="Good conditions for application"),
		)

	def next_day(index: int) -> ForecastDay | None:
		return forecast[index + 1] if index + 1 < len(forecast) else None

	return ActivityPlan(
		harvest=best_window(
			forecast,
			lambda idx: harvest_score(forecast[idx], profile),
			harvest_score(BASELINE_DAY, profile),
			harvest_reason,
		),
		spray=best_window(
			forecast,
			lambda idx: spray_score(forecast[idx], next_day(idx)),
			spray_score(BASELINE_DAY, None),
			spray_reason,
		),
		fertilize=best_window(
			forecast,
			lambda idx: fertilize_score(forecast[idx]),
			fertilize_score(BASELINE_DAY),
			fertilize_reason,
		),
	)
