from __future__ import annotations

import datetime as dt

import pytest
from httpx import AsyncClient

from cropadvisor.config import get_settings
from cropadvisor.core import compute_insights
from cropadvisor.models import ChartMetricEnum
from cropadvisor.schemas.analytics import DataPoint
from cropadvisor.services.analytics_service import (
	HISTORY_KEY,
	AnalyticsService,
	build_data_point,
	chart_series,
	history_range,
	irrigation_insights,
	upsert_point,
	weather_trends,
)
from factories import make_day, make_report, make_snapshot

JUNE_1 = dt.date(2024, 6, 1)


def _point(day: int, **values) -> DataPoint:
	return DataPoint(date=JUNE_1 + dt.timedelta(days=day), **values)


def test_build_data_point_uses_first_forecast_day_for_rain_probability() -> None:
	report = make_report(make_snapshot(temperature=21, humidity=64), [make_day(rain_probability=45)])
	insights = compute_insights("wheat", report.current, report.forecast)

	point = build_data_point(report, insights, JUNE_1)

	assert point.temperature == 21
	assert point.rain_probability == 45
	assert point.crop_risk_score == insights.crop_loss_risk
	assert build_data_point(make_report(forecast=[]), None, JUNE_1).rain_probability == 0


def test_upsert_replaces_same_day_and_trims_oldest() -> None:
	points = [_point(0, temperature=20), _point(1, temperature=21, crop_risk_score=40)]

	replaced = upsert_point(points, _point(1, temperature=25), max_days=30)
	assert [item.temperature for item in replaced] == [20, 25]
	assert replaced[-1].crop_risk_score == 40

	trimmed = upsert_point(points, _point(2, temperature=22), max_days=2)
	assert [item.date for item in trimmed] == [JUNE_1 + dt.timedelta(days=1), JUNE_1 + dt.timedelta(days=2)]


def test_history_range_is_inclusive_of_cutoff() -> None:
	points = [_point(day) for day in range(10)]
	selected = history_range(points, 3, JUNE_1 + dt.timedelta(days=9))
	assert [item.date.day for item in selected] == [7, 8, 9, 10]


def test_chart_series_labels_and_skips_missing_risk() -> None:
	points = [_point(0, temperature=20, crop_risk_score=None), _point(1, temperature=22, crop_risk_score=35)]

	temperature = chart_series(points, ChartMetricEnum.temperature, 7)
	risk = chart_series(points, ChartMetricEnum.crop_risk, 7)

	assert [(item.date, item.value) for item in temperature.points] == [("Jun 1", 20), ("Jun 2", 22)]
	assert [(item.date, item.value) for item in risk.points] == [("Jun 2", 35)]


def test_irrigation_insights() -> None:
	points = [
		_point(0, precipitation=0, rain_probability=10),
		_point(1, precipitation=4, rain_probability=20),
		_point(2, precipitation=8, rain_probability=40),
	]
	result = irrigation_insights(points)

	assert result is not None
	assert result.total_precipitation == 12.0
	assert result.avg_precipitation == 4.0
	assert result.days_with_rain == 2
	assert result.avg_rain_probability == 23
	assert result.irrigation_needed is True
	assert irrigation_insights([]) is None


def test_weather_trends_ignore_unrecorded_values() -> None:
	points = [
		_point(0, temperature=20, humidity=50),
		_point(1, temperature=0, humidity=60),
		_point(2, temperature=26, humidity=80),
	]
	result = weather_trends(points)

	assert result is not None
	assert result.avg_temperature == 23.0
	assert result.avg_humidity == 63.3
	assert result.avg_wind_speed == 0.0
	assert result.temp_trend == 2.0
	assert result.humidity_trend == 10.0
	assert result.data_points == 3
	assert weather_trends([]) is None


@pytest.mark.asyncio
async def test_record_persists_and_prunes(fake_redis, monkeypatch: pytest.MonkeyPatch) -> None:
	monkeypatch.setattr(get_settings(), "analytics_history_days", 2)
	service = AnalyticsService(fake_redis)

	for offset in range(3):
		await service.record(make_report(), today=JUNE_1 + dt.timedelta(days=offset))

	stored = fake_redis.hashes[HISTORY_KEY]
	assert sorted(stored) == ["2024-06-02", "2024-06-03"]
	fake_redis.hdel.assert_awaited_with(HISTORY_KEY, "2024-06-01")

	points = await service.load_points()
	assert [item.date for item in points] == [dt.date(2024, 6, 2), dt.date(2024, 6, 3)]


@pytest.mark.asyncio
async def test_record_older_than_retention_window_returns_the_point(fake_redis, monkeypatch: pytest.MonkeyPatch) -> None:
	monkeypatch.setattr(get_settings(), "analytics_history_days", 2)
	service = AnalyticsService(fake_redis)
	for offset in (1, 2):
		await service.record(make_report(), today=JUNE_1 + dt.timedelta(days=offset))

	point = await service.record(make_report(), today=JUNE_1)

	assert point.date == JUNE_1
	assert sorted(fake_redis.hashes[HISTORY_KEY]) == ["2024-06-02", "2024-06-03"]
	fake_redis.hdel.assert_not_awaited()


@pytest.mark.asyncio
async def test_record_without_redis_is_a_noop() -> None:
	point = await AnalyticsService(None).record(make_report(), today=JUNE_1)
	assert point.date == JUNE_1
	assert await AnalyticsService(None).load_points() == []


@pytest.mark.asyncio
async def test_analytics_endpoints(client: AsyncClient, fake_redis) -> None:
	empty = await client.get("/api/v1/analytics/irrigation")
	assert empty.status_code == 404

	await AnalyticsService(fake_redis).record(make_report(make_snapshot(temperature=24, precipitation=2)))

	history = await client.get("/api/v1/analytics/history", params={"days": 7})
	assert history.status_code == 200
	assert history.json()["points"][0]["temperature"] == 24

	chart = await client.get("/api/v1/analytics/charts/temperature")
	assert chart.status_code == 200
	assert chart.json()["points"][0]["value"] == 24

	irrigation = await client.get("/api/v1/analytics/irrigation")
	assert irrigation.status_code == 200
	assert irrigation.json()["irrigationNeeded"] is True

	trends = await client.get("/api/v1/analytics/trends")
	assert trends.status_code == 200
	assert trends.json()["dataPoints"] == 1


@pytest.mark.asyncio
async def test_analytics_rejects_bad_parameters(client: AsyncClient) -> None:
	assert (await client.get("/api/v1/analytics/history", params={"days": 0})).status_code == 422
	assert (await client.get("/api/v1/analytics/charts/pressure")).status_code == 422
