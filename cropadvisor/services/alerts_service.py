"""Weather and crop alert generation with Redis-backed dismissal."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from redis.asyncio import Redis

from cropadvisor.config import get_settings
from cropadvisor.core import compute_insights
from cropadvisor.models.enums import (
	AlertCategoryEnum,
	AlertTypeEnum,
	RiskBandEnum,
	SeverityEnum,
	UrgencyEnum,
)
from cropadvisor.schemas.alerts import Alert, AlertsResponse
from cropadvisor.schemas.insights import Insights
from cropadvisor.schemas.weather import WeatherReport

DISMISSED_KEY = "alerts:dismissed"
FORECAST_WINDOW_DAYS = 3
CROP_RISK_ALERT_THRESHOLD = 70

_logger = logging.getLogger("cropadvisor.alerts")


def _current_alerts(report: WeatherReport) -> list[Alert]:
	current = report.current
	forecast = report.forecast
	alerts: list[Alert] = []

	if current.temperature < 5 or (forecast and forecast[0].min_temp < 5):
		alerts.append(
			Alert(
				id="frost",
				type=AlertTypeEnum.warning,
				severity=SeverityEnum.high,
				title="Frost Warning",
				message=(
					f"Temperatures expected to drop below 5°C. Current: {current.temperature:g}°C. "
					"Cover sensitive plants to protect them from frost damage."
				),
				category=AlertCategoryEnum.temperature,
			)
		)

	if current.temperature > 35:
		alerts.append(
			Alert(
				id="heat",
				type=AlertTypeEnum.error,
				severity=SeverityEnum.high,
				title="Heat Alert",
				message=(
					f"Extremely high temperature: {current.temperature:g}°C. Provide shade for crops "
					"and increase irrigation frequency to prevent heat stress."
				),
				category=AlertCategoryEnum.temperature,
			)
		)
	elif current.temperature > 30:
		alerts.append(
			Alert(
				id="warm",
				type=AlertTypeEnum.warning,
				severity=SeverityEnum.medium,
				title="High Temperature",
				message=(
					f"High temperature: {current.temperature:g}°C. Monitor crops closely and ensure "
					"adequate water supply."
				),
				category=AlertCategoryEnum.temperature,
			)
		)

	if current.precipitation > 20:
		alerts.append(
			Alert(
				id="heavy-rain",
				type=AlertTypeEnum.error,
				severity=SeverityEnum.high,
				title="Heavy Rainfall",
				message=(
					f"Heavy rainfall detected: {current.precipitation:.1f}mm. Ensure proper drainage "
					"to prevent waterlogging and root rot."
				),
				category=AlertCategoryEnum.precipitation,
			)
		)
	elif current.precipitation > 10:
		alerts.append(
			Alert(
				id="rain",
				type=AlertTypeEnum.info,
				severity=SeverityEnum.medium,
				title="Rainfall Detected",
				message=f"Rainfall: {current.precipitation:.1f}mm. Adjust irrigation schedule accordingly.",
				category=AlertCategoryEnum.precipitation,
			)
		)

	if current.wind_speed > 40:
		alerts.append(
			Alert(
				id="high-wind",
				type=AlertTypeEnum.error,
				severity=SeverityEnum.high,
				title="High Wind Warning",
				message=(
					f"Strong winds detected: {current.wind_speed:g} km/h. Secure outdoor equipment "
					"and protect crops from wind damage."
				),
				category=AlertCategoryEnum.wind,
			)
		)
	elif current.wind_speed > 25:
		alerts.append(
			Alert(
				id="wind",
				type=AlertTypeEnum.warning,
				severity=SeverityEnum.medium,
				title="Moderate Wind",
				message=f"Moderate wind speed: {current.wind_speed:g} km/h. Monitor crops and secure loose items.",
				category=AlertCategoryEnum.wind,
			)
		)

	if current.humidity < 30:
		alerts.append(
			Alert(
				id="low-humidity",
				type=AlertTypeEnum.warning,
				severity=SeverityEnum.medium,
				title="Low Humidity",
				message=(
					f"Low humidity: {current.humidity:g}%. Increase irrigation frequency to maintain "
					"soil moisture."
				),
				category=AlertCategoryEnum.humidity,
			)
		)

	if current.uv_index > 8:
		alerts.append(
			Alert(
				id="high-uv",
				type=AlertTypeEnum.warning,
				severity=SeverityEnum.medium,
				title="High UV Index",
				message=(
					f"Very high UV index: {current.uv_index:g}. Protect sensitive crops from sunburn. "
					"Consider providing shade during peak hours."
				),
				category=AlertCategoryEnum.uv,
			)
		)

	return alerts


def _forecast_alerts(report: WeatherReport) -> list[Alert]:
	upcoming = report.forecast[:FORECAST_WINDOW_DAYS]
	alerts: list[Alert] = []

	heavy_rain_day = next((day for day in upcoming if day.precipitation > 15), None)
	if heavy_rain_day is not None:
		alerts.append(
			Alert(
				id="forecast-rain",
				type=AlertTypeEnum.info,
				severity=SeverityEnum.medium,
				title="Heavy Rain Forecast",
				message=(
					f"Heavy rainfall ({heavy_rain_day.precipitation:.1f}mm) expected in the next few days. "
					"Plan irrigation and drainage accordingly."
				),
				category=AlertCategoryEnum.forecast,
			)
		)

	extreme_day = next((day for day in upcoming if day.max_temp > 35 or day.min_temp < 0), None)
	if extreme_day is not None:
		alerts.append(
			Alert(
				id="forecast-temp",
				type=AlertTypeEnum.warning,
				severity=SeverityEnum.high,
				title="Extreme Temperature Forecast",
				message=(
					f"Extreme temperatures forecasted: {extreme_day.max_temp:g}°C / {extreme_day.min_temp:g}°C. "
					"Take necessary precautions."
				),
				category=AlertCategoryEnum.forecast,
			)
		)

	return alerts


def _crop_alerts(insights: Insights) -> list[Alert]:
	alerts: list[Alert] = []

	if insights.crop_loss_risk > CROP_RISK_ALERT_THRESHOLD:
		alerts.append(
			Alert(
				id="crop-risk",
				type=AlertTypeEnum.error,
				severity=SeverityEnum.high,
				title="High Crop Risk",
				message=(
					f"Crop loss risk score is {insights.crop_loss_risk}/100. Immediate action recommended. "
					"Review farming recommendations."
				),
				category=AlertCategoryEnum.crop,
			)
		)

	pest = insights.pest_disease_risk
	if pest.overall_risk in {RiskBandEnum.high, RiskBandEnum.critical}:
		names = " and ".join(item.type for item in pest.risks)
		alerts.append(
			Alert(
				id="pest-risk",
				type=AlertTypeEnum.warning,
				severity=SeverityEnum.high,
				title="Pest/Disease Risk",
				message=f"High risk of {names}. Take preventive measures.",
				category=AlertCategoryEnum.pest,
			)
		)

	irrigation = insights.irrigation_recommendation
	if irrigation.needed and irrigation.urgency == UrgencyEnum.high:
		alerts.append(
			Alert(
				id="irrigation",
				type=AlertTypeEnum.info,
				severity=SeverityEnum.medium,
				title="Irrigation Needed",
				message=(
					f"Irrigation recommended: {irrigation.amount}mm needed. "
					f"Best time: {irrigation.timing}."
				),
				category=AlertCategoryEnum.irrigation,
			)
		)

	return alerts


def generate_alerts(
	report: WeatherReport | None,
	crop_type: str | None = None,
	insights: Insights | None = None,
) -> list[Alert]:
	"""Every alert raised by the report, in weather, forecast, crop order.

	Crop alerts use ``insights`` when supplied, otherwise the insights are
	computed for ``crop_type`` (the configured default crop when omitted).
	"""
	if report is None:
		return []

	alerts = _current_alerts(report)
	alerts.extend(_forecast_alerts(report))

	if insights is None:
		crop = crop_type or get_settings().default_crop_type
		insights = compute_insights(crop, report.current, report.forecast)
	if insights is not None:
		alerts.extend(_crop_alerts(insights))
	return alerts


class AlertsService:
	def __init__(self, redis_client: Redis | None = None):
		self.redis_client = redis_client
		self.settings = get_settings()

	async def get_alerts(
		self,
		report: WeatherReport,
		location_key: str,
		crop_type: str | None = None,
	) -> AlertsResponse:
		crop = crop_type or self.settings.default_crop_type
		dismissed = await self.dismissed_ids()
		alerts = [alert for alert in generate_alerts(report, crop) if alert.id not in dismissed]
		return AlertsResponse(
			location_key=location_key,
			crop_type=str(crop),
			generated_at=datetime.now(UTC),
			alerts=alerts,
		)

	async def dismissed_ids(self) -> set[str]:
		if self.redis_client is None:
			return set()
		members = await self.redis_client.smembers(DISMISSED_KEY)
		return {str(member) for member in members}

	async def dismiss(self, alert_id: str) -> bool:
		"""Hide an alert until the dismissal set expires."""
		if self.redis_client is None:
			raise RuntimeError("alert dismissal requires a cache backend")
		added = await self.redis_client.sadd(DISMISSED_KEY, alert_id)
		await self.redis_client.expire(DISMISSED_KEY, self.settings.alert_dismissal_ttl_seconds)
		_logger.info("alert_dismissed", extra={"alert_id": alert_id, "new": bool(added)})
		return True

	async def clear_dismissed(self) -> None:
		if self.redis_client is None:
			return
		await self.redis_client.delete(DISMISSED_KEY)
