"""Pydantic schemas for weather and crop alerts."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from cropadvisor.models.enums import AlertCategoryEnum, AlertTypeEnum, SeverityEnum
from cropadvisor.schemas.base import CamelModel


class Alert(CamelModel):
	id: str = Field(min_length=1, max_length=100)
	type: AlertTypeEnum
	severity: SeverityEnum
	title: str
	message: str
	category: AlertCategoryEnum


class AlertsResponse(CamelModel):
	location_key: str
	crop_type: str
	generated_at: datetime
	alerts: list[Alert] = Field(default_factory=list)


class DismissResponse(CamelModel):
	alert_id: str
	dismissed: bool
