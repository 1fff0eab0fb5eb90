"""Closed vocabularies shared by the advisory engine, schemas and services.

Each StrEnum serializes as its plain string value, so API payloads carry
``"wheat"`` / ``"critical"`` rather than enum reprs.
"""

from enum import StrEnum

# ── Crop catalogue ──────────────────────────────────────────────────────────


class CropTypeEnum(StrEnum):
    """Crops with a shipped optimal-conditions profile."""

    wheat = "wheat"
    rice = "rice"
    cotton = "cotton"
    sugarcane = "sugarcane"
    vegetables = "vegetables"


# ── Engine output enums ─────────────────────────────────────────────────────


class ConditionStatusEnum(StrEnum):
    """Classification of a current weather metric against a crop profile."""

    optimal = "optimal"
    good = "good"
    warning = "warning"
    critical = "critical"
    # precipitation-only statuses
    low = "low"
    excessive = "excessive"


class UrgencyEnum(StrEnum):
    """Irrigation priority tier derived from the rainfall deficit."""

    low = "low"
    medium = "medium"
    high = "high"


class RiskBandEnum(StrEnum):
    """Qualitative pest/disease band derived from the numeric risk score."""

    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


class SeverityEnum(StrEnum):
    """Severity of a single pest/disease syndrome or alert."""

    medium = "medium"
    high = "high"


class PriorityEnum(StrEnum):
    medium = "medium"
    high = "high"


# ── Alerts ──────────────────────────────────────────────────────────────────


class AlertTypeEnum(StrEnum):
    """Presentation tone of an alert."""

    info = "info"
    warning = "warning"
    error = "error"


class AlertCategoryEnum(StrEnum):
    temperature = "temperature"
    precipitation = "precipitation"
    wind = "wind"
    humidity = "humidity"
    uv = "uv"
    forecast = "forecast"
    crop = "crop"
    pest = "pest"
    irrigation = "irrigation"


# ── Assistant ───────────────────────────────────────────────────────────────


class AskLanguageEnum(StrEnum):
    en = "en"
    ur = "ur"


# ── Analytics ───────────────────────────────────────────────────────────────


class ChartMetricEnum(StrEnum):
    """History series available as chart data."""

    temperature = "temperature"
    humidity = "humidity"
    wind_speed = "wind_speed"
    rain_probability = "rain_probability"
    crop_risk = "crop_risk"
