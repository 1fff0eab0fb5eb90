"""Reference data and vocabularies — importing this module exposes every enum and
the crop profile table::

    from cropadvisor.models import CROP_PROFILES, CropTypeEnum, get_profile
"""

# ── Crop reference ──────────────────────────────────────────────────────────
from cropadvisor.models.crops import CROP_PROFILES, CropProfile, get_profile

# ── Enums ───────────────────────────────────────────────────────────────────
from cropadvisor.models.enums import (
    AlertCategoryEnum,
    AlertTypeEnum,
    AskLanguageEnum,
    ChartMetricEnum,
    ConditionStatusEnum,
    CropTypeEnum,
    PriorityEnum,
    RiskBandEnum,
    SeverityEnum,
    UrgencyEnum,
)

__all__ = [
    # Crop reference
    "CROP_PROFILES",
    "CropProfile",
    "get_profile",
    # Enums
    "AlertCategoryEnum",
    "AlertTypeEnum",
    "AskLanguageEnum",
    "ChartMetricEnum",
    "ConditionStatusEnum",
    "CropTypeEnum",
    "PriorityEnum",
    "RiskBandEnum",
    "SeverityEnum",
    "UrgencyEnum",
]
