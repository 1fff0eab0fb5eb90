"""CropProfile reference table — per-crop optimal growing conditions.

Each profile carries absolute tolerable bounds plus a narrower optimal
sub-range for temperature (°C), humidity (%) and rainfall (mm over the
planning horizon), and ceilings for wind (km/h) and UV index::

    CROP_PROFILES[CropTypeEnum.wheat].temp_optimal  # (15, 20)

The table is built once at import and exposed read-only.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from cropadvisor.models.enums import CropTypeEnum

Range = tuple[float, float]


class CropProfile(BaseModel):
    """Agronomic reference: optimal-range parameters for one crop type."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    temp_min: float
    temp_max: float
    temp_optimal: Range
    humidity_min: float
    humidity_max: float
    humidity_optimal: Range
    rainfall_min: float
    rainfall_max: float
    rainfall_optimal: Range
    wind_max: float
    uv_index_max: float

    def is_consistent(self) -> bool:
        """True when every optimal sub-range sits inside its absolute bounds."""
        return (
            self.temp_min <= self.temp_optimal[0] <= self.temp_optimal[1] <= self.temp_max
            and self.humidity_min
            <= self.humidity_optimal[0]
            <= self.humidity_optimal[1]
            <= self.humidity_max
        )


CROP_PROFILES: Mapping[CropTypeEnum, CropProfile] = MappingProxyType(
    {
        CropTypeEnum.wheat: CropProfile(
            temp_min=10,
            temp_max=25,
            temp_optimal=(15, 20),
            humidity_min=40,
            humidity_max=70,
            humidity_optimal=(50, 60),
            rainfall_min=25,
            rainfall_max=75,
            rainfall_optimal=(40, 60),
            wind_max=30,
            uv_index_max=8,
        ),
        CropTypeEnum.rice: CropProfile(
            temp_min=20,
            temp_max=35,
            temp_optimal=(25, 30),
            humidity_min=70,
            humidity_max=90,
            humidity_optimal=(75, 85),
            rainfall_min=100,
            rainfall_max=200,
            rainfall_optimal=(120, 180),
            wind_max=20,
            uv_index_max=7,
        ),
        CropTypeEnum.cotton: CropProfile(
            temp_min=21,
            temp_max=30,
            temp_optimal=(24, 28),
            humidity_min=50,
            humidity_max=80,
            humidity_optimal=(60, 70),
            rainfall_min=50,
            rainfall_max=100,
            rainfall_optimal=(60, 80),
            wind_max=25,
            uv_index_max=9,
        ),
        CropTypeEnum.sugarcane: CropProfile(
            temp_min=20,
            temp_max=35,
            temp_optimal=(26, 32),
            humidity_min=60,
            humidity_max=85,
            humidity_optimal=(70, 80),
            rainfall_min=75,
            rainfall_max=150,
            rainfall_optimal=(100, 130),
            wind_max=30,
            uv_index_max=8,
        ),
        CropTypeEnum.vegetables: CropProfile(
            temp_min=15,
            temp_max=28,
            temp_optimal=(18, 24),
            humidity_min=50,
            humidity_max=75,
            humidity_optimal=(60, 70),
            rainfall_min=30,
            rainfall_max=80,
            rainfall_optimal=(40, 60),
            wind_max=25,
            uv_index_max=7,
        ),
    }
)


def get_profile(crop_type: str | CropTypeEnum | None) -> CropProfile | None:
    """Look up a profile by crop identifier; unknown identifiers give None."""
    if crop_type is None:
        return None
    try:
        return CROP_PROFILES.get(CropTypeEnum(crop_type))
    except ValueError:
        return None
