"""Domain model package — enums and reference record types.

Import everything from here so callers get one stable surface:

    from agrisynch.models import CropType, GrowthStage, SoilProfile
"""

from agrisynch.models.enums import (
    CropType,
    GrowthStage,
    InsightCategory,
    InsightPriority,
    InsightRule,
    Language,
    SoilType,
    UsageMode,
    WaterRetention,
    WeatherCondition,
)
from agrisynch.models.reference import (
    AdvisoryRule,
    CropDataset,
    LocalizedName,
    SoilProfile,
)

__all__ = [
    # Enums
    "CropType",
    "GrowthStage",
    "InsightCategory",
    "InsightPriority",
    "InsightRule",
    "Language",
    "SoilType",
    "UsageMode",
    "WaterRetention",
    "WeatherCondition",
    # Reference records
    "AdvisoryRule",
    "CropDataset",
    "LocalizedName",
    "SoilProfile",
]
