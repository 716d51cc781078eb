"""Enumerated domain values shared by the engine, reference data and schemas.

Every reference table is keyed by these enums, so a missing member shows up
as a completeness failure at import time rather than a lookup miss at
request time.
"""

from enum import StrEnum

# ── Plot enums ──────────────────────────────────────────────────────────────


class CropType(StrEnum):
    """Crop grown on a farmer-registered plot."""

    rice = "rice"
    wheat = "wheat"
    maize = "maize"
    cotton = "cotton"
    sugarcane = "sugarcane"
    pulses = "pulses"
    vegetables = "vegetables"


class SoilType(StrEnum):
    """Regional soil classification."""

    alluvial = "alluvial"
    black = "black"
    red = "red"
    laterite = "laterite"
    sandy = "sandy"

    @classmethod
    def _missing_(cls, value: object) -> "SoilType | None":
        # Older stored snapshots spell laterite as "latrite".
        if isinstance(value, str) and value.lower() == "latrite":
            return cls.laterite
        return None


class GrowthStage(StrEnum):
    """Lifecycle stage of a plot, declared in cycle order."""

    sowing = "sowing"
    vegetative = "vegetative"
    flowering = "flowering"
    maturity = "maturity"
    harvest = "harvest"

    @property
    def position(self) -> int:
        return list(GrowthStage).index(self)


# ── Weather / soil enums ────────────────────────────────────────────────────


class WeatherCondition(StrEnum):
    sunny = "sunny"
    rainy = "rainy"
    cloudy = "cloudy"
    storm = "storm"


class WaterRetention(StrEnum):
    low = "Low"
    medium = "Medium"
    high = "High"


# ── Insight enums ───────────────────────────────────────────────────────────


class InsightPriority(StrEnum):
    """Urgency of an insight, declared most urgent first."""

    critical = "critical"
    warning = "warning"
    normal = "normal"

    @property
    def rank(self) -> int:
        return list(InsightPriority).index(self)


class InsightCategory(StrEnum):
    weather = "Weather"
    soil = "Soil"
    pest = "Pest"
    fertilizer = "Fertilizer"


class InsightRule(StrEnum):
    """Stable key of the rule that produced an insight."""

    stage_fertilizer = "stage_fertilizer"
    stage_pest = "stage_pest"
    weather_waterlogging = "weather_waterlogging"
    weather_irrigation = "weather_irrigation"
    soil_low_retention = "soil_low_retention"


# ── Presentation enums ──────────────────────────────────────────────────────


class Language(StrEnum):
    english = "en"
    hindi = "hi"
    marathi = "mr"


class UsageMode(StrEnum):
    simple = "simple"
    advanced = "advanced"
