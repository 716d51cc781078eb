"""Reference record types for the static advisory datasets.

These are plain frozen dataclasses: the datasets are built once at import
and shared read-only across requests, so nothing here ever mutates.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from agrisynch.models.enums import GrowthStage, Language, SoilType, WaterRetention


@dataclass(frozen=True, slots=True)
class LocalizedName:
    """Display name in each supported language (English is the fallback)."""

    en: str
    hi: str = ""
    mr: str = ""

    def resolve(self, language: Language) -> str:
        value = getattr(self, language.value, "")
        return value or self.en


@dataclass(frozen=True, slots=True)
class AdvisoryRule:
    """Static guidance for one crop type at one growth stage."""

    stage: GrowthStage
    fertilizer: str
    pest_alert: str
    irrigation: str
    tips: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class CropDataset:
    name: LocalizedName
    advisories: Mapping[GrowthStage, AdvisoryRule]


@dataclass(frozen=True, slots=True)
class SoilProfile:
    type: SoilType
    name: LocalizedName
    water_retention: WaterRetention
    drainage: str
    fertility: str
    action_tips: tuple[str, ...] = field(default_factory=tuple)
