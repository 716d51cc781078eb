"""Display-language resolution at the presentation boundary.

The engine produces English text plus structured ``rule``/``stage`` keys;
this module rebuilds titles in the requested language. Advisory bodies are
reference text and fall back to English.
"""

from __future__ import annotations

from agrisynch.data.reference import CROP_DATASETS, SOIL_PROFILES
from agrisynch.models.enums import (
	CropType,
	GrowthStage,
	InsightCategory,
	InsightRule,
	Language,
	SoilType,
)
from agrisynch.models.reference import LocalizedName
from agrisynch.schemas.advisory import Insight

_STAGE_LABELS: dict[GrowthStage, LocalizedName] = {
	GrowthStage.sowing: LocalizedName(en="Sowing", hi="बुवाई", mr="पेरणी"),
	GrowthStage.vegetative: LocalizedName(en="Vegetative", hi="वानस्पतिक", mr="शाकीय"),
	GrowthStage.flowering: LocalizedName(en="Flowering", hi="फूल", mr="फुलोरा"),
	GrowthStage.maturity: LocalizedName(en="Maturity", hi="परिपक्वता", mr="परिपक्वता"),
	GrowthStage.harvest: LocalizedName(en="Harvest", hi="कटाई", mr="कापणी"),
}

_CATEGORY_LABELS: dict[InsightCategory, LocalizedName] = {
	InsightCategory.weather: LocalizedName(en="Weather", hi="मौसम", mr="हवामान"),
	InsightCategory.soil: LocalizedName(en="Soil", hi="मिट्टी", mr="माती"),
	InsightCategory.pest: LocalizedName(en="Pest", hi="कीट", mr="कीड"),
	InsightCategory.fertilizer: LocalizedName(en="Fertilizer", hi="उर्वरक", mr="खत"),
}

_RULE_TITLES: dict[InsightRule, LocalizedName] = {
	InsightRule.stage_fertilizer: LocalizedName(
		en="{stage} stage: {category} advisory",
		hi="{stage} अवस्था: {category} सलाह",
		mr="{stage} अवस्था: {category} सल्ला",
	),
	InsightRule.stage_pest: LocalizedName(
		en="{stage} stage: {category} advisory",
		hi="{stage} अवस्था: {category} सलाह",
		mr="{stage} अवस्था: {category} सल्ला",
	),
	InsightRule.weather_waterlogging: LocalizedName(
		en="Waterlogging risk",
		hi="जलभराव का खतरा",
		mr="पाणी साचण्याचा धोका",
	),
	InsightRule.weather_irrigation: LocalizedName(
		en="Irrigation reminder",
		hi="सिंचाई अनुस्मारक",
		mr="पाणी देण्याची आठवण",
	),
	InsightRule.soil_low_retention: LocalizedName(
		en="{soil} soil: irrigation frequency",
		hi="{soil} मिट्टी: सिंचाई की आवृत्ति",
		mr="{soil} माती: पाणी देण्याची वारंवारता",
	),
}


def crop_name(crop_type: CropType, language: Language) -> str:
	return CROP_DATASETS[crop_type].name.resolve(language)


def soil_name(soil_type: SoilType, language: Language) -> str:
	return SOIL_PROFILES[soil_type].name.resolve(language)


def stage_label(stage: GrowthStage, language: Language) -> str:
	return _STAGE_LABELS[stage].resolve(language)


def category_label(category: InsightCategory, language: Language) -> str:
	return _CATEGORY_LABELS[category].resolve(language)


def localize_insight(insight: Insight, language: Language, soil_type: SoilType | None = None) -> Insight:
	"""Return ``insight`` with its title rendered in ``language``.

	Soil titles need the plot's soil type; without it the title is left as is.
	"""
	if language is Language.english:
		return insight
	if insight.rule is InsightRule.soil_low_retention and soil_type is None:
		return insight

	template = _RULE_TITLES[insight.rule].resolve(language)
	title = template.format(
		stage=stage_label(insight.stage, language),
		category=category_label(insight.category, language),
		soil=soil_name(soil_type, language) if soil_type is not None else "",
	)
	return insight.model_copy(update={"title": title})
