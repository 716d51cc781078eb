"""Offline forward-insight compiler.

Pure function over an ``AppState`` snapshot: for each plot it combines the
stage advisory, forecast-driven weather rules and the soil profile into a
list of insights. Nothing is cached between calls and nothing here performs
I/O, so concurrent invocations are safe.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime

import structlog

from agrisynch.data.reference import CROP_DATASETS, SOIL_PROFILES
from agrisynch.models.enums import (
	GrowthStage,
	InsightCategory,
	InsightPriority,
	InsightRule,
	WaterRetention,
	WeatherCondition,
)
from agrisynch.schemas.advisory import AppState, FarmerCrop, Insight, WeatherDay
from agrisynch.services.growth_stage import calculate_growth_stage

HIGH_PRECIP_THRESHOLD = 70
DRY_PRECIP_THRESHOLD = 20
ELEVATED_PEST_STAGES = frozenset({GrowthStage.flowering, GrowthStage.harvest})
IRRIGATION_STAGES = frozenset({GrowthStage.vegetative, GrowthStage.flowering})
ACTION_DATE_FORMAT = "%d %b %Y"

_WET_CONDITIONS = frozenset({WeatherCondition.rainy, WeatherCondition.storm})

_logger = structlog.get_logger("agrisynch.advisory_engine")


@dataclass(frozen=True, slots=True)
class AdvisoryPolicy:
	"""Thresholds the weather and stage rules compare against."""

	high_precip_threshold: int = HIGH_PRECIP_THRESHOLD
	dry_precip_threshold: int = DRY_PRECIP_THRESHOLD
	elevated_pest_stages: frozenset[GrowthStage] = ELEVATED_PEST_STAGES
	irrigation_stages: frozenset[GrowthStage] = IRRIGATION_STAGES
	action_date_format: str = ACTION_DATE_FORMAT


@dataclass(frozen=True, slots=True)
class ForecastOutlook:
	"""Plot-independent facts about the forecast, computed once per call."""

	waterlogging_day: WeatherDay | None = None
	dry_spell: bool = False
	days: int = 0


def assess_forecast(snapshot: Sequence[WeatherDay], policy: AdvisoryPolicy) -> ForecastOutlook:
	if not snapshot:
		return ForecastOutlook()

	waterlogging_day = next(
		(
			day
			for day in snapshot
			if day.condition is WeatherCondition.storm
			or (
				day.condition is WeatherCondition.rainy
				and day.precip_chance > policy.high_precip_threshold
			)
		),
		None,
	)
	dry_spell = (
		snapshot[0].condition is WeatherCondition.sunny
		and all(day.condition not in _WET_CONDITIONS for day in snapshot)
		and all(day.precip_chance <= policy.dry_precip_threshold for day in snapshot)
	)
	return ForecastOutlook(waterlogging_day=waterlogging_day, dry_spell=dry_spell, days=len(snapshot))


def _stage_title(stage: GrowthStage, category: InsightCategory) -> str:
	return f"{stage.value.capitalize()} stage: {category.value} advisory"


def _plot_insights(
	crop: FarmerCrop,
	stage: GrowthStage,
	outlook: ForecastOutlook,
	action_date: str,
	policy: AdvisoryPolicy,
) -> Iterator[Insight]:
	def build(**kwargs: object) -> Insight:
		return Insight(crop_id=crop.id, crop_nickname=crop.nickname, stage=stage, **kwargs)

	rule = CROP_DATASETS[crop.type].advisories[stage]

	if rule.fertilizer:
		yield build(
			title=_stage_title(stage, InsightCategory.fertilizer),
			description=rule.fertilizer,
			priority=InsightPriority.normal,
			category=InsightCategory.fertilizer,
			action_date=action_date,
			rule=InsightRule.stage_fertilizer,
		)

	if rule.pest_alert:
		yield build(
			title=_stage_title(stage, InsightCategory.pest),
			description=rule.pest_alert,
			priority=(
				InsightPriority.warning
				if stage in policy.elevated_pest_stages
				else InsightPriority.normal
			),
			category=InsightCategory.pest,
			action_date=action_date,
			rule=InsightRule.stage_pest,
		)

	if outlook.waterlogging_day is not None:
		day = outlook.waterlogging_day
		yield build(
			title="Waterlogging risk",
			description=(
				f"{day.condition.value.capitalize()} expected ({day.precip_chance}% chance of rain). "
				"Clear field drainage channels and postpone fertilizer and spray applications."
			),
			priority=InsightPriority.critical,
			category=InsightCategory.weather,
			action_date=day.date,
			rule=InsightRule.weather_waterlogging,
		)
	elif outlook.dry_spell and stage in policy.irrigation_stages:
		yield build(
			title="Irrigation reminder",
			description=rule.irrigation or f"No rain expected for {outlook.days} days. Plan irrigation.",
			priority=InsightPriority.warning,
			category=InsightCategory.weather,
			action_date=action_date,
			rule=InsightRule.weather_irrigation,
		)

	profile = SOIL_PROFILES[crop.soil_type]
	if profile.water_retention is WaterRetention.low:
		yield build(
			title=f"{profile.name.en} soil: irrigation frequency",
			description=profile.action_tips[0],
			priority=InsightPriority.normal,
			category=InsightCategory.soil,
			action_date=action_date,
			rule=InsightRule.soil_low_retention,
		)


def compute_forward_insights(
	state: AppState,
	reference_date: date | datetime | None = None,
	policy: AdvisoryPolicy | None = None,
) -> list[Insight]:
	"""Compile the prioritized insight list for every plot in ``state``.

	Plots keep registration order; within a plot insights are ordered
	critical, warning, normal (stable). Each (plot id, category) pair appears
	at most once. The list is never truncated.
	"""
	policy = policy or AdvisoryPolicy()
	if reference_date is None:
		reference_date = datetime.now(UTC).date()
	elif isinstance(reference_date, datetime):
		reference_date = reference_date.date()

	outlook = assess_forecast(state.weather_snapshot, policy)
	action_date = reference_date.strftime(policy.action_date_format)

	insights: list[Insight] = []
	emitted: set[tuple[str, InsightCategory]] = set()
	for crop in state.crops:
		stage = calculate_growth_stage(crop.type, crop.sowing_date, reference_date)
		plot_insights: list[Insight] = []
		for insight in _plot_insights(crop, stage, outlook, action_date, policy):
			key = (insight.crop_id, insight.category)
			if key in emitted:
				_logger.warning("duplicate_insight_dropped", crop_id=crop.id, category=insight.category.value)
				continue
			emitted.add(key)
			plot_insights.append(insight)
		plot_insights.sort(key=lambda item: item.priority.rank)
		insights.extend(plot_insights)
	return insights
