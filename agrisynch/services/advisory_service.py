"""Advisory facade — runs the engine, localizes output and shapes the display feed."""

from __future__ import annotations

from datetime import UTC, date, datetime

import structlog

from agrisynch.config import Settings, get_settings
from agrisynch.data.reference import SOIL_PROFILES, STAGE_DURATIONS
from agrisynch.models.enums import CropType, InsightPriority, Language, SoilType
from agrisynch.schemas.advisory import (
	AppState,
	CropReferenceItem,
	GrowthStageResponse,
	Insight,
	InsightsResponse,
	SoilReferenceItem,
)
from agrisynch.services.advisory_engine import compute_forward_insights
from agrisynch.services.growth_stage import growth_timeline
from agrisynch.services.localization import crop_name, localize_insight, soil_name

_logger = structlog.get_logger("agrisynch.advisory")


class AdvisoryService:
	def __init__(self, settings: Settings | None = None):
		self.settings = settings or get_settings()
		self.policy = self.settings.advisory_policy()

	@staticmethod
	def _today() -> date:
		return datetime.now(UTC).date()

	def compute_insights(self, state: AppState, reference_date: date | None = None) -> InsightsResponse:
		reference_date = reference_date or self._today()
		insights = compute_forward_insights(state, reference_date=reference_date, policy=self.policy)
		localized = self._localize(state, insights)

		_logger.info(
			"insights_computed",
			plots=len(state.crops),
			forecast_days=len(state.weather_snapshot),
			insights=len(localized),
			critical=sum(1 for item in localized if item.priority is InsightPriority.critical),
		)
		return InsightsResponse(
			generated_at=datetime.now(UTC),
			reference_date=reference_date,
			language=state.language,
			total=len(localized),
			insights=localized,
		)

	def build_feed(
		self,
		state: AppState,
		reference_date: date | None = None,
		limit: int | None = None,
	) -> InsightsResponse:
		"""Insights as shown on the home screen: filtered, then truncated."""
		full = self.compute_insights(state, reference_date)
		items = full.insights
		if state.settings.critical_alerts_only or self.settings.critical_alerts_only:
			items = [item for item in items if item.priority is InsightPriority.critical]
		items = items[: limit or self.settings.feed_size]
		return full.model_copy(update={"insights": items})

	def growth_status(
		self,
		crop_type: CropType,
		sowing_date: date,
		reference_date: date | None = None,
	) -> GrowthStageResponse:
		timeline = growth_timeline(crop_type, sowing_date, reference_date or self._today())
		return GrowthStageResponse(
			crop_type=timeline.crop_type,
			stage=timeline.stage,
			stage_index=timeline.stage_index,
			days_elapsed=timeline.days_elapsed,
			days_to_next_stage=timeline.days_to_next_stage,
			total_cycle_days=timeline.total_cycle_days,
		)

	@staticmethod
	def reference_crops(language: Language) -> list[CropReferenceItem]:
		return [
			CropReferenceItem(
				crop_type=crop_type,
				name=crop_name(crop_type, language),
				stage_durations=dict(STAGE_DURATIONS[crop_type]),
			)
			for crop_type in CropType
		]

	@staticmethod
	def reference_soils(language: Language) -> list[SoilReferenceItem]:
		items: list[SoilReferenceItem] = []
		for soil_type in SoilType:
			profile = SOIL_PROFILES[soil_type]
			items.append(
				SoilReferenceItem(
					soil_type=soil_type,
					name=soil_name(soil_type, language),
					water_retention=profile.water_retention.value,
					drainage=profile.drainage,
					fertility=profile.fertility,
					action_tips=list(profile.action_tips),
				)
			)
		return items

	@staticmethod
	def _localize(state: AppState, insights: list[Insight]) -> list[Insight]:
		if state.language is Language.english:
			return insights
		soil_by_crop = {crop.id: crop.soil_type for crop in state.crops}
		return [
			localize_insight(item, state.language, soil_by_crop.get(item.crop_id))
			for item in insights
		]
