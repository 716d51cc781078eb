"""Pydantic schemas for the application snapshot, insights and advisory endpoints."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from agrisynch.models.enums import (
	CropType,
	GrowthStage,
	InsightCategory,
	InsightPriority,
	InsightRule,
	Language,
	SoilType,
	UsageMode,
	WeatherCondition,
)


class FarmerCrop(BaseModel):
	"""A farmer-registered plot. Edits replace the whole record by id."""

	model_config = ConfigDict(frozen=True, populate_by_name=True)

	id: str = Field(min_length=1, max_length=64)
	type: CropType
	sowing_date: date = Field(alias="sowingDate")
	soil_type: SoilType = Field(alias="soilType")
	region: str = Field(default="Default", max_length=120)
	nickname: str = Field(default="", max_length=120)

	@field_validator("sowing_date", mode="before")
	@classmethod
	def _drop_time_of_day(cls, value: Any) -> Any:
		if isinstance(value, datetime):
			return value.date()
		if isinstance(value, str) and "T" in value:
			return value.split("T", 1)[0]
		return value


class WeatherDay(BaseModel):
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	date: str
	temp: float
	condition: WeatherCondition
	precip_chance: int = Field(default=0, ge=0, le=100, alias="precipChance")


class UserSettings(BaseModel):
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	critical_alerts_only: bool = Field(default=False, alias="criticalAlertsOnly")
	usage_mode: UsageMode = Field(default=UsageMode.simple, alias="usageMode")


class AppState(BaseModel):
	"""Immutable snapshot of everything the advisory engine reads."""

	model_config = ConfigDict(frozen=True, populate_by_name=True)

	language: Language = Language.english
	crops: tuple[FarmerCrop, ...] = ()
	weather_snapshot: tuple[WeatherDay, ...] = Field(default=(), alias="weatherSnapshot")
	settings: UserSettings = Field(default_factory=UserSettings)

	@model_validator(mode="after")
	def _validate_unique_crop_ids(self) -> "AppState":
		seen: set[str] = set()
		for crop in self.crops:
			if crop.id in seen:
				raise ValueError(f"duplicate crop id {crop.id!r}")
			seen.add(crop.id)
		return self

	def with_crop(self, crop: FarmerCrop) -> "AppState":
		"""Register ``crop``, replacing any plot with the same id in place."""
		crops = list(self.crops)
		for idx, existing in enumerate(crops):
			if existing.id == crop.id:
				crops[idx] = crop
				break
		else:
			crops.append(crop)
		return self.model_copy(update={"crops": tuple(crops)})

	def without_crop(self, crop_id: str) -> "AppState":
		remaining = tuple(crop for crop in self.crops if crop.id != crop_id)
		if len(remaining) == len(self.crops):
			raise LookupError(f"Crop {crop_id} not found")
		return self.model_copy(update={"crops": remaining})


class Insight(BaseModel):
	"""One actionable recommendation for one plot."""

	model_config = ConfigDict(frozen=True)

	crop_id: str
	crop_nickname: str
	title: str
	description: str
	priority: InsightPriority
	category: InsightCategory
	action_date: str
	rule: InsightRule
	stage: GrowthStage


# ── Endpoint payloads ───────────────────────────────────────────────────────


class InsightsRequest(BaseModel):
	state: AppState
	reference_date: date | None = None


class FeedRequest(InsightsRequest):
	limit: int | None = Field(default=None, ge=1, le=50)


class InsightsResponse(BaseModel):
	generated_at: datetime
	reference_date: date
	language: Language
	total: int
	insights: list[Insight] = Field(default_factory=list)


class GrowthStageRequest(BaseModel):
	crop_type: CropType
	sowing_date: date
	reference_date: date | None = None


class GrowthStageResponse(BaseModel):
	crop_type: CropType
	stage: GrowthStage
	stage_index: int
	days_elapsed: int
	days_to_next_stage: int | None = None
	total_cycle_days: int


class CropReferenceItem(BaseModel):
	crop_type: CropType
	name: str
	stage_durations: dict[GrowthStage, int]


class SoilReferenceItem(BaseModel):
	soil_type: SoilType
	name: str
	water_retention: str
	drainage: str
	fertility: str
	action_tips: list[str] = Field(default_factory=list)
