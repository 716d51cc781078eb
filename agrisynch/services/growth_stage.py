"""Growth stage calculation from crop type, sowing date and a reference date."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from itertools import accumulate

from agrisynch.data.reference import STAGE_DURATIONS
from agrisynch.models.enums import CropType, GrowthStage

_STAGES: tuple[GrowthStage, ...] = tuple(GrowthStage)


@dataclass(frozen=True, slots=True)
class GrowthTimeline:
	crop_type: CropType
	stage: GrowthStage
	stage_index: int
	days_elapsed: int
	days_to_next_stage: int | None
	total_cycle_days: int


def _as_date(value: date | datetime) -> date:
	if isinstance(value, datetime):
		return value.date()
	return value


def elapsed_days(sowing_date: date | datetime, reference_date: date | datetime) -> int:
	"""Whole days since sowing, clamped at zero for future sowing dates."""
	return max(0, (_as_date(reference_date) - _as_date(sowing_date)).days)


def stage_thresholds(crop_type: CropType) -> tuple[int, ...]:
	"""Cumulative exclusive upper bounds (in days) for each stage, in cycle order."""
	durations = STAGE_DURATIONS[crop_type]
	return tuple(accumulate(durations[stage] for stage in _STAGES))


def _stage_index(crop_type: CropType, days: int) -> int:
	for idx, threshold in enumerate(stage_thresholds(crop_type)):
		if days < threshold:
			return idx
	return len(_STAGES) - 1


def calculate_growth_stage(
	crop_type: CropType,
	sowing_date: date | datetime,
	reference_date: date | datetime,
) -> GrowthStage:
	"""Map a plot's age onto its crop's stage table.

	A day count equal to a stage's threshold belongs to the following stage.
	Past the last threshold the plot stays in ``harvest``.
	"""
	days = elapsed_days(sowing_date, reference_date)
	return _STAGES[_stage_index(crop_type, days)]


def growth_timeline(
	crop_type: CropType,
	sowing_date: date | datetime,
	reference_date: date | datetime,
) -> GrowthTimeline:
	days = elapsed_days(sowing_date, reference_date)
	thresholds = stage_thresholds(crop_type)
	idx = _stage_index(crop_type, days)
	stage = _STAGES[idx]

	days_to_next: int | None = None
	if stage is not GrowthStage.harvest:
		days_to_next = thresholds[idx] - days

	return GrowthTimeline(
		crop_type=crop_type,
		stage=stage,
		stage_index=idx,
		days_elapsed=days,
		days_to_next_stage=days_to_next,
		total_cycle_days=thresholds[-1],
	)
