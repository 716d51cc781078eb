from __future__ import annotations

from collections import Counter
from datetime import date, datetime

import pytest

from agrisynch.data.reference import CROP_DATASETS, SOIL_PROFILES
from agrisynch.models.enums import (
    CropType,
    GrowthStage,
    InsightCategory,
    InsightPriority,
    InsightRule,
    SoilType,
)
from agrisynch.services.advisory_engine import AdvisoryPolicy, assess_forecast, compute_forward_insights


def _categories(insights) -> list[InsightCategory]:
    return [item.category for item in insights]


def test_empty_plot_collection_yields_nothing(make_state, make_forecast, reference_date) -> None:
    state = make_state(weather=make_forecast(("storm", 90)))
    assert compute_forward_insights(state, reference_date) == []


def test_end_to_end_rice_on_sandy_soil(make_crop, make_forecast, make_state, reference_date) -> None:
    crop = make_crop(crop_type=CropType.rice, days_ago=100, soil_type=SoilType.sandy, nickname="River plot")
    weather = make_forecast(("sunny", 0), ("sunny", 0), ("storm", 80), ("cloudy", 20))

    insights = compute_forward_insights(make_state(crops=(crop,), weather=weather), reference_date)

    assert _categories(insights) == [
        InsightCategory.weather,
        InsightCategory.fertilizer,
        InsightCategory.pest,
        InsightCategory.soil,
    ]
    assert {item.crop_nickname for item in insights} == {"River plot"}
    assert {item.stage for item in insights} == {GrowthStage.maturity}

    weather_insight = insights[0]
    assert weather_insight.priority is InsightPriority.critical
    assert weather_insight.rule is InsightRule.weather_waterlogging
    assert weather_insight.action_date == weather[2].date

    advisory = CROP_DATASETS[CropType.rice].advisories[GrowthStage.maturity]
    assert insights[1].description == advisory.fertilizer
    assert insights[2].description == advisory.pest_alert
    assert insights[1].action_date == "18 Oct 2026"
    assert insights[3].description == SOIL_PROFILES[SoilType.sandy].action_tips[0]


def test_storm_gives_every_plot_a_critical_weather_insight(
    make_crop, make_forecast, make_state, reference_date
) -> None:
    crops = tuple(
        make_crop(crop_id=f"plot-{idx}", crop_type=crop_type, days_ago=idx * 17)
        for idx, crop_type in enumerate(CropType)
    )
    weather = make_forecast(("cloudy", 10), ("cloudy", 30), ("cloudy", 40), ("storm", 60))

    insights = compute_forward_insights(make_state(crops=crops, weather=weather), reference_date)

    for crop in crops:
        critical = [
            item
            for item in insights
            if item.crop_id == crop.id
            and item.category is InsightCategory.weather
            and item.priority is InsightPriority.critical
        ]
        assert len(critical) == 1


@pytest.mark.parametrize(("precip", "expected_critical"), [(70, False), (71, True)])
def test_rainy_day_needs_high_precipitation_to_be_critical(
    make_crop, make_forecast, make_state, reference_date, precip: int, expected_critical: bool
) -> None:
    crop = make_crop(days_ago=100)
    weather = make_forecast(("cloudy", 10), ("rainy", precip))

    insights = compute_forward_insights(make_state(crops=(crop,), weather=weather), reference_date)

    has_critical = any(item.priority is InsightPriority.critical for item in insights)
    assert has_critical is expected_critical


def test_dry_spell_in_vegetative_stage_reminds_to_irrigate(
    make_crop, make_forecast, make_state, reference_date
) -> None:
    crop = make_crop(crop_type=CropType.rice, days_ago=30)
    weather = make_forecast(("sunny", 0), ("sunny", 0), ("sunny", 0), ("sunny", 0))

    insights = compute_forward_insights(make_state(crops=(crop,), weather=weather), reference_date)

    reminder = insights[0]
    assert reminder.category is InsightCategory.weather
    assert reminder.priority is InsightPriority.warning
    assert reminder.rule is InsightRule.weather_irrigation
    assert reminder.description == CROP_DATASETS[CropType.rice].advisories[GrowthStage.vegetative].irrigation


@pytest.mark.parametrize("days_ago", [5, 100, 130])
def test_dry_spell_outside_irrigation_stages_is_silent(
    make_crop, make_forecast, make_state, reference_date, days_ago: int
) -> None:
    crop = make_crop(crop_type=CropType.rice, days_ago=days_ago)
    weather = make_forecast(("sunny", 0), ("sunny", 0))

    insights = compute_forward_insights(make_state(crops=(crop,), weather=weather), reference_date)

    assert InsightCategory.weather not in _categories(insights)


@pytest.mark.parametrize(
    "forecast",
    [
        (("cloudy", 0), ("sunny", 0)),
        (("sunny", 0), ("rainy", 40)),
        (("sunny", 0), ("sunny", 35)),
    ],
)
def test_irrigation_reminder_requires_a_dry_sunny_outlook(
    make_crop, make_forecast, make_state, reference_date, forecast
) -> None:
    crop = make_crop(crop_type=CropType.rice, days_ago=30)

    insights = compute_forward_insights(
        make_state(crops=(crop,), weather=make_forecast(*forecast)), reference_date
    )

    assert InsightCategory.weather not in _categories(insights)


def test_empty_forecast_produces_no_weather_insights(make_crop, make_state, reference_date) -> None:
    crop = make_crop(days_ago=30, soil_type=SoilType.sandy)

    insights = compute_forward_insights(make_state(crops=(crop,)), reference_date)

    assert _categories(insights) == [
        InsightCategory.fertilizer,
        InsightCategory.pest,
        InsightCategory.soil,
    ]


def test_low_retention_soil_yields_exactly_one_soil_insight(
    make_crop, make_forecast, make_state, reference_date
) -> None:
    crops = (
        make_crop(crop_id="sandy", soil_type=SoilType.sandy, days_ago=10),
        make_crop(crop_id="black", soil_type=SoilType.black, days_ago=10),
    )
    weather = make_forecast(("sunny", 0), ("sunny", 0))

    insights = compute_forward_insights(make_state(crops=crops, weather=weather), reference_date)

    soil = [item for item in insights if item.category is InsightCategory.soil]
    assert [item.crop_id for item in soil] == ["sandy"]
    assert soil[0].priority is InsightPriority.normal


def test_pest_alert_is_raised_during_flowering(make_crop, make_state, reference_date) -> None:
    crop = make_crop(crop_type=CropType.rice, days_ago=70)

    insights = compute_forward_insights(make_state(crops=(crop,)), reference_date)

    assert [(item.category, item.priority) for item in insights] == [
        (InsightCategory.pest, InsightPriority.warning),
        (InsightCategory.fertilizer, InsightPriority.normal),
    ]


def test_policy_controls_pest_escalation(make_crop, make_state, reference_date) -> None:
    crop = make_crop(crop_type=CropType.rice, days_ago=70)
    policy = AdvisoryPolicy(elevated_pest_stages=frozenset())

    insights = compute_forward_insights(make_state(crops=(crop,)), reference_date, policy)

    assert all(item.priority is InsightPriority.normal for item in insights)


def test_insights_are_grouped_by_plot_and_ordered_by_priority(
    make_crop, make_forecast, make_state, reference_date
) -> None:
    crops = (
        make_crop(crop_id="b-first", crop_type=CropType.cotton, days_ago=70, soil_type=SoilType.sandy),
        make_crop(crop_id="a-second", crop_type=CropType.maize, days_ago=3),
        make_crop(crop_id="c-third", crop_type=CropType.sugarcane, days_ago=500, soil_type=SoilType.sandy),
    )
    weather = make_forecast(("rainy", 95), ("cloudy", 50))

    insights = compute_forward_insights(make_state(crops=crops, weather=weather), reference_date)

    plot_order = list(dict.fromkeys(item.crop_id for item in insights))
    assert plot_order == ["b-first", "a-second", "c-third"]

    for crop in crops:
        ranks = [item.priority.rank for item in insights if item.crop_id == crop.id]
        assert ranks == sorted(ranks)
        assert ranks[0] == InsightPriority.critical.rank


def test_no_duplicate_plot_category_pairs(make_crop, make_forecast, make_state, reference_date) -> None:
    crops = tuple(
        make_crop(crop_id=f"{crop_type}-{soil_type}", crop_type=crop_type, soil_type=soil_type, days_ago=45)
        for crop_type in CropType
        for soil_type in SoilType
    )
    weather = make_forecast(("storm", 90), ("rainy", 99), ("storm", 100), ("sunny", 0))

    insights = compute_forward_insights(make_state(crops=crops, weather=weather), reference_date)

    pairs = Counter((item.crop_id, item.category) for item in insights)
    assert max(pairs.values()) == 1


def test_results_are_recomputed_not_cached(make_crop, make_forecast, make_state, reference_date) -> None:
    crop = make_crop(days_ago=30)
    dry = make_state(crops=(crop,), weather=make_forecast(("sunny", 0)))
    stormy = make_state(crops=(crop,), weather=make_forecast(("storm", 90)))

    first = compute_forward_insights(dry, reference_date)
    second = compute_forward_insights(stormy, reference_date)

    assert first[0].rule is InsightRule.weather_irrigation
    assert second[0].rule is InsightRule.weather_waterlogging
    assert compute_forward_insights(dry, reference_date) == first


def test_datetime_reference_is_reduced_to_date(make_crop, make_state) -> None:
    crop = make_crop(days_ago=0)
    state = make_state(crops=(crop,))

    at_midnight = compute_forward_insights(state, datetime(2026, 10, 18, 0, 0))
    late_evening = compute_forward_insights(state, datetime(2026, 10, 18, 23, 59))

    assert at_midnight == late_evening


def test_future_sowing_date_still_produces_sowing_advice(make_crop, make_state) -> None:
    crop = make_crop(days_ago=0)
    state = make_state(crops=(crop,))

    insights = compute_forward_insights(state, date(2026, 10, 1))

    assert {item.stage for item in insights} == {GrowthStage.sowing}


def test_assess_forecast_empty_snapshot() -> None:
    outlook = assess_forecast((), AdvisoryPolicy())
    assert outlook.waterlogging_day is None
    assert outlook.dry_spell is False
    assert outlook.days == 0
