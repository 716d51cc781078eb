"""Shared pytest fixtures — async test client, fixed clock, plot/state factories."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from datetime import date, timedelta
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from agrisynch.config import Settings, get_settings
from agrisynch.main import app
from agrisynch.models.enums import CropType, Language, SoilType, WeatherCondition
from agrisynch.schemas.advisory import AppState, FarmerCrop, UserSettings, WeatherDay

REFERENCE_DATE = date(2026, 10, 18)


@pytest.fixture
def reference_date() -> date:
	return REFERENCE_DATE


@pytest.fixture
def make_crop() -> Callable[..., FarmerCrop]:
	"""Build a plot sown ``days_ago`` days before the fixed reference date."""

	def _make(
		crop_id: str = "plot-1",
		crop_type: CropType = CropType.rice,
		days_ago: int = 0,
		soil_type: SoilType = SoilType.alluvial,
		nickname: str = "North field",
	) -> FarmerCrop:
		return FarmerCrop(
			id=crop_id,
			type=crop_type,
			sowing_date=REFERENCE_DATE - timedelta(days=days_ago),
			soil_type=soil_type,
			nickname=nickname,
		)

	return _make


@pytest.fixture
def make_forecast() -> Callable[..., tuple[WeatherDay, ...]]:
	"""Build a forecast from ``(condition, precip_chance)`` pairs, index 0 = today."""

	def _make(*days: tuple[str, int]) -> tuple[WeatherDay, ...]:
		return tuple(
			WeatherDay(
				date=(REFERENCE_DATE + timedelta(days=idx)).isoformat(),
				temp=30.0,
				condition=WeatherCondition(condition),
				precip_chance=precip,
			)
			for idx, (condition, precip) in enumerate(days)
		)

	return _make


@pytest.fixture
def make_state() -> Callable[..., AppState]:
	def _make(
		crops: tuple[FarmerCrop, ...] = (),
		weather: tuple[WeatherDay, ...] = (),
		language: Language = Language.english,
		critical_alerts_only: bool = False,
	) -> AppState:
		return AppState(
			language=language,
			crops=crops,
			weather_snapshot=weather,
			settings=UserSettings(critical_alerts_only=critical_alerts_only),
		)

	return _make


@pytest.fixture
def test_settings() -> Settings:
	return Settings(log_format="console", feed_size=3, critical_alerts_only=False)


@pytest.fixture
async def client(test_settings: Settings) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and settings pinned."""

	app.dependency_overrides[get_settings] = lambda: test_settings
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan

	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client

	app.router.lifespan_context = original_lifespan
	app.dependency_overrides.clear()
