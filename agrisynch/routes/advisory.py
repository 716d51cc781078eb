"""Advisory routes — insight compilation, home feed and growth stage lookup."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from agrisynch.config import Settings, get_settings
from agrisynch.schemas.advisory import (
	FeedRequest,
	GrowthStageRequest,
	GrowthStageResponse,
	InsightsRequest,
	InsightsResponse,
)
from agrisynch.services.advisory_service import AdvisoryService

router = APIRouter(prefix="/advisory", tags=["advisory"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="advisory failure")


def get_advisory_service(settings: Settings = Depends(get_settings)) -> AdvisoryService:
	return AdvisoryService(settings)


@router.post("/insights", response_model=InsightsResponse)
async def compute_insights(
	payload: InsightsRequest,
	service: AdvisoryService = Depends(get_advisory_service),
) -> InsightsResponse:
	try:
		return service.compute_insights(payload.state, payload.reference_date)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.post("/feed", response_model=InsightsResponse)
async def build_feed(
	payload: FeedRequest,
	service: AdvisoryService = Depends(get_advisory_service),
) -> InsightsResponse:
	try:
		return service.build_feed(payload.state, payload.reference_date, limit=payload.limit)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.post("/growth-stage", response_model=GrowthStageResponse)
async def get_growth_stage(
	payload: GrowthStageRequest,
	service: AdvisoryService = Depends(get_advisory_service),
) -> GrowthStageResponse:
	try:
		return service.growth_status(payload.crop_type, payload.sowing_date, payload.reference_date)
	except Exception as exc:
		raise _map_error(exc) from exc
