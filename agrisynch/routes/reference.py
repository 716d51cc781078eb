"""Read-only reference dataset routes."""

from __future__ import annotations

from fastapi import APIRouter, Query

from agrisynch.models.enums import Language
from agrisynch.schemas.advisory import CropReferenceItem, SoilReferenceItem
from agrisynch.services.advisory_service import AdvisoryService

router = APIRouter(prefix="/reference", tags=["reference"])


@router.get("/crops", response_model=list[CropReferenceItem])
async def list_crops(language: Language = Query(default=Language.english)) -> list[CropReferenceItem]:
	return AdvisoryService.reference_crops(language)


@router.get("/soils", response_model=list[SoilReferenceItem])
async def list_soils(language: Language = Query(default=Language.english)) -> list[SoilReferenceItem]:
	return AdvisoryService.reference_soils(language)
