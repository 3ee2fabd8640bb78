"""Heart-rate routes.

Readings reference a patient id that is not checked for existence.
Listing an id with no readings is a 404.
"""
from typing import Any

from fastapi import APIRouter, Body, Depends

from app.api.deps import get_health_service
from app.services.health_service import HealthService

router = APIRouter(prefix="/heart-rate", tags=["heart_rate"])


@router.post("", status_code=201)
async def record_heart_rate(
    data: Any = Body(None),
    health: HealthService = Depends(get_health_service),
):
    record_id = await health.record_heart_rate({} if data is None else data)
    return {"message": "Heart rate recorded", "recordId": record_id}


@router.get("/{patient_id}")
async def list_heart_rates(
    patient_id: str,
    health: HealthService = Depends(get_health_service),
):
    return await health.list_heart_rates(patient_id)
