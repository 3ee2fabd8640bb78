"""Patient-related API routes."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from app.api.deps import get_patient_service
from app.services.patient_service import PatientService

router = APIRouter(prefix="/patient", tags=["patients"])


@router.post("", status_code=201)
async def add_patient(
    data: Any = Body(None),
    patients: PatientService = Depends(get_patient_service),
):
    """Required fields are enforced by the document schema; a bad body is a 500."""
    patient_id = await patients.create({} if data is None else data)
    return {"message": "Patient added", "patientId": patient_id}


@router.get("/{patient_id}")
async def get_patient(
    patient_id: str,
    patients: PatientService = Depends(get_patient_service),
):
    return await patients.get(patient_id)
