"""
API dependencies.

Builds the per-request service objects around the process-scoped
Firestore client.
"""

from fastapi import Depends

from app.core.firebase import get_db
from app.services.health_service import HealthService
from app.services.patient_service import PatientService
from app.services.user_service import UserService


def get_user_service(db=Depends(get_db)) -> UserService:
    return UserService(db)


def get_patient_service(db=Depends(get_db)) -> PatientService:
    return PatientService(db)


def get_health_service(db=Depends(get_db)) -> HealthService:
    return HealthService(db)
