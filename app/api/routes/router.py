from fastapi import APIRouter

from app.api.routes.auth import router as auth_router
from app.api.routes.heart_rates import router as heart_rate_router
from app.api.routes.patients import router as patients_router

api_router = APIRouter(prefix="/api")

api_router.include_router(auth_router)
api_router.include_router(patients_router)
api_router.include_router(heart_rate_router)
