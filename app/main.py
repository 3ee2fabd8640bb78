import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes.router import api_router
from app.core.config import settings
from app.core.firebase import init_firebase
from app.services.logger import get_logger, setup_logging

logger = get_logger(__name__)

app = FastAPI(title="Patient Monitor API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.CORS_ORIGIN],
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)

register_error_handlers(app)


@app.on_event("startup")
async def startup():
    """Configure logging and open the single Firestore client for the process."""
    setup_logging(settings.LOG_LEVEL)
    app.state.db = init_firebase(settings)
    logger.info("Server running on port %s", settings.PORT)


@app.on_event("shutdown")
async def shutdown():
    """Release the Firestore client opened at startup."""
    db = getattr(app.state, "db", None)
    if db is not None:
        db.close()
        app.state.db = None
        logger.info("Firestore connection closed")


@app.get("/")
async def root():
    return {"message": "Patient Monitor API is running"}


@app.get("/health")
async def health_check():
    return {"status": "ok"}


# Include API routers
app.include_router(api_router)


if __name__ == "__main__":
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
