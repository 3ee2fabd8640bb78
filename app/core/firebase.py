"""
Firebase admin initialization and helpers.

This module initializes the Firebase Admin SDK and creates the single
async Firestore client the API talks to. The client is created once at
startup, stored on ``app.state.db`` and handed to request handlers through
the ``get_db`` dependency. ``store_errors`` turns any failure raised by the
client into a ``StoreError`` so raw driver exceptions never reach a route.
"""

import os
from contextlib import contextmanager

import firebase_admin
from fastapi import Request
from firebase_admin import credentials, firestore_async
from google.auth.credentials import AnonymousCredentials
from google.cloud import firestore

from app.core.config import Settings
from app.core.errors import ApiError, StoreError
from app.services.logger import get_logger

logger = get_logger(__name__)


def init_firebase(settings: Settings):
    """
    Initialize Firebase Admin SDK if needed and return an async Firestore client.

    Priority:
    1. FIRESTORE_EMULATOR_HOST set: anonymous client against the emulator
    2. FIREBASE_CREDENTIALS service-account key file
    """
    if settings.FIRESTORE_EMULATOR_HOST:
        # The google client reads the emulator host from the environment
        os.environ.setdefault("FIRESTORE_EMULATOR_HOST", settings.FIRESTORE_EMULATOR_HOST)
        project = settings.FIREBASE_PROJECT_ID or "demo-patient-monitor"
        logger.info(
            "Using Firestore emulator at %s (project %s)",
            settings.FIRESTORE_EMULATOR_HOST,
            project,
        )
        return firestore.AsyncClient(project=project, credentials=AnonymousCredentials())

    cred_path = settings.FIREBASE_CREDENTIALS
    if not os.path.exists(cred_path):
        raise RuntimeError(
            f"Firebase credentials not found at: {cred_path}\n"
            "Set FIREBASE_CREDENTIALS env var or place firebase_key.json correctly."
        )

    # Prevent re-initialization (important for Uvicorn reload)
    if firebase_admin._apps:
        app = firebase_admin.get_app()
    else:
        options = {"projectId": settings.FIREBASE_PROJECT_ID} if settings.FIREBASE_PROJECT_ID else None
        app = firebase_admin.initialize_app(credentials.Certificate(cred_path), options)

    db = firestore_async.client(app)
    logger.info("Firestore connected (project %s)", db.project)
    return db


def get_db(request: Request):
    """FastAPI dependency returning the process-scoped Firestore client."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise StoreError("connect")
    return db


@contextmanager
def store_errors(operation: str):
    """
    Wraps one store round trip. API errors pass through untouched,
    anything else raised by the client becomes a StoreError.
    """
    try:
        yield
    except ApiError:
        raise
    except Exception as exc:
        logger.error("Store operation %r failed: %s", operation, exc, exc_info=True)
        raise StoreError(operation) from exc
