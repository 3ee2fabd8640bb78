# app/core/config.py
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Service-account key used by the Firebase Admin SDK
    FIREBASE_CREDENTIALS: str = "app/core/firebase_key.json"
    FIREBASE_PROJECT_ID: str = ""

    # Local development against the Firestore emulator (host:port)
    FIRESTORE_EMULATOR_HOST: str = ""

    # Only the frontend dev server may call the API from a browser
    CORS_ORIGIN: str = "http://localhost:3000"

    HOST: str = "0.0.0.0"
    PORT: int = 5000

    LOG_LEVEL: str = "INFO"
    DEBUG_MODE: bool = False

    # If you want to read from a .env file, keep this:
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
