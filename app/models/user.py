"""Pydantic models for user documents and the login payload."""
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class User(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    # Stored exactly as submitted
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(..., min_length=1)
