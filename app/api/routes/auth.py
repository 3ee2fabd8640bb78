"""Authentication-related routes.

Registration and login against the ``users`` collection. Passwords are
stored and compared as submitted.
"""
from typing import Any

from email_validator import EmailNotValidError, validate_email
from fastapi import APIRouter, Body, Depends
from pydantic import ValidationError as SchemaValidationError

from app.api.deps import get_user_service
from app.api.error_handlers import first_error_message
from app.core.errors import ValidationError
from app.models.user import LoginRequest
from app.services.user_service import UserService

router = APIRouter(tags=["auth"])


def _is_email(value) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


@router.post("/register")
async def register(
    data: Any = Body(None),
    users: UserService = Depends(get_user_service),
):
    # Non-JSON bodies arrive as raw bytes and count as empty
    if not isinstance(data, dict):
        data = {}
    name, email, password = data.get("name"), data.get("email"), data.get("password")

    if not name or not email or not password:
        raise ValidationError("All fields are required")
    if not _is_email(email):
        raise ValidationError('"email" must be a valid email')

    await users.register(name, email, password)
    return {"message": "User registered successfully"}


@router.post("/login")
async def login(
    data: Any = Body(None),
    users: UserService = Depends(get_user_service),
):
    if data is None or isinstance(data, bytes):
        data = {}
    try:
        LoginRequest.model_validate(data)
    except SchemaValidationError as exc:
        raise ValidationError(first_error_message(exc.errors())) from exc

    # Look up the address exactly as submitted, not the normalized form
    user_id = await users.authenticate(data["email"], data["password"])
    return {"message": "Login successful", "userId": user_id}
