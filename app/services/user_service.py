"""User registration and credential lookup against Firestore.

Users live in ``users``. Each user also owns a claim document in
``user_emails`` keyed by a digest of the email; both are written in one
create-only batch so Firestore itself rejects a second registration of the
same address, even when two requests pass the pre-check together.
"""
import hashlib

from google.api_core.exceptions import Conflict
from google.cloud.firestore import FieldFilter

from app.core.errors import AuthError, ConflictError
from app.core.firebase import store_errors
from app.models.user import User
from app.services.logger import get_logger, log_debug
from app.services.time_utils import utc_now

logger = get_logger(__name__)

USERS = "users"
USER_EMAILS = "user_emails"


def email_key(email: str) -> str:
    # Document ids cannot contain "/", emails can
    return hashlib.sha256(email.encode("utf-8")).hexdigest()


class UserService:
    def __init__(self, db):
        self.db = db

    async def find_by_email(self, email: str):
        """Returns the first user snapshot with this exact email, or None."""
        query = (
            self.db.collection(USERS)
            .where(filter=FieldFilter("email", "==", email))
            .limit(1)
        )
        with store_errors("find user"):
            async for doc in query.stream():
                return doc
        return None

    async def register(self, name, email, password) -> str:
        with store_errors("validate user"):
            user = User(name=name, email=email, password=password)

        if await self.find_by_email(user.email) is not None:
            logger.warning("Registration rejected: email already in use")
            raise ConflictError()

        now = utc_now()
        user_ref = self.db.collection(USERS).document()
        claim_ref = self.db.collection(USER_EMAILS).document(email_key(user.email))

        batch = self.db.batch()
        batch.create(user_ref, {**user.model_dump(), "createdAt": now, "updatedAt": now})
        batch.create(claim_ref, {"userId": user_ref.id, "createdAt": now})

        with store_errors("create user"):
            try:
                await batch.commit()
            except Conflict as exc:
                # Lost the race against a concurrent registration
                logger.warning("Registration rejected: email claimed concurrently")
                raise ConflictError() from exc

        logger.info("User registered: %s", user_ref.id)
        log_debug("user_registered", {"userId": user_ref.id})
        return user_ref.id

    async def authenticate(self, email: str, password: str) -> str:
        """Returns the user id when email and password match exactly."""
        doc = await self.find_by_email(email)
        stored = (doc.to_dict() or {}) if doc is not None else {}

        # Unknown email and wrong password must look the same to the caller
        if doc is None or stored.get("password") != password:
            logger.warning("Login rejected: invalid credentials")
            raise AuthError()

        log_debug("user_logged_in", {"userId": doc.id})
        return doc.id
