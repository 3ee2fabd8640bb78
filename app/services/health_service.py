"""Heart-rate readings.

Readings are stored flat in ``heart_rates`` with a ``patientId`` field.
Listing filters on that field only and orders in Python, so no composite
Firestore index is needed.
"""
from datetime import datetime, timezone

from google.cloud.firestore import FieldFilter

from app.core.errors import NotFoundError
from app.core.firebase import store_errors
from app.models.health_data import HeartRateRecord
from app.services.logger import get_logger, log_debug
from app.services.time_utils import serialize_document, utc_now

logger = get_logger(__name__)

HEART_RATES = "heart_rates"

_EPOCH = datetime.fromtimestamp(0, timezone.utc)


def _created_at(data: dict) -> datetime:
    created = data.get("createdAt")
    return created if isinstance(created, datetime) else _EPOCH


class HealthService:
    def __init__(self, db):
        self.db = db

    async def record_heart_rate(self, data: dict) -> str:
        with store_errors("record heart rate"):
            record = HeartRateRecord.model_validate(data)
            now = utc_now()
            _, doc_ref = await self.db.collection(HEART_RATES).add(
                {**record.model_dump(), "createdAt": now, "updatedAt": now}
            )

        logger.info("Heart rate recorded: %s", doc_ref.id)
        log_debug("heart_rate_recorded", {"recordId": doc_ref.id, "patientId": record.patientId})
        return doc_ref.id

    async def list_heart_rates(self, patient_id: str) -> list:
        query = self.db.collection(HEART_RATES).where(
            filter=FieldFilter("patientId", "==", patient_id)
        )
        with store_errors("list heart rates"):
            docs = [(d.id, d.to_dict() or {}) async for d in query.stream()]

        # An unknown patient and a patient without readings both land here
        if not docs:
            raise NotFoundError("No records found")

        # Insertion order; sorted() keeps ties in stream order
        docs = sorted(docs, key=lambda item: _created_at(item[1]))
        return [serialize_document(doc_id, data) for doc_id, data in docs]
