"""Business logic / service layer for patient operations."""
from app.core.errors import NotFoundError
from app.core.firebase import store_errors
from app.models.patient import Patient
from app.services.logger import get_logger, log_debug
from app.services.time_utils import serialize_document, utc_now

logger = get_logger(__name__)

PATIENTS = "patients"


class PatientService:
    def __init__(self, db):
        self.db = db

    async def create(self, data: dict) -> str:
        with store_errors("create patient"):
            patient = Patient.model_validate(data)
            now = utc_now()
            _, doc_ref = await self.db.collection(PATIENTS).add(
                {**patient.model_dump(), "createdAt": now, "updatedAt": now}
            )

        logger.info("Patient added: %s", doc_ref.id)
        log_debug("patient_added", {"patientId": doc_ref.id, "userId": patient.userId})
        return doc_ref.id

    async def get(self, patient_id: str) -> dict:
        with store_errors("get patient"):
            doc = await self.db.collection(PATIENTS).document(patient_id).get()

        if not doc.exists:
            raise NotFoundError("Patient not found")
        return serialize_document(doc.id, doc.to_dict())
