import os
import unittest
from datetime import datetime, timedelta, timezone
from unittest import mock

from fastapi.testclient import TestClient

from app.api.error_handlers import first_error_message
from app.core.config import Settings
from app.core.errors import NotFoundError, StoreError
from app.core.firebase import init_firebase, store_errors
from app.main import app
from app.services.time_utils import serialize_document, to_iso
from app.services.user_service import email_key
from tests.base import ApiTestCase
from tests.fake_firestore import FakeFirestore

ORIGIN = "http://localhost:3000"


class TestLiveness(ApiTestCase):
    def test_root(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"message": "Patient Monitor API is running"})

    def test_health(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})

    def test_unknown_route_uses_error_shape(self):
        response = self.client.get("/api/nothing-here")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Not Found"})

    def test_wrong_method_uses_error_shape(self):
        response = self.client.put("/api/patient/abc", json={})
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.json(), {"error": "Method Not Allowed"})


class TestCors(ApiTestCase):
    def preflight(self, origin, method="POST", headers="Content-Type"):
        return self.client.options(
            "/api/login",
            headers={
                "Origin": origin,
                "Access-Control-Request-Method": method,
                "Access-Control-Request-Headers": headers,
            },
        )

    def test_dev_origin_allowed(self):
        response = self.preflight(ORIGIN)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["access-control-allow-origin"], ORIGIN)

    def test_other_origin_rejected(self):
        response = self.preflight("http://evil.example.com")
        self.assertEqual(response.status_code, 400)
        self.assertNotIn("access-control-allow-origin", response.headers)

    def test_other_methods_rejected(self):
        self.assertEqual(self.preflight(ORIGIN, method="DELETE").status_code, 400)

    def test_other_headers_rejected(self):
        self.assertEqual(self.preflight(ORIGIN, headers="Authorization").status_code, 400)


class TestStoreNotInitialised(unittest.TestCase):
    def test_requests_fail_with_server_error(self):
        client = TestClient(app)
        response = client.get("/api/patient/abc")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Server error"})


class TestLifecycle(unittest.TestCase):
    def test_shutdown_closes_store_client(self):
        db = FakeFirestore()
        with mock.patch("app.main.init_firebase", return_value=db):
            with TestClient(app) as client:
                self.assertIs(app.state.db, db)
                self.assertEqual(client.get("/health").status_code, 200)

        self.assertTrue(db.closed)
        self.assertIsNone(app.state.db)


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.PORT, 5000)
        self.assertEqual(settings.CORS_ORIGIN, ORIGIN)

    def test_environment_overrides(self):
        with mock.patch.dict(os.environ, {"PORT": "8080", "CORS_ORIGIN": "https://app.example.com"}):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.PORT, 8080)
        self.assertEqual(settings.CORS_ORIGIN, "https://app.example.com")

    def test_missing_credentials_fail_startup(self):
        settings = Settings(
            _env_file=None,
            FIREBASE_CREDENTIALS="/nonexistent/firebase_key.json",
            FIRESTORE_EMULATOR_HOST="",
        )
        with self.assertRaises(RuntimeError):
            init_firebase(settings)


class TestStoreErrors(unittest.TestCase):
    def test_driver_errors_become_store_error(self):
        with self.assertRaises(StoreError) as ctx:
            with store_errors("get patient"):
                raise ConnectionError("socket closed")
        self.assertEqual(ctx.exception.operation, "get patient")
        self.assertEqual(ctx.exception.to_response(), {"error": "Server error"})
        self.assertIsInstance(ctx.exception.__cause__, ConnectionError)

    def test_api_errors_pass_through(self):
        with self.assertRaises(NotFoundError):
            with store_errors("get patient"):
                raise NotFoundError("Patient not found")


class TestFirstErrorMessage(unittest.TestCase):
    def test_missing(self):
        errors = [{"type": "missing", "loc": ("body", "email"), "msg": "Field required"}]
        self.assertEqual(first_error_message(errors), '"email" is required')

    def test_only_first_error_is_used(self):
        errors = [
            {"type": "string_too_short", "loc": ("password",), "msg": "too short"},
            {"type": "missing", "loc": ("email",), "msg": "Field required"},
        ]
        self.assertEqual(first_error_message(errors), '"password" is not allowed to be empty')

    def test_fallback_uses_pydantic_message(self):
        errors = [{"type": "int_parsing", "loc": ("age",), "msg": "Input should be a valid integer"}]
        self.assertEqual(first_error_message(errors), '"age" input should be a valid integer')

    def test_no_errors(self):
        self.assertEqual(first_error_message([]), "Invalid request")


class TestTimeUtils(unittest.TestCase):
    def test_to_iso_normalises_to_utc(self):
        ts = datetime(2024, 5, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        self.assertEqual(to_iso(ts), "2024-05-01T10:00:00+00:00")

    def test_to_iso_assumes_naive_is_utc(self):
        self.assertEqual(to_iso(datetime(2024, 5, 1, 10, 0)), "2024-05-01T10:00:00+00:00")

    def test_to_iso_passthrough(self):
        self.assertIsNone(to_iso(None))
        self.assertEqual(to_iso("2024-05-01"), "2024-05-01")

    def test_serialize_document(self):
        created = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
        out = serialize_document("abc", {"name": "Alice", "createdAt": created, "updatedAt": created})
        self.assertEqual(list(out)[0], "_id")
        self.assertEqual(out["_id"], "abc")
        self.assertEqual(out["createdAt"], "2024-05-01T10:00:00+00:00")


class TestEmailKey(unittest.TestCase):
    def test_stable_and_path_safe(self):
        key = email_key("we/ird@example.com")
        self.assertEqual(key, email_key("we/ird@example.com"))
        self.assertNotIn("/", key)
        self.assertNotEqual(key, email_key("other@example.com"))


if __name__ == "__main__":
    unittest.main()
