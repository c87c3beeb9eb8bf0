"""Route tests for /meta-tables and /auth using FastAPI's TestClient."""

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from support import ACTOR_ID, DatabaseTestCase
from app.core.config import settings
from app.core.database import get_db
from app.core.security import create_access_token
from app.main import app
from app.models import MetaMlaConstituency, MetaSector, User
from app.services.rbac import assign_roles_to_user, get_role_id, seed_rbac

PREFIX = f"{settings.API_V1_PREFIX}/meta-tables"


class ApiTestCase(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        super().tearDown()


class TestMetaTablesRoutes(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.db.add_all([MetaSector(disp_name=name) for name in ("Public", "Private", "Joint")])
        self.db.add(MetaSector(disp_name="Closed", status=0))
        self.db.commit()

    def test_list_tables(self) -> None:
        response = self.client.get(PREFIX)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["total"], 19)
        names = [table["name"] for table in body["tables"]]
        self.assertIn("boothNumber", names)

    def test_list_data_defaults(self) -> None:
        response = self.client.get(f"{PREFIX}/sector/data")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["pagination"]["total"], 3)
        self.assertEqual(body["pagination"]["limit"], settings.META_DEFAULT_PAGE_SIZE)
        self.assertFalse(body["pagination"]["has_next"])

    def test_limit_is_capped(self) -> None:
        response = self.client.get(f"{PREFIX}/sector/data", params={"limit": 1000})
        self.assertEqual(response.json()["pagination"]["limit"], settings.META_MAX_PAGE_SIZE)

    def test_status_all(self) -> None:
        response = self.client.get(f"{PREFIX}/sector/data", params={"status": "all"})
        self.assertEqual(response.json()["pagination"]["total"], 4)

    def test_unknown_table_is_404(self) -> None:
        response = self.client.get(f"{PREFIX}/unknown/data")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["detail"]["code"], "NOT_FOUND")

    def test_rejected_search_field_is_422(self) -> None:
        response = self.client.get(
            f"{PREFIX}/sector/data", params={"search": "x", "search_field": "created_by"}
        )
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["detail"]["code"], "VALIDATION_ERROR")

    def test_malformed_integer_search(self) -> None:
        broad = self.client.get(f"{PREFIX}/wardNumber/data", params={"search": "--1"})
        self.assertEqual(broad.status_code, 200)
        self.assertEqual(broad.json()["pagination"]["total"], 0)
        narrow = self.client.get(
            f"{PREFIX}/wardNumber/data",
            params={"search": "99999999999999999999", "search_field": "num"},
        )
        self.assertEqual(narrow.status_code, 422)

    def test_create_update_delete(self) -> None:
        created = self.client.post(f"{PREFIX}/sector/data", json={"disp_name": "Cooperative"})
        self.assertEqual(created.status_code, 201)
        record_id = created.json()["data"]["id"]

        updated = self.client.put(
            f"{PREFIX}/sector/data/{record_id}", json={"disp_name": "Co-operative"}
        )
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["data"]["disp_name"], "Co-operative")

        deleted = self.client.delete(f"{PREFIX}/sector/data/{record_id}")
        self.assertEqual(deleted.status_code, 204)
        fetched = self.client.get(f"{PREFIX}/sector/data/{record_id}")
        self.assertEqual(fetched.json()["data"]["status"], 0)

        check = self.SessionLocal()
        try:
            self.assertEqual(check.get(MetaSector, record_id).created_by, ACTOR_ID)
        finally:
            check.close()

    def test_create_with_restricted_field_is_422(self) -> None:
        response = self.client.post(f"{PREFIX}/sector/data", json={"disp_name": "X", "status": 0})
        self.assertEqual(response.status_code, 422)

    def test_constraint_violation_is_409(self) -> None:
        response = self.client.post(
            f"{PREFIX}/boothNumber/data",
            json={"disp_name": "Booth", "mla_constituency_id": 999},
        )
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["detail"]["code"], "CONFLICT")

    def test_missing_record_is_404(self) -> None:
        self.assertEqual(self.client.get(f"{PREFIX}/sector/data/999").status_code, 404)

    def test_bulk_status_and_stats(self) -> None:
        ids = [row["id"] for row in self.client.get(f"{PREFIX}/sector/data").json()["data"]]
        response = self.client.patch(
            f"{PREFIX}/sector/bulk-status", json={"ids": ids[:2], "status": 0}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["updated_count"], 2)
        stats = self.client.get(f"{PREFIX}/sector/stats").json()
        self.assertEqual((stats["total"], stats["active"], stats["inactive"]), (4, 1, 3))

    def test_bulk_status_rejects_bad_status(self) -> None:
        response = self.client.patch(f"{PREFIX}/sector/bulk-status", json={"ids": [1], "status": 5})
        self.assertEqual(response.status_code, 422)

    def test_include_and_schema(self) -> None:
        constituency = MetaMlaConstituency(disp_name="South", num=3)
        self.db.add(constituency)
        self.db.flush()
        constituency_id = constituency.id
        self.db.commit()
        created = self.client.post(
            f"{PREFIX}/boothNumber/data",
            json={"disp_name": "Booth 7", "num": 7, "mla_constituency_id": constituency_id},
        )
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()["data"]["mla_constituency"]["disp_name"], "South")

        schema = self.client.get(f"{PREFIX}/boothNumber/schema").json()
        self.assertEqual(schema["table_name"], "tbl_meta_booth_number")


class TestHealth(ApiTestCase):
    def test_root_lists_entry_points(self) -> None:
        body = self.client.get("/").json()
        self.assertEqual(body["meta_tables"], PREFIX)
        self.assertEqual(body["access_profile"], f"{settings.API_V1_PREFIX}/auth/me")

    def test_health_reports_database_and_registry(self) -> None:
        response = self.client.get(f"{settings.API_V1_PREFIX}/health/")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["database"], "connected")
        self.assertEqual(body["database_dialect"], "sqlite")
        self.assertEqual(body["meta_tables"], 19)


class TestAuth(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        seed_rbac(self.db, ACTOR_ID)
        self.admin = User(contact_number="9000000010")
        self.member = User(contact_number="9000000011")
        self.db.add_all([self.admin, self.member])
        self.db.flush()
        self.admin_id, self.member_id = self.admin.id, self.member.id
        assign_roles_to_user(self.db, self.admin_id, [get_role_id(self.db, "Admin")], ACTOR_ID)
        assign_roles_to_user(self.db, self.member_id, [get_role_id(self.db, "public")], ACTOR_ID)
        self.db.commit()

    def _headers(self, user_id: int) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(sub=user_id)}"}

    def test_me_returns_access_profile(self) -> None:
        with patch.object(settings, "AUTH_ENABLED", True):
            response = self.client.get(
                f"{settings.API_V1_PREFIX}/auth/me", headers=self._headers(self.admin_id)
            )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["roles"], ["Admin"])
        self.assertIn("*", body["permissions"])

    def test_missing_token_is_401(self) -> None:
        with patch.object(settings, "AUTH_ENABLED", True):
            response = self.client.get(f"{settings.API_V1_PREFIX}/auth/me")
        self.assertEqual(response.status_code, 401)

    def test_invalid_token_is_401(self) -> None:
        with patch.object(settings, "AUTH_ENABLED", True):
            response = self.client.get(
                f"{settings.API_V1_PREFIX}/auth/me", headers={"Authorization": "Bearer nope"}
            )
        self.assertEqual(response.status_code, 401)

    def test_writes_require_admin(self) -> None:
        with patch.object(settings, "AUTH_ENABLED", True):
            denied = self.client.post(
                f"{PREFIX}/sector/data", json={"disp_name": "X"}, headers=self._headers(self.member_id)
            )
            allowed = self.client.post(
                f"{PREFIX}/sector/data", json={"disp_name": "X"}, headers=self._headers(self.admin_id)
            )
        self.assertEqual(denied.status_code, 403)
        self.assertEqual(allowed.status_code, 201)

    def test_auth_disabled_acts_as_system(self) -> None:
        response = self.client.get(f"{settings.API_V1_PREFIX}/auth/me")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["user_id"], settings.SYSTEM_ACTOR_ID)


if __name__ == "__main__":
    unittest.main()
