"""Tests for idempotent RBAC seeding."""

import unittest
from types import SimpleNamespace
from unittest.mock import patch

from sqlalchemy import func, insert, select, update

from support import ACTOR_ID, DatabaseTestCase
from app.core.errors import ConstraintViolationError, ValidationConflictError
from app.models import Permission, PermissionGroup, Role, RolePermission, Sidebar
from app.services import rbac
from app.services.rbac import (
    grant_permissions_to_role,
    seed_permissions,
    seed_rbac,
    seed_roles,
    seed_sidebars,
    upsert_by_natural_key,
)
from app.services.rbac_catalog import (
    BASE_PERMISSIONS,
    OPEN_SIDEBARS,
    PERMISSION_CATALOG,
    ROLE_CATALOG,
    PermissionGroupSpec,
    PermissionSpec,
    RoleSpec,
    build_permission_catalog,
    group_action_for,
    permission_names,
)


class TestPermissionCatalog(unittest.TestCase):
    def test_group_action(self) -> None:
        self.assertEqual(group_action_for("posts:create"), "posts:*")
        self.assertEqual(group_action_for("posts:*"), "posts:*")
        self.assertEqual(group_action_for("*"), "*")

    def test_duplicates_resolved_first_wins(self) -> None:
        events = next(group for group in PERMISSION_CATALOG if group.action == "events:*")
        views = [spec for spec in events.permissions if spec.name == "events:view"]
        self.assertEqual(len(views), 1)
        self.assertEqual(views[0].description, "Allow viewing a single event")

    def test_every_permission_lands_in_its_group(self) -> None:
        for group in PERMISSION_CATALOG:
            for spec in group.permissions:
                self.assertEqual(group_action_for(spec.name), group.action)
        self.assertEqual(
            len(permission_names(PERMISSION_CATALOG)),
            len({spec.name for spec in BASE_PERMISSIONS}),
        )

    def test_groups_keep_first_seen_order(self) -> None:
        actions = [group.action for group in build_permission_catalog(BASE_PERMISSIONS)]
        self.assertEqual(actions, ["*", "posts:*", "events:*", "users:*", "roles:*", "permissions:*"])


class TestUpsertByNaturalKey(DatabaseTestCase):
    def test_insert_then_update(self) -> None:
        role, created = upsert_by_natural_key(
            self.db, Role, {"disp_name": "Help Desk"}, {"description": "v1"}, ACTOR_ID
        )
        self.assertTrue(created)
        self.assertEqual(role.created_by, ACTOR_ID)
        again, created = upsert_by_natural_key(
            self.db, Role, {"disp_name": "Help Desk"}, {"description": "v2"}, 7
        )
        self.assertFalse(created)
        self.assertIs(again, role)
        self.assertEqual(again.description, "v2")
        self.assertEqual(again.created_by, ACTOR_ID)
        self.assertEqual(again.updated_by, 7)

    def test_reactivates_inactive_row(self) -> None:
        role, _ = upsert_by_natural_key(self.db, Role, {"disp_name": "Gov Schemes"}, {}, ACTOR_ID)
        role.status = 0
        self.db.commit()
        role, created = upsert_by_natural_key(self.db, Role, {"disp_name": "Gov Schemes"}, {}, 5)
        self.assertFalse(created)
        self.assertEqual(role.status, 1)

    def test_concurrent_insert_is_treated_as_existing(self) -> None:
        # Another writer commits the same key between our lookup and our insert.
        self.db.execute(insert(Role).values(disp_name="Admin", description="old", status=0))
        real_find = rbac._find_by_natural_key
        calls = []

        def missing_on_first_lookup(session, model, natural_key):
            calls.append(natural_key)
            return None if len(calls) == 1 else real_find(session, model, natural_key)

        with patch.object(rbac, "_find_by_natural_key", side_effect=missing_on_first_lookup):
            role, created = upsert_by_natural_key(
                self.db, Role, {"disp_name": "Admin"}, {"description": "new"}, ACTOR_ID
            )
        self.db.commit()

        self.assertFalse(created)
        self.assertEqual(len(calls), 2)
        self.assertEqual(role.description, "new")
        self.assertEqual(role.status, 1)
        self.assertEqual(self.db.scalar(select(func.count()).select_from(Role)), 1)

    def test_insert_rejected_for_other_reason_raises(self) -> None:
        with self.assertRaises(ConstraintViolationError):
            upsert_by_natural_key(
                self.db,
                Permission,
                {"disp_name": "orphan:view"},
                {"permission_group_id": 12345},
                ACTOR_ID,
            )


class TestSeedRbac(DatabaseTestCase):
    def _count(self, model) -> int:
        return self.db.scalar(select(func.count()).select_from(model))

    def test_seed_is_idempotent(self) -> None:
        first = seed_rbac(self.db, ACTOR_ID)
        counts = [self._count(model) for model in (Role, PermissionGroup, Permission, RolePermission)]
        second = seed_rbac(self.db, ACTOR_ID)
        self.assertEqual(
            counts,
            [self._count(model) for model in (Role, PermissionGroup, Permission, RolePermission)],
        )
        self.assertTrue(all(outcome.created for outcome in first))
        self.assertFalse(any(outcome.created for outcome in second))
        self.assertEqual(counts[0], len(ROLE_CATALOG))

    def test_reseed_reactivates_without_duplicates(self) -> None:
        seed_rbac(self.db, ACTOR_ID)
        self.db.execute(update(Role).values(status=0))
        self.db.execute(update(Permission).values(status=0))
        self.db.commit()
        seed_rbac(self.db, ACTOR_ID)
        self.assertEqual(
            self.db.scalar(select(func.count()).select_from(Role).where(Role.status == 0)), 0
        )
        self.assertEqual(
            self.db.scalar(select(func.count()).select_from(Permission).where(Permission.status == 0)),
            0,
        )
        self.assertEqual(self._count(Role), len(ROLE_CATALOG))

    def test_posts_wildcard_group(self) -> None:
        catalog = build_permission_catalog(
            [PermissionSpec("posts:create", "Create"), PermissionSpec("posts:view", "View")]
        )
        self.assertEqual(len(catalog), 1)
        seed_permissions(self.db, catalog, ACTOR_ID)
        self.db.commit()
        group = self.db.scalar(select(PermissionGroup).where(PermissionGroup.action == "posts:*"))
        self.assertIsNotNone(group)
        self.assertEqual(self._count(PermissionGroup), 1)
        self.assertEqual(
            sorted(p.disp_name for p in group.permissions), ["posts:create", "posts:view"]
        )

    def test_no_permission_without_group(self) -> None:
        seed_rbac(self.db, ACTOR_ID)
        orphans = self.db.scalar(
            select(func.count())
            .select_from(Permission)
            .outerjoin(PermissionGroup, PermissionGroup.id == Permission.permission_group_id)
            .where(PermissionGroup.id.is_(None))
        )
        self.assertEqual(orphans, 0)

    def test_admin_grant_rerun_keeps_one_grant_per_permission(self) -> None:
        seed_rbac(self.db, ACTOR_ID)
        seed_rbac(self.db, ACTOR_ID)
        admin_id = self.db.scalar(select(Role.id).where(Role.disp_name == "Admin"))
        granted = self.db.scalar(
            select(func.count()).select_from(RolePermission).where(RolePermission.role_id == admin_id)
        )
        self.assertEqual(granted, self._count(Permission))
        self.assertEqual(granted, len(permission_names(PERMISSION_CATALOG)))

    def test_grant_skipped_when_role_missing(self) -> None:
        seed_permissions(self.db, PERMISSION_CATALOG, ACTOR_ID)
        with self.assertLogs("app.services.rbac", level="WARNING"):
            outcomes = grant_permissions_to_role(self.db, "Nobody", None, ACTOR_ID)
        self.assertEqual(outcomes, [])
        self.assertEqual(self._count(RolePermission), 0)

    def test_grant_skipped_when_no_permissions(self) -> None:
        seed_roles(self.db, ROLE_CATALOG, ACTOR_ID)
        with self.assertLogs("app.services.rbac", level="WARNING"):
            outcomes = grant_permissions_to_role(self.db, "Admin", None, ACTOR_ID)
        self.assertEqual(outcomes, [])
        self.assertEqual(self._count(RolePermission), 0)

    def test_failed_batch_is_rolled_back(self) -> None:
        roles = [RoleSpec("Ward Incharge", "ok"), RoleSpec("x" * 300, "too long")]
        real_upsert = rbac.upsert_by_natural_key

        def fail_on_second(session, model, natural_key, attributes, actor_id):
            if natural_key["disp_name"].startswith("x"):
                raise ConstraintViolationError("rejected")
            return real_upsert(session, model, natural_key, attributes, actor_id)

        with patch.object(rbac, "upsert_by_natural_key", side_effect=fail_on_second):
            with self.assertRaises(ConstraintViolationError):
                seed_rbac(self.db, ACTOR_ID, roles=roles)
        self.assertEqual(self._count(Role), 0)
        self.assertEqual(self._count(Permission), 0)

    def test_failed_permissions_step_keeps_committed_roles(self) -> None:
        with patch.object(rbac, "seed_permissions", side_effect=ConstraintViolationError("rejected")):
            with self.assertLogs("app.services.rbac", level="ERROR") as logs:
                with self.assertRaises(ConstraintViolationError):
                    seed_rbac(self.db, ACTOR_ID)
        self.assertEqual(self._count(Role), len(ROLE_CATALOG))
        self.assertEqual(self._count(PermissionGroup), 0)
        self.assertEqual(self._count(RolePermission), 0)
        message = "\n".join(logs.output)
        self.assertIn("'seed permissions'", message)
        self.assertIn("already committed: seed roles", message)

        seed_rbac(self.db, ACTOR_ID)
        self.assertEqual(self._count(Permission), len(permission_names(PERMISSION_CATALOG)))

    def test_unresolved_group_raises_validation_conflict(self) -> None:
        group = PermissionGroupSpec(
            action="posts:*",
            label="Posts",
            description="All post permissions",
            permissions=(PermissionSpec("posts:view", "View"),),
        )
        with patch.object(rbac, "upsert_by_natural_key", return_value=(SimpleNamespace(id=None), False)):
            with self.assertRaises(ValidationConflictError):
                seed_permissions(self.db, [group], ACTOR_ID)
        self.assertEqual(self._count(Permission), 0)

    def test_open_sidebars_keyed_by_id(self) -> None:
        seed_sidebars(self.db, OPEN_SIDEBARS, ACTOR_ID)
        self.db.commit()
        outcomes = seed_sidebars(self.db, OPEN_SIDEBARS, ACTOR_ID)
        self.db.commit()
        self.assertFalse(any(outcome.created for outcome in outcomes))
        self.assertEqual(
            sorted(self.db.scalars(select(Sidebar.id)).all()), [901, 902, 950]
        )


if __name__ == "__main__":
    unittest.main()
