"""Tests for role/sidebar assignment and user access profiles."""

import unittest

from sqlalchemy import func, select

from support import ACTOR_ID, DatabaseTestCase
from app.core.errors import NotFoundError
from app.models import Permission, Role, RolePermission, RoleSidebar, User, UserRole
from app.services.rbac import (
    active_role_ids,
    assign_roles_to_user,
    assign_sidebars_to_role,
    get_role_id,
    get_user_access_profile,
    grant_permissions_to_role,
    resolve_role_ids_or_default,
    seed_rbac,
    seed_sidebars,
)
from app.services.rbac_catalog import OPEN_SIDEBARS


class RbacTestCase(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        seed_rbac(self.db, ACTOR_ID)
        self.user = User(contact_number="9000000001", full_name="Test User")
        self.db.add(self.user)
        self.db.commit()
        self.admin_id = get_role_id(self.db, "Admin")
        self.help_desk_id = get_role_id(self.db, "Help Desk")


class TestAssignRolesToUser(RbacTestCase):
    def test_assignment_is_idempotent(self) -> None:
        first = assign_roles_to_user(self.db, self.user.id, [self.admin_id], ACTOR_ID)
        self.db.commit()
        second = assign_roles_to_user(self.db, self.user.id, [self.admin_id], ACTOR_ID)
        self.db.commit()
        self.assertTrue(first[0].created)
        self.assertFalse(second[0].created)
        count = self.db.scalar(
            select(func.count())
            .select_from(UserRole)
            .where(UserRole.user_id == self.user.id, UserRole.role_id == self.admin_id)
        )
        self.assertEqual(count, 1)

    def test_duplicate_ids_in_one_call(self) -> None:
        outcomes = assign_roles_to_user(
            self.db, self.user.id, [self.admin_id, self.admin_id], ACTOR_ID
        )
        self.assertEqual(len(outcomes), 1)

    def test_reassignment_reactivates(self) -> None:
        assign_roles_to_user(self.db, self.user.id, [self.admin_id], ACTOR_ID)
        link = self.db.get(UserRole, (self.user.id, self.admin_id))
        link.status = 0
        self.db.commit()
        assign_roles_to_user(self.db, self.user.id, [self.admin_id], 5)
        self.db.commit()
        link = self.db.get(UserRole, (self.user.id, self.admin_id))
        self.assertEqual(link.status, 1)
        self.assertEqual(link.updated_by, 5)

    def test_unknown_user_or_role(self) -> None:
        with self.assertRaises(NotFoundError):
            assign_roles_to_user(self.db, 4040, [self.admin_id], ACTOR_ID)
        with self.assertRaises(NotFoundError):
            assign_roles_to_user(self.db, self.user.id, [4040], ACTOR_ID)


class TestAccessProfile(RbacTestCase):
    def test_admin_sees_full_catalog(self) -> None:
        assign_roles_to_user(self.db, self.user.id, [self.admin_id], ACTOR_ID)
        self.db.commit()
        profile = get_user_access_profile(self.db, self.user.id)
        self.assertEqual(profile.roles, ("Admin",))
        self.assertIn("*", profile.permissions)
        self.assertIn("posts:create", profile.permissions)
        self.assertEqual(
            len(profile.permissions),
            self.db.scalar(select(func.count()).select_from(Permission)),
        )

    def test_inactive_links_are_ignored(self) -> None:
        assign_roles_to_user(self.db, self.user.id, [self.admin_id, self.help_desk_id], ACTOR_ID)
        grant_permissions_to_role(self.db, "Help Desk", ["posts:view"], ACTOR_ID)
        self.db.get(UserRole, (self.user.id, self.admin_id)).status = 0
        self.db.commit()
        profile = get_user_access_profile(self.db, self.user.id)
        self.assertEqual(profile.roles, ("Help Desk",))
        self.assertEqual(profile.permissions, ("posts:view",))

        permission_id = self.db.scalar(
            select(Permission.id).where(Permission.disp_name == "posts:view")
        )
        self.db.get(RolePermission, (self.help_desk_id, permission_id)).status = 0
        self.db.commit()
        self.assertEqual(get_user_access_profile(self.db, self.user.id).permissions, ())

    def test_parent_role_is_not_inherited(self) -> None:
        help_desk = self.db.get(Role, self.help_desk_id)
        help_desk.parent_role_id = self.admin_id
        assign_roles_to_user(self.db, self.user.id, [self.help_desk_id], ACTOR_ID)
        self.db.commit()
        self.assertEqual(get_user_access_profile(self.db, self.user.id).permissions, ())

    def test_user_without_roles(self) -> None:
        profile = get_user_access_profile(self.db, self.user.id)
        self.assertEqual((profile.roles, profile.permissions), ((), ()))


class TestRoleResolution(RbacTestCase):
    def test_default_is_public_role(self) -> None:
        self.assertEqual(
            resolve_role_ids_or_default(self.db, None), [get_role_id(self.db, "public")]
        )

    def test_unknown_role_ids(self) -> None:
        with self.assertRaises(NotFoundError) as ctx:
            resolve_role_ids_or_default(self.db, [self.admin_id, 777])
        self.assertIn("777", ctx.exception.message)

    def test_unknown_role_name(self) -> None:
        with self.assertRaises(NotFoundError):
            get_role_id(self.db, "Nobody")

    def test_active_roles_excluding_public(self) -> None:
        ids = active_role_ids(self.db, exclude_names=["public"])
        self.assertNotIn(get_role_id(self.db, "public"), ids)
        self.assertIn(self.admin_id, ids)


class TestAssignSidebars(RbacTestCase):
    def test_assign_sidebars_is_idempotent(self) -> None:
        seed_sidebars(self.db, OPEN_SIDEBARS, ACTOR_ID)
        ids = [sidebar.id for sidebar in OPEN_SIDEBARS]
        assign_sidebars_to_role(self.db, self.admin_id, ids, ACTOR_ID)
        outcomes = assign_sidebars_to_role(self.db, self.admin_id, ids, ACTOR_ID)
        self.db.commit()
        self.assertFalse(any(outcome.created for outcome in outcomes))
        self.assertEqual(
            self.db.scalar(select(func.count()).select_from(RoleSidebar)), len(ids)
        )

    def test_unknown_sidebar(self) -> None:
        with self.assertRaises(NotFoundError):
            assign_sidebars_to_role(self.db, self.admin_id, [123456], ACTOR_ID)


if __name__ == "__main__":
    unittest.main()
