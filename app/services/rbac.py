"""
Idempotent RBAC seeding and user access lookups.

Every write goes through upsert_by_natural_key: find the row by its natural
key, insert it active if absent, otherwise reactivate and update it in place.
Running any seeding function twice leaves the database in the same state.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import transaction
from app.core.errors import ConstraintViolationError, NotFoundError, ValidationConflictError
from app.models import (
    STATUS_ACTIVE,
    Permission,
    PermissionGroup,
    Role,
    RolePermission,
    RoleSidebar,
    Sidebar,
    User,
    UserRole,
)
from app.services.rbac_catalog import (
    PERMISSION_CATALOG,
    ROLE_CATALOG,
    PermissionGroupSpec,
    RoleSpec,
    SidebarSpec,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpsertOutcome:
    """What happened to one record during a seeding batch."""

    table: str
    key: str
    created: bool

    def describe(self) -> str:
        verb = "Created" if self.created else "Updated"
        return f"{verb} {self.table} {self.key}"


@dataclass(frozen=True)
class UserAccessProfile:
    roles: tuple[str, ...]
    permissions: tuple[str, ...]


def _find_by_natural_key(session: Session, model: type, natural_key: Mapping[str, Any]) -> Any:
    return session.scalars(select(model).filter_by(**natural_key)).first()


def _format_key(natural_key: Mapping[str, Any]) -> str:
    return ", ".join(f"{k}={v}" for k, v in natural_key.items())


def upsert_by_natural_key(
    session: Session,
    model: type,
    natural_key: Mapping[str, Any],
    attributes: Mapping[str, Any],
    actor_id: int,
) -> tuple[Any, bool]:
    """
    Find-or-create-or-reactivate a row identified by its natural key.

    Returns (row, created). The insert runs inside a SAVEPOINT: if a concurrent
    writer committed the same key first, the unique constraint rejects ours, the
    savepoint is rolled back and the now-visible row is updated instead.
    Does not commit; callers wrap batches in transaction().
    """
    existing = _find_by_natural_key(session, model, natural_key)
    if existing is None:
        row = model(
            **natural_key,
            **attributes,
            status=STATUS_ACTIVE,
            created_by=actor_id,
            updated_by=actor_id,
        )
        try:
            with session.begin_nested():
                session.add(row)
                session.flush()
        except IntegrityError as e:
            existing = _find_by_natural_key(session, model, natural_key)
            if existing is None:
                raise ConstraintViolationError(
                    f"Cannot insert {model.__tablename__} ({_format_key(natural_key)}): {e.orig}"
                ) from e
            logger.info(
                "%s (%s) was inserted concurrently; updating it",
                model.__tablename__,
                _format_key(natural_key),
            )
        else:
            return row, True

    for key, value in attributes.items():
        setattr(existing, key, value)
    existing.status = STATUS_ACTIVE
    existing.updated_by = actor_id
    session.flush()
    return existing, False


def seed_roles(
    session: Session, roles: Iterable[RoleSpec], actor_id: int
) -> list[UpsertOutcome]:
    outcomes = []
    for spec in roles:
        _, created = upsert_by_natural_key(
            session,
            Role,
            {"disp_name": spec.name},
            {"description": spec.description},
            actor_id,
        )
        outcomes.append(UpsertOutcome("role", spec.name, created))
    return outcomes


def seed_permissions(
    session: Session, groups: Iterable[PermissionGroupSpec], actor_id: int
) -> list[UpsertOutcome]:
    """
    Upsert each permission group, then its permissions.

    A group's id is resolved before any of its permissions are written; a
    permission is never inserted without a group.
    """
    outcomes = []
    for group_spec in groups:
        group, created = upsert_by_natural_key(
            session,
            PermissionGroup,
            {"action": group_spec.action},
            {
                "label": group_spec.label,
                "description": group_spec.description,
                "action_url": group_spec.action_url,
            },
            actor_id,
        )
        outcomes.append(UpsertOutcome("permission group", group_spec.action, created))
        if group is None or group.id is None:
            raise ValidationConflictError(
                f"Permission group '{group_spec.action}' could not be resolved; "
                "its permissions were not written"
            )
        for spec in group_spec.permissions:
            _, created = upsert_by_natural_key(
                session,
                Permission,
                {"disp_name": spec.name},
                {"description": spec.description, "permission_group_id": group.id},
                actor_id,
            )
            outcomes.append(UpsertOutcome("permission", spec.name, created))
    return outcomes


def seed_sidebars(
    session: Session, sidebars: Iterable[SidebarSpec], actor_id: int
) -> list[UpsertOutcome]:
    """Upsert sidebars keyed by their fixed id."""
    outcomes = []
    for spec in sidebars:
        _, created = upsert_by_natural_key(
            session,
            Sidebar,
            {"id": spec.id},
            {"disp_name": spec.disp_name, "screen_name": spec.screen_name, "icon": spec.icon},
            actor_id,
        )
        outcomes.append(UpsertOutcome("sidebar", f"{spec.id}: {spec.disp_name}", created))
    return outcomes


def grant_permissions_to_role(
    session: Session,
    role_name: str,
    permission_names: Iterable[str] | None,
    actor_id: int,
) -> list[UpsertOutcome]:
    """
    Grant permissions to a role by name.

    permission_names=None grants every permission in the table. Role and
    permission ids are resolved first; if either side resolves to nothing the
    grant is skipped with a warning and nothing is written.
    """
    role_id = session.scalar(select(Role.id).where(Role.disp_name == role_name))
    names = None if permission_names is None else list(permission_names)
    permissions = []
    if names is None or names:
        query = select(Permission.id, Permission.disp_name).order_by(Permission.id)
        if names is not None:
            query = query.where(Permission.disp_name.in_(names))
        permissions = session.execute(query).all()

    if role_id is None or not permissions:
        logger.warning(
            "Skipping permission grant to role %r: role found=%s, permissions matched=%d",
            role_name,
            role_id is not None,
            len(permissions),
        )
        return []

    outcomes = []
    for permission_id, name in permissions:
        _, created = upsert_by_natural_key(
            session,
            RolePermission,
            {"role_id": role_id, "permission_id": permission_id},
            {},
            actor_id,
        )
        outcomes.append(UpsertOutcome("role permission", f"{role_name} -> {name}", created))
    return outcomes


def _require(session: Session, model: type, record_id: int, label: str) -> Any:
    record = session.get(model, record_id)
    if record is None:
        raise NotFoundError(f"{label} {record_id} not found")
    return record


def assign_roles_to_user(
    session: Session, user_id: int, role_ids: Iterable[int], actor_id: int
) -> list[UpsertOutcome]:
    """Assign roles to a user; existing assignments are reactivated, never duplicated."""
    _require(session, User, user_id, "User")
    outcomes = []
    for role_id in dict.fromkeys(role_ids):
        role = _require(session, Role, role_id, "Role")
        _, created = upsert_by_natural_key(
            session,
            UserRole,
            {"user_id": user_id, "role_id": role_id},
            {},
            actor_id,
        )
        outcomes.append(UpsertOutcome("user role", f"user {user_id} -> {role.disp_name}", created))
    return outcomes


def assign_sidebars_to_role(
    session: Session, role_id: int, sidebar_ids: Iterable[int], actor_id: int
) -> list[UpsertOutcome]:
    role = _require(session, Role, role_id, "Role")
    outcomes = []
    for sidebar_id in dict.fromkeys(sidebar_ids):
        _require(session, Sidebar, sidebar_id, "Sidebar")
        _, created = upsert_by_natural_key(
            session,
            RoleSidebar,
            {"role_id": role_id, "sidebar_id": sidebar_id},
            {},
            actor_id,
        )
        outcomes.append(
            UpsertOutcome("role sidebar", f"{role.disp_name} -> sidebar {sidebar_id}", created)
        )
    return outcomes


def seed_rbac(
    session: Session,
    actor_id: int,
    roles: Iterable[RoleSpec] = ROLE_CATALOG,
    permission_groups: Iterable[PermissionGroupSpec] = PERMISSION_CATALOG,
    admin_role_name: str | None = None,
) -> list[UpsertOutcome]:
    """
    Full RBAC seed: roles, then permission groups and permissions, then grant
    the admin role every permission.

    Each step commits as its own transaction. When a step fails only that step
    is rolled back; earlier steps stay committed and are named in the error
    log. Re-running the seed completes the rest.
    """
    admin_role_name = admin_role_name or settings.ADMIN_ROLE_NAME
    steps = (
        ("seed roles", lambda: seed_roles(session, roles, actor_id)),
        ("seed permissions", lambda: seed_permissions(session, permission_groups, actor_id)),
        (
            "grant admin permissions",
            lambda: grant_permissions_to_role(session, admin_role_name, None, actor_id),
        ),
    )
    outcomes: list[UpsertOutcome] = []
    committed: list[str] = []
    for name, step in steps:
        try:
            with transaction(session, name):
                outcomes.extend(step())
        except Exception:
            logger.error(
                "RBAC seed stopped at %r; already committed: %s",
                name,
                ", ".join(committed) or "nothing",
            )
            raise
        committed.append(name)
    logger.info(
        "RBAC seed complete: %d created, %d updated",
        sum(1 for o in outcomes if o.created),
        sum(1 for o in outcomes if not o.created),
    )
    return outcomes


def get_user_access_profile(session: Session, user_id: int) -> UserAccessProfile:
    """
    Active role names of a user and the union of permission names those roles grant.

    Only active rows count at every hop (role assignment, role, grant,
    permission). parent_role_id is not followed.
    """
    roles = session.scalars(
        select(Role.disp_name)
        .join(UserRole, UserRole.role_id == Role.id)
        .where(
            UserRole.user_id == user_id,
            UserRole.status == STATUS_ACTIVE,
            Role.status == STATUS_ACTIVE,
        )
        .order_by(Role.id)
    ).all()
    permissions = session.scalars(
        select(Permission.disp_name)
        .join(RolePermission, RolePermission.permission_id == Permission.id)
        .join(Role, Role.id == RolePermission.role_id)
        .join(UserRole, UserRole.role_id == Role.id)
        .where(
            UserRole.user_id == user_id,
            UserRole.status == STATUS_ACTIVE,
            Role.status == STATUS_ACTIVE,
            RolePermission.status == STATUS_ACTIVE,
            Permission.status == STATUS_ACTIVE,
        )
        .distinct()
        .order_by(Permission.disp_name)
    ).all()
    return UserAccessProfile(roles=tuple(roles), permissions=tuple(permissions))


def get_role_id(session: Session, name: str) -> int:
    role_id = session.scalar(select(Role.id).where(Role.disp_name == name))
    if role_id is None:
        raise NotFoundError(f"Role '{name}' not found")
    return role_id


def active_role_ids(session: Session, exclude_names: Iterable[str] = ()) -> list[int]:
    """Ids of active roles, optionally skipping roles by name."""
    query = select(Role.id).where(Role.status == STATUS_ACTIVE).order_by(Role.id)
    excluded = list(exclude_names)
    if excluded:
        query = query.where(Role.disp_name.not_in(excluded))
    return list(session.scalars(query).all())


def active_sidebar_ids(session: Session, exclude_ids: Iterable[int] = ()) -> list[int]:
    query = select(Sidebar.id).where(Sidebar.status == STATUS_ACTIVE).order_by(Sidebar.id)
    excluded = list(exclude_ids)
    if excluded:
        query = query.where(Sidebar.id.not_in(excluded))
    return list(session.scalars(query).all())


def resolve_role_ids_or_default(session: Session, role_ids: Iterable[int] | None) -> list[int]:
    """
    Validate requested role ids, or fall back to the public role when none are given.

    Raises NotFoundError if a role id is unknown or the public role is not seeded.
    """
    requested = list(dict.fromkeys(role_ids or ()))
    if not requested:
        public_id = session.scalar(
            select(Role.id).where(Role.disp_name == settings.PUBLIC_ROLE_NAME)
        )
        if public_id is None:
            raise NotFoundError(f"Default role '{settings.PUBLIC_ROLE_NAME}' is not configured")
        return [public_id]
    found = set(session.scalars(select(Role.id).where(Role.id.in_(requested))).all())
    missing = [role_id for role_id in requested if role_id not in found]
    if missing:
        raise NotFoundError(f"Role(s) not found: {', '.join(map(str, missing))}")
    return requested
