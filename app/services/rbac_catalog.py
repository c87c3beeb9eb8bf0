"""Immutable RBAC catalogs: roles, permissions grouped by module, and open sidebars.

Seeding functions take these as arguments; nothing here touches the database.
"""

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class RoleSpec:
    name: str
    description: str


@dataclass(frozen=True)
class PermissionSpec:
    name: str
    description: str


@dataclass(frozen=True)
class PermissionGroupSpec:
    """A permission group keyed by its action (e.g. 'posts:*') with its member permissions."""

    action: str
    label: str
    description: str
    permissions: tuple[PermissionSpec, ...]
    action_url: str | None = None


@dataclass(frozen=True)
class SidebarSpec:
    id: int
    disp_name: str
    screen_name: str
    icon: str


ROLE_CATALOG: tuple[RoleSpec, ...] = (
    RoleSpec("Admin", "Overall administrator"),
    RoleSpec("Operation Incharge", "Oversees operational aspects"),
    RoleSpec("Ward Incharge", "Responsible for ward-level operations"),
    RoleSpec("Booth Incharge", "Manages individual booths"),
    RoleSpec("Booth Sub Incharge", "Supports booth level operations"),
    RoleSpec("Page Paramukh", "Grassroot coordinator"),
    RoleSpec("Community Incharge", "Engages with community stakeholders"),
    RoleSpec("Office Administration Incharge", "Manages office administration"),
    RoleSpec("Personal Assistant", "Supports administrative tasks"),
    RoleSpec("Help Desk", "Handles incoming requests and assistance"),
    RoleSpec("Public Hospitality", "Manages hospitality initiatives"),
    RoleSpec("Sector Incharge", "Oversees sector specific operations"),
    RoleSpec("Social Media", "Handles social media outreach"),
    RoleSpec("Society Implements", "Coordinates society level implementations"),
    RoleSpec("Health Sector", "Manages health related initiatives"),
    RoleSpec("Education Sector", "Handles education programs"),
    RoleSpec("Gov Schemes", "Tracks government schemes"),
    RoleSpec("public", "Default public user role"),
)

# Flat permission list; may contain duplicates, resolved first-wins by build_permission_catalog.
BASE_PERMISSIONS: tuple[PermissionSpec, ...] = (
    PermissionSpec("*", "All permissions"),
    PermissionSpec("posts:*", "All post permissions"),
    PermissionSpec("posts:list", "Allow listing all posts"),
    PermissionSpec("posts:view", "Allow viewing a post"),
    PermissionSpec("posts:create", "Allow creating a post"),
    PermissionSpec("posts:update", "Allow updating a post"),
    PermissionSpec("posts:delete", "Allow deleting a post"),
    PermissionSpec("events:*", "All event permissions"),
    PermissionSpec("events:list", "Allow listing all events"),
    PermissionSpec("events:view", "Allow viewing a single event"),
    PermissionSpec("events:view", "Allow viewing registrations for an event"),
    PermissionSpec("events:create", "Allow creating an event"),
    PermissionSpec("events:update", "Allow updating an event"),
    PermissionSpec("events:delete", "Allow deleting an event"),
    PermissionSpec("users:*", "Allow creating users from the admin panel"),
    PermissionSpec("users:create", "Allow creating users from the admin panel"),
    PermissionSpec("users:list", "Allow listing users from the admin panel"),
    PermissionSpec("users:view", "Allow viewing user details from the admin panel"),
    PermissionSpec("users:update", "Allow updating users from the admin panel"),
    PermissionSpec("users:delete", "Allow deleting users from the admin panel"),
    PermissionSpec("roles:*", "Allow listing roles"),
    PermissionSpec("roles:list", "Allow listing roles"),
    PermissionSpec("roles:create", "Allow creating roles"),
    PermissionSpec("roles:update", "Allow updating roles"),
    PermissionSpec("roles:delete", "Allow deleting roles"),
    PermissionSpec("permissions:*", "Allow listing permissions"),
    PermissionSpec("permissions:list", "Allow listing permissions"),
)

WILDCARD = "*"


def group_action_for(permission_name: str) -> str:
    """
    Group action a permission belongs to.

    'posts:create' and 'posts:*' both belong to 'posts:*'; a name without a
    module prefix (the global '*') is its own group.
    """
    segments = permission_name.split(":")
    if len(segments) <= 1:
        return permission_name
    return ":".join(segments[:-1]) + ":" + WILDCARD


def _module_label(action: str) -> str:
    if action == WILDCARD:
        return "All"
    module = action[: -len(":" + WILDCARD)]
    return module.replace(".", " ").replace("-", " ").replace(":", " ").title()


def build_permission_catalog(
    permissions: Iterable[PermissionSpec],
) -> tuple[PermissionGroupSpec, ...]:
    """Group flat permissions by module, keeping first-seen order and the first spec per name."""
    grouped: dict[str, list[PermissionSpec]] = {}
    seen: set[str] = set()
    for spec in permissions:
        if spec.name in seen:
            continue
        seen.add(spec.name)
        grouped.setdefault(group_action_for(spec.name), []).append(spec)

    groups = []
    for action, members in grouped.items():
        label = _module_label(action)
        description = (
            "All permissions" if action == WILDCARD else f"Allow all {label.lower()} permissions"
        )
        groups.append(
            PermissionGroupSpec(
                action=action,
                label=label,
                description=description,
                permissions=tuple(members),
            )
        )
    return tuple(groups)


PERMISSION_CATALOG: tuple[PermissionGroupSpec, ...] = build_permission_catalog(BASE_PERMISSIONS)

# Sidebars every role may see regardless of other assignments.
OPEN_SIDEBARS: tuple[SidebarSpec, ...] = (
    SidebarSpec(901, "Requests", "REQUESTS_SCREEN", "copy"),
    SidebarSpec(902, "Profile", "PROFILE_SCREEN", "id-card"),
    SidebarSpec(950, "Dashboard", "DASHBOARD_SCREEN", "tachometer-alt"),
)

DASHBOARD_SIDEBAR_ID = 950


def permission_names(groups: Iterable[PermissionGroupSpec]) -> list[str]:
    """All permission names in catalog order."""
    return [spec.name for group in groups for spec in group.permissions]
