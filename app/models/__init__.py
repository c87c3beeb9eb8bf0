"""SQLAlchemy ORM models."""

from app.models.base import AUDIT_FIELDS, STATUS_ACTIVE, STATUS_INACTIVE, Base
from app.models.job import Job, SubmittedFor
from app.models.meta import (
    MetaBoothNumber,
    MetaBusinessType,
    MetaCommunityType,
    MetaDisabilityStatus,
    MetaEmploymentStatus,
    MetaFieldType,
    MetaGenderOption,
    MetaGovernmentLevel,
    MetaInputFormat,
    MetaMlaConstituency,
    MetaOwnershipType,
    MetaRelationType,
    MetaSchemeTypeLookup,
    MetaSector,
    MetaWardNumber,
    MetaWidowStatus,
)
from app.models.permission import Permission, PermissionGroup, RolePermission
from app.models.post import MediaType, Post, PostMedia
from app.models.role import Role, UserRole
from app.models.sidebar import RoleSidebar, Sidebar
from app.models.user import User, UserOtp

__all__ = [
    "AUDIT_FIELDS",
    "Base",
    "Job",
    "MediaType",
    "MetaBoothNumber",
    "MetaBusinessType",
    "MetaCommunityType",
    "MetaDisabilityStatus",
    "MetaEmploymentStatus",
    "MetaFieldType",
    "MetaGenderOption",
    "MetaGovernmentLevel",
    "MetaInputFormat",
    "MetaMlaConstituency",
    "MetaOwnershipType",
    "MetaRelationType",
    "MetaSchemeTypeLookup",
    "MetaSector",
    "MetaWardNumber",
    "MetaWidowStatus",
    "Permission",
    "PermissionGroup",
    "Post",
    "PostMedia",
    "Role",
    "RoleSidebar",
    "RolePermission",
    "STATUS_ACTIVE",
    "STATUS_INACTIVE",
    "Sidebar",
    "SubmittedFor",
    "User",
    "UserOtp",
    "UserRole",
]
