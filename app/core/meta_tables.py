"""
Meta lookup table registry.

To add a new lookup table:
1. Add the ORM model in app/models/meta.py.
2. Add an Alembic revision creating its table.
3. Add a descriptor below. The generic lookup service and router pick it up
   without further changes.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from app.core.errors import NotFoundError
from app.models import (
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
    Permission,
    PermissionGroup,
    Role,
)
from app.models.base import Base


@dataclass(frozen=True)
class RelatedInclude:
    """Relationship to embed in responses, projected to a subset of attributes."""

    association: str
    attributes: tuple[str, ...]


@dataclass(frozen=True)
class MetaTableConfig:
    name: str
    table_name: str
    display_name: str
    description: str
    model: type[Base]
    primary_key: str = "id"
    searchable_fields: tuple[str, ...] = ("disp_name",)
    has_status: bool = True
    custom_includes: tuple[RelatedInclude, ...] = ()


def _lookup(
    name: str,
    model: type[Base],
    display_name: str,
    description: str,
    **kwargs,
) -> tuple[str, MetaTableConfig]:
    config = MetaTableConfig(
        name=name,
        table_name=model.__tablename__,
        display_name=display_name,
        description=description,
        model=model,
        **kwargs,
    )
    return name, config


_ID_AND_NAME = ("id", "disp_name")

META_TABLES: Mapping[str, MetaTableConfig] = MappingProxyType(
    dict(
        [
            _lookup("businessType", MetaBusinessType, "Business Types", "Types of businesses"),
            _lookup(
                "boothNumber",
                MetaBoothNumber,
                "Booth Numbers",
                "Booth numbers for voting",
                searchable_fields=("disp_name", "num"),
                custom_includes=(RelatedInclude("mla_constituency", _ID_AND_NAME),),
            ),
            _lookup("communityType", MetaCommunityType, "Community Types", "Types of communities"),
            _lookup(
                "mlaConstituency",
                MetaMlaConstituency,
                "MLA Constituencies",
                "MLA constituency details",
                searchable_fields=("disp_name", "num"),
            ),
            _lookup(
                "permission",
                Permission,
                "Permissions",
                "System permissions",
                searchable_fields=("disp_name", "description"),
                custom_includes=(RelatedInclude("group", ("id", "label", "action")),),
            ),
            _lookup(
                "permissionGroup",
                PermissionGroup,
                "Permission Groups",
                "Groups for organizing permissions",
                searchable_fields=("label", "action"),
            ),
            _lookup("relationType", MetaRelationType, "Relation Types", "Types of family relations"),
            _lookup(
                "userRole",
                Role,
                "User Roles",
                "User role definitions",
                searchable_fields=("disp_name", "description"),
                custom_includes=(RelatedInclude("parent_role", _ID_AND_NAME),),
            ),
            _lookup(
                "wardNumber",
                MetaWardNumber,
                "Ward Numbers",
                "Ward number details",
                searchable_fields=("disp_name", "num"),
            ),
            _lookup(
                "governmentLevel",
                MetaGovernmentLevel,
                "Government Levels",
                "Government hierarchy levels for scheme eligibility (e.g., State, Central).",
            ),
            _lookup(
                "sector",
                MetaSector,
                "Sectors",
                "Sectors associated with schemes (public, private, etc.).",
            ),
            _lookup(
                "schemeTypeLookup",
                MetaSchemeTypeLookup,
                "Scheme Type Lookup",
                "Meta list that powers the scheme type dropdown for user applications.",
            ),
            _lookup(
                "ownershipType",
                MetaOwnershipType,
                "Ownership Types",
                "Property ownership categories for applicant residences.",
            ),
            _lookup(
                "genderOption",
                MetaGenderOption,
                "Gender Options",
                "Allowed gender selections for applications.",
            ),
            _lookup("widowStatus", MetaWidowStatus, "Widow Status", "Widow/Widower response options."),
            _lookup(
                "disabilityStatus",
                MetaDisabilityStatus,
                "Disability Status",
                "Disability declaration options used in scheme applications.",
            ),
            _lookup(
                "employmentStatus",
                MetaEmploymentStatus,
                "Employment Status",
                "Employment status choices (employed, student, unemployed, etc.).",
            ),
            _lookup(
                "fieldType",
                MetaFieldType,
                "Field Types",
                "Types of form fields",
                searchable_fields=("disp_name", "type"),
            ),
            _lookup(
                "inputFormat",
                MetaInputFormat,
                "Input Formats",
                "Input format definitions",
                searchable_fields=("disp_name", "format"),
            ),
        ]
    )
)


def get_meta_table(name: str) -> MetaTableConfig:
    """Resolve a registry key to its descriptor. Raises NotFoundError for unknown keys."""
    config = META_TABLES.get(name)
    if config is None:
        raise NotFoundError(f"Meta table '{name}' not found")
    return config


def list_meta_tables() -> list[MetaTableConfig]:
    """All registered descriptors in registration order."""
    return list(META_TABLES.values())
