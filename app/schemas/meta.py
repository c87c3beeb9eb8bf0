"""Pydantic schemas for the generic meta lookup table API."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Typed error body carried in HTTPException.detail."""

    code: str = Field(..., description="Stable error code (NOT_FOUND, VALIDATION_ERROR, CONFLICT).")
    message: str


class ForeignKeyReference(BaseModel):
    table: str
    key: str


class MetaFieldInfo(BaseModel):
    name: str
    type: str
    is_foreign_key: bool = False
    references: ForeignKeyReference | None = None
    association_name: str | None = None
    includes_relation_data: bool = False


class MetaTableInfo(BaseModel):
    """One registered lookup table as shown in the table listing."""

    name: str
    table_name: str
    display_name: str
    description: str
    primary_key: str
    has_status: bool
    searchable_fields: list[str]
    fields: list[MetaFieldInfo]


class MetaTablesResponse(BaseModel):
    tables: list[MetaTableInfo]
    total: int


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class AppliedFilters(BaseModel):
    search: str | None = None
    search_field: str | None = None
    status: str | None = None


class MetaRecordsResponse(BaseModel):
    """One page of lookup records."""

    table: str
    display_name: str
    data: list[dict[str, Any]]
    pagination: Pagination
    filters: AppliedFilters


class MetaRecordResponse(BaseModel):
    table: str
    data: dict[str, Any]


class BulkStatusRequest(BaseModel):
    ids: list[int] = Field(..., min_length=1, description="Primary keys to update.")
    status: Literal[0, 1]


class BulkStatusResponse(BaseModel):
    table: str
    status: int
    updated_count: int


class MetaTableStats(BaseModel):
    table: str
    display_name: str
    total: int
    active: int | None = None
    inactive: int | None = None


class MetaSchemaField(BaseModel):
    field_name: str
    type: str
    allow_null: bool
    primary_key: bool
    unique: bool
    default: str | int | float | bool | None = None


class MetaTableSchema(BaseModel):
    table_name: str
    display_name: str
    description: str
    fields: list[MetaSchemaField]
