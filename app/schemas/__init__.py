"""Pydantic request/response schemas."""

from app.schemas.auth import AccessProfileResponse, CurrentUser
from app.schemas.health import HealthResponse
from app.schemas.meta import (
    BulkStatusRequest,
    BulkStatusResponse,
    ErrorDetail,
    MetaRecordResponse,
    MetaRecordsResponse,
    MetaTableInfo,
    MetaTableSchema,
    MetaTablesResponse,
    MetaTableStats,
    Pagination,
)

__all__ = [
    "AccessProfileResponse",
    "BulkStatusRequest",
    "BulkStatusResponse",
    "CurrentUser",
    "ErrorDetail",
    "HealthResponse",
    "MetaRecordResponse",
    "MetaRecordsResponse",
    "MetaTableInfo",
    "MetaTableSchema",
    "MetaTablesResponse",
    "MetaTableStats",
    "Pagination",
]
