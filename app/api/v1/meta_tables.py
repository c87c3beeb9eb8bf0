"""Generic CRUD endpoints for every registered meta lookup table."""

import math
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin
from app.core.config import settings
from app.core.database import get_db
from app.core.errors import (
    AppError,
    ConstraintViolationError,
    NotFoundError,
    ValidationConflictError,
)
from app.core.meta_tables import MetaTableConfig, get_meta_table, list_meta_tables
from app.schemas.auth import CurrentUser
from app.schemas.meta import (
    AppliedFilters,
    BulkStatusRequest,
    BulkStatusResponse,
    MetaRecordResponse,
    MetaRecordsResponse,
    MetaTableInfo,
    MetaTableSchema,
    MetaTablesResponse,
    MetaTableStats,
    Pagination,
)
from app.services import meta_tables as service

router = APIRouter()


def _to_http(e: AppError) -> HTTPException:
    """Map a domain error to an HTTPException with a typed {code, message} detail."""
    if isinstance(e, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(e, (ConstraintViolationError, ValidationConflictError)):
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    return HTTPException(status_code=status_code, detail={"code": e.code, "message": e.message})


def resolve_table(table_name: str) -> MetaTableConfig:
    """Path dependency: registry descriptor for {table_name}; 404 when unknown."""
    try:
        return get_meta_table(table_name)
    except NotFoundError as e:
        raise _to_http(e) from e


Table = Annotated[MetaTableConfig, Depends(resolve_table)]
DbSession = Annotated[Session, Depends(get_db)]


@router.get("", response_model=MetaTablesResponse)
def get_meta_tables() -> MetaTablesResponse:
    """List every registered lookup table with its field metadata."""
    tables = [MetaTableInfo(**service.describe_table(config)) for config in list_meta_tables()]
    return MetaTablesResponse(tables=tables, total=len(tables))


@router.get("/{table_name}/data", response_model=MetaRecordsResponse)
def list_table_data(
    config: Table,
    db: DbSession,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int | None, Query(ge=1)] = None,
    search: str | None = None,
    search_field: str | None = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
) -> MetaRecordsResponse:
    """
    Paginated records of one lookup table.

    search matches all searchable fields unless search_field narrows it; status
    defaults to active rows for tables with a status column ("all" for every row).
    limit is capped at META_MAX_PAGE_SIZE.
    """
    page_size = min(limit or settings.META_DEFAULT_PAGE_SIZE, settings.META_MAX_PAGE_SIZE)
    try:
        rows, total = service.list_records(
            db,
            config,
            page=page,
            limit=page_size,
            search=search,
            search_field=search_field,
            status=status_filter,
        )
    except AppError as e:
        raise _to_http(e) from e
    total_pages = math.ceil(total / page_size) if total else 0
    return MetaRecordsResponse(
        table=config.name,
        display_name=config.display_name,
        data=rows,
        pagination=Pagination(
            page=page,
            limit=page_size,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        ),
        filters=AppliedFilters(search=search, search_field=search_field, status=status_filter),
    )


@router.get("/{table_name}/data/{record_id}", response_model=MetaRecordResponse)
def get_table_record(config: Table, record_id: int, db: DbSession) -> MetaRecordResponse:
    try:
        record = service.get_record(db, config, record_id)
    except AppError as e:
        raise _to_http(e) from e
    return MetaRecordResponse(table=config.name, data=record)


@router.post("/{table_name}/data", response_model=MetaRecordResponse, status_code=201)
def create_table_record(
    config: Table,
    db: DbSession,
    current_user: Annotated[CurrentUser, Depends(require_admin)],
    payload: Annotated[dict[str, Any], Body()],
) -> MetaRecordResponse:
    try:
        record = service.create_record(db, config, payload, current_user.id)
    except AppError as e:
        raise _to_http(e) from e
    return MetaRecordResponse(table=config.name, data=record)


@router.put("/{table_name}/data/{record_id}", response_model=MetaRecordResponse)
def update_table_record(
    config: Table,
    record_id: int,
    db: DbSession,
    current_user: Annotated[CurrentUser, Depends(require_admin)],
    payload: Annotated[dict[str, Any], Body()],
) -> MetaRecordResponse:
    try:
        record = service.update_record(db, config, record_id, payload, current_user.id)
    except AppError as e:
        raise _to_http(e) from e
    return MetaRecordResponse(table=config.name, data=record)


@router.delete("/{table_name}/data/{record_id}", status_code=204)
def delete_table_record(
    config: Table,
    record_id: int,
    db: DbSession,
    current_user: Annotated[CurrentUser, Depends(require_admin)],
) -> Response:
    """Soft delete: the record stays in the table with status 0."""
    try:
        service.deactivate_record(db, config, record_id, current_user.id)
    except AppError as e:
        raise _to_http(e) from e
    return Response(status_code=204)


@router.patch("/{table_name}/bulk-status", response_model=BulkStatusResponse)
def bulk_update_table_status(
    config: Table,
    body: BulkStatusRequest,
    db: DbSession,
    current_user: Annotated[CurrentUser, Depends(require_admin)],
) -> BulkStatusResponse:
    try:
        count = service.bulk_update_status(db, config, body.ids, body.status, current_user.id)
    except AppError as e:
        raise _to_http(e) from e
    return BulkStatusResponse(table=config.name, status=body.status, updated_count=count)


@router.get("/{table_name}/stats", response_model=MetaTableStats)
def get_table_stats(config: Table, db: DbSession) -> MetaTableStats:
    return MetaTableStats(
        table=config.name,
        display_name=config.display_name,
        **service.table_stats(db, config),
    )


@router.get("/{table_name}/schema", response_model=MetaTableSchema)
def get_table_schema(config: Table) -> MetaTableSchema:
    return MetaTableSchema(**service.table_schema(config))
