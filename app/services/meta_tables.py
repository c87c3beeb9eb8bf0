"""
Generic CRUD over registered meta lookup tables.

Every operation takes a MetaTableConfig from the registry and works purely from
it (model, primary key, searchable fields, status support, custom includes), so
adding a lookup table never requires code here.
"""

import enum
import logging
import re
from typing import Any

from sqlalchemy import BigInteger, Integer, SmallInteger, false, func, inspect, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import RelationshipDirection, Session, selectinload
from sqlalchemy.sql.elements import ColumnElement

from app.core.errors import ConstraintViolationError, NotFoundError, ValidationError
from app.core.meta_tables import MetaTableConfig
from app.models import AUDIT_FIELDS, STATUS_ACTIVE, STATUS_INACTIVE

logger = logging.getLogger(__name__)

# Fields the API never accepts in create/update payloads.
RESTRICTED_FIELDS = frozenset(("status", *AUDIT_FIELDS))

STATUS_ALL = "all"

_INTEGER_TERM = re.compile(r"-?[0-9]+")


def _columns(config: MetaTableConfig) -> dict[str, Any]:
    return {column.key: column for column in inspect(config.model).columns}


def _is_integer_column(column: Any) -> bool:
    return isinstance(column.type, Integer)


def _integer_bits(column: Any) -> int:
    if isinstance(column.type, BigInteger):
        return 64
    if isinstance(column.type, SmallInteger):
        return 16
    return 32


def _parse_integer_term(term: str, column: Any) -> int | None:
    """ASCII integer that fits the column's storage range, else None."""
    if not _INTEGER_TERM.fullmatch(term):
        return None
    value = int(term)
    bound = 2 ** (_integer_bits(column) - 1)
    if not -bound <= value < bound:
        return None
    return value


def _to_plain(value: Any) -> Any:
    return value.value if isinstance(value, enum.Enum) else value


def serialize_record(record: Any, config: MetaTableConfig) -> dict[str, Any]:
    """Record as a dict without audit fields, plus projected custom includes."""
    out = {
        key: _to_plain(getattr(record, key))
        for key in _columns(config)
        if key not in AUDIT_FIELDS
    }
    for include in config.custom_includes:
        related = getattr(record, include.association)
        out[include.association] = (
            None
            if related is None
            else {attr: _to_plain(getattr(related, attr)) for attr in include.attributes}
        )
    return out


def describe_table(config: MetaTableConfig) -> dict[str, Any]:
    """Registry entry plus field metadata for the lookup table listing."""
    include_names = {include.association for include in config.custom_includes}
    relationships = {
        next(iter(rel.local_columns)).key: rel.key
        for rel in inspect(config.model).relationships
        if rel.direction is RelationshipDirection.MANYTOONE
    }
    fields = []
    for key, column in _columns(config).items():
        if key in AUDIT_FIELDS:
            continue
        field: dict[str, Any] = {"name": key, "type": type(column.type).__name__}
        foreign_keys = list(column.foreign_keys)
        if foreign_keys:
            fk = foreign_keys[0]
            association = relationships.get(key)
            field["is_foreign_key"] = True
            field["references"] = {"table": fk.column.table.name, "key": fk.column.name}
            field["association_name"] = association
            field["includes_relation_data"] = association in include_names
        fields.append(field)
    return {
        "name": config.name,
        "table_name": config.table_name,
        "display_name": config.display_name,
        "description": config.description,
        "primary_key": config.primary_key,
        "has_status": config.has_status,
        "searchable_fields": list(config.searchable_fields),
        "fields": fields,
    }


def table_schema(config: MetaTableConfig) -> dict[str, Any]:
    """Column-level schema of a lookup table (all columns, audit included)."""
    fields = []
    for key, column in _columns(config).items():
        default = column.default.arg if column.default is not None else None
        fields.append(
            {
                "field_name": key,
                "type": type(column.type).__name__,
                "allow_null": bool(column.nullable),
                "primary_key": bool(column.primary_key),
                "unique": bool(column.unique),
                "default": default if isinstance(default, (str, int, float, bool)) else None,
            }
        )
    return {
        "table_name": config.table_name,
        "display_name": config.display_name,
        "description": config.description,
        "fields": fields,
    }


def resolve_status_filter(config: MetaTableConfig, status: str | None) -> int | None:
    """
    Status filter to apply to a listing.

    Status tables default to active rows only; "all" disables filtering.
    Returns None when no status predicate should be applied.
    """
    if not config.has_status:
        return None
    if status is None or status == "":
        return STATUS_ACTIVE
    if status == STATUS_ALL:
        return None
    if status in ("0", "1"):
        return int(status)
    raise ValidationError("status must be 0, 1 or 'all'")


def build_search_clause(
    config: MetaTableConfig,
    search: str | None,
    search_field: str | None,
) -> ColumnElement[bool] | None:
    """
    WHERE clause for a search term.

    A search_field outside the table's searchable fields is rejected, never
    ignored. Text columns match by case-insensitive substring, integer
    columns by equality.
    """
    if search_field is not None and search_field not in config.searchable_fields:
        raise ValidationError(
            f"Field '{search_field}' is not searchable in {config.display_name}. "
            f"Searchable fields: {', '.join(config.searchable_fields)}"
        )
    term = (search or "").strip()
    if not term:
        return None

    columns = _columns(config)
    field_names = [search_field] if search_field else list(config.searchable_fields)
    conditions = []
    for name in field_names:
        column = columns[name]
        if _is_integer_column(column):
            value = _parse_integer_term(term, column)
            if value is not None:
                conditions.append(column == value)
            elif search_field:
                raise ValidationError(
                    f"Field '{name}' only supports integer search terms "
                    f"within its storage range"
                )
        else:
            conditions.append(column.icontains(term, autoescape=True))
    if not conditions:
        return false()
    return or_(*conditions)


def _load_options(config: MetaTableConfig) -> list[Any]:
    return [
        selectinload(getattr(config.model, include.association))
        for include in config.custom_includes
    ]


def list_records(
    db: Session,
    config: MetaTableConfig,
    *,
    page: int = 1,
    limit: int = 25,
    search: str | None = None,
    search_field: str | None = None,
    status: str | None = None,
) -> tuple[list[dict[str, Any]], int]:
    """One page of records (serialized) and the total count matching the filters."""
    filters = []
    search_clause = build_search_clause(config, search, search_field)
    if search_clause is not None:
        filters.append(search_clause)
    status_value = resolve_status_filter(config, status)
    if status_value is not None:
        filters.append(config.model.status == status_value)

    model = config.model
    primary_key = getattr(model, config.primary_key)
    total = db.scalar(select(func.count()).select_from(model).where(*filters)) or 0
    rows = db.scalars(
        select(model)
        .where(*filters)
        .options(*_load_options(config))
        .order_by(primary_key.asc())
        .limit(limit)
        .offset((page - 1) * limit)
    ).all()
    return [serialize_record(row, config) for row in rows], total


def _get_or_404(db: Session, config: MetaTableConfig, record_id: int) -> Any:
    record = db.scalar(
        select(config.model)
        .where(getattr(config.model, config.primary_key) == record_id)
        .options(*_load_options(config))
    )
    if record is None:
        raise NotFoundError(f"Record {record_id} not found in {config.display_name}")
    return record


def get_record(db: Session, config: MetaTableConfig, record_id: int) -> dict[str, Any]:
    return serialize_record(_get_or_404(db, config, record_id), config)


def _validate_payload(config: MetaTableConfig, payload: dict[str, Any], *, creating: bool) -> None:
    restricted = sorted(RESTRICTED_FIELDS.intersection(payload))
    if restricted:
        raise ValidationError(f"Restricted field(s) cannot be set: {', '.join(restricted)}")

    columns = _columns(config)
    writable = {key for key in columns if key != config.primary_key}
    unknown = sorted(set(payload) - writable)
    if unknown:
        raise ValidationError(
            f"Unknown field(s) for {config.display_name}: {', '.join(unknown)}"
        )

    if creating:
        missing = sorted(
            key
            for key, column in columns.items()
            if key in writable
            and key not in RESTRICTED_FIELDS
            and not column.nullable
            and column.default is None
            and column.server_default is None
            and payload.get(key) is None
        )
        if missing:
            raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


def _commit(db: Session, config: MetaTableConfig) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Constraint violation writing %s: %s", config.table_name, e.orig)
        raise ConstraintViolationError(
            f"{config.display_name} record violates a uniqueness or reference constraint"
        ) from e


def create_record(
    db: Session,
    config: MetaTableConfig,
    payload: dict[str, Any],
    actor_id: int,
) -> dict[str, Any]:
    """Insert a record stamped with the acting user; returns the stored record."""
    _validate_payload(config, payload, creating=True)
    record = config.model(**payload, created_by=actor_id, updated_by=actor_id)
    db.add(record)
    _commit(db, config)
    record_id = getattr(record, config.primary_key)
    logger.info("Created %s record id=%s by actor=%s", config.name, record_id, actor_id)
    return get_record(db, config, record_id)


def update_record(
    db: Session,
    config: MetaTableConfig,
    record_id: int,
    payload: dict[str, Any],
    actor_id: int,
) -> dict[str, Any]:
    _validate_payload(config, payload, creating=False)
    record = _get_or_404(db, config, record_id)
    for key, value in payload.items():
        setattr(record, key, value)
    record.updated_by = actor_id
    _commit(db, config)
    logger.info("Updated %s record id=%s by actor=%s", config.name, record_id, actor_id)
    return get_record(db, config, record_id)


def deactivate_record(
    db: Session,
    config: MetaTableConfig,
    record_id: int,
    actor_id: int,
) -> None:
    """Soft delete: set status to 0. Rows are never removed."""
    if not config.has_status:
        raise ValidationError(f"{config.display_name} does not support status updates")
    record = _get_or_404(db, config, record_id)
    record.status = STATUS_INACTIVE
    record.updated_by = actor_id
    _commit(db, config)
    logger.info("Deactivated %s record id=%s by actor=%s", config.name, record_id, actor_id)


def bulk_update_status(
    db: Session,
    config: MetaTableConfig,
    ids: list[int],
    status: int,
    actor_id: int,
) -> int:
    """Set status on many records; returns the number of rows affected."""
    if not config.has_status:
        raise ValidationError(f"{config.display_name} does not support status updates")
    if not ids:
        raise ValidationError("ids must be a non-empty array")
    if status not in (STATUS_ACTIVE, STATUS_INACTIVE):
        raise ValidationError("status must be 0 or 1")

    model = config.model
    records = db.scalars(
        select(model).where(getattr(model, config.primary_key).in_(set(ids)))
    ).all()
    for record in records:
        record.status = status
        record.updated_by = actor_id
    _commit(db, config)
    return len(records)


def table_stats(db: Session, config: MetaTableConfig) -> dict[str, int]:
    model = config.model
    stats = {"total": db.scalar(select(func.count()).select_from(model)) or 0}
    if config.has_status:
        for label, value in (("active", STATUS_ACTIVE), ("inactive", STATUS_INACTIVE)):
            stats[label] = (
                db.scalar(select(func.count()).select_from(model).where(model.status == value))
                or 0
            )
    return stats
