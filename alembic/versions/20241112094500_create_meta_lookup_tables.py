"""Create meta lookup tables served by the generic lookup API.

Revision ID: 20241112094500
Revises: 20241108093000
Create Date: 2024-11-12

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20241112094500"
down_revision: Union[str, None] = "20241108093000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Lookup tables that carry only id + disp_name (+ status/audit).
PLAIN_LOOKUP_TABLES = (
    "tbl_meta_business_type",
    "tbl_meta_community_type",
    "tbl_meta_relation_type",
    "tbl_meta_government_level",
    "tbl_meta_sector",
    "tbl_meta_scheme_type_lookup",
    "tbl_meta_ownership_type",
    "tbl_meta_gender_option",
    "tbl_meta_widow_status",
    "tbl_meta_disability_status",
    "tbl_meta_employment_status",
)


def _lookup_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("disp_name", sa.String(length=100), nullable=False),
        sa.Column("status", sa.SmallInteger(), nullable=False, server_default="1"),
        sa.Column("created_by", sa.BigInteger(), nullable=True),
        sa.Column("updated_by", sa.BigInteger(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    for table_name in PLAIN_LOOKUP_TABLES:
        op.create_table(table_name, *_lookup_columns(), sa.PrimaryKeyConstraint("id"))

    op.create_table(
        "tbl_meta_mla_constituency",
        *_lookup_columns(),
        sa.Column("num", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "tbl_meta_booth_number",
        *_lookup_columns(),
        sa.Column("num", sa.Integer(), nullable=True),
        sa.Column("mla_constituency_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["mla_constituency_id"],
            ["tbl_meta_mla_constituency.id"],
            name="fk_booth_number_mla_constituency",
        ),
    )
    op.create_table(
        "tbl_meta_ward_number",
        *_lookup_columns(),
        sa.Column("num", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "tbl_meta_field_type",
        *_lookup_columns(),
        sa.Column("type", sa.String(length=50), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "tbl_meta_input_format",
        *_lookup_columns(),
        sa.Column("format", sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("tbl_meta_input_format")
    op.drop_table("tbl_meta_field_type")
    op.drop_table("tbl_meta_ward_number")
    op.drop_table("tbl_meta_booth_number")
    op.drop_table("tbl_meta_mla_constituency")
    for table_name in reversed(PLAIN_LOOKUP_TABLES):
        op.drop_table(table_name)
