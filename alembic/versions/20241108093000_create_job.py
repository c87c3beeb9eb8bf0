"""Create tbl_job for job applications.

Revision ID: 20241108093000
Revises: 20241106090000
Create Date: 2024-11-08

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20241108093000"
down_revision: Union[str, None] = "20241106090000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

submitted_for_enum = sa.Enum("self", "others", name="job_submitted_for")


def upgrade() -> None:
    op.create_table(
        "tbl_job",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("submitted_for", submitted_for_enum, nullable=False),
        sa.Column("applicant_user_id", sa.Integer(), nullable=True),
        sa.Column("full_name", sa.String(length=191), nullable=False),
        sa.Column("contact_number", sa.String(length=20), nullable=False),
        sa.Column("email", sa.String(length=191), nullable=True),
        sa.Column("alternative_contact_number", sa.String(length=20), nullable=True),
        sa.Column("full_address", sa.Text(), nullable=False),
        sa.Column("education", sa.String(length=255), nullable=True),
        sa.Column("work_experience", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("resume_url", sa.String(length=500), nullable=True),
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
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["applicant_user_id"],
            ["tbl_user.id"],
            name="fk_job_applicant_user",
            ondelete="SET NULL",
        ),
    )
    op.create_index("idx_job_status", "tbl_job", ["status"], unique=False)
    op.create_index(
        "idx_job_applicant_status", "tbl_job", ["applicant_user_id", "status"], unique=False
    )
    op.create_index(
        "idx_job_submitted_for_status", "tbl_job", ["submitted_for", "status"], unique=False
    )


def downgrade() -> None:
    op.drop_index("idx_job_submitted_for_status", table_name="tbl_job")
    op.drop_index("idx_job_applicant_status", table_name="tbl_job")
    op.drop_index("idx_job_status", table_name="tbl_job")
    op.drop_table("tbl_job")
    submitted_for_enum.drop(op.get_bind(), checkfirst=True)
