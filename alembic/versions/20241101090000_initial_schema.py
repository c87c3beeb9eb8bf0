"""Initial schema: users, OTPs, RBAC tables, sidebars, posts with images.

Revision ID: 20241101090000
Revises:
Create Date: 2024-11-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20241101090000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> list[sa.Column]:
    return [
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
    op.create_table(
        "tbl_user",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("contact_number", sa.String(length=20), nullable=False),
        sa.Column("email", sa.String(length=191), nullable=True),
        sa.Column("full_name", sa.String(length=191), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("contact_number", name="uq_user_contact_number"),
        sa.UniqueConstraint("email", name="uq_user_email"),
    )

    op.create_table(
        "tbl_user_otp",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("otp_code", sa.String(length=10), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("verified_at", sa.DateTime(timezone=True), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["tbl_user.id"], name="fk_user_otp_user", ondelete="CASCADE"
        ),
    )
    op.create_index("idx_user_otp_user", "tbl_user_otp", ["user_id"], unique=False)

    op.create_table(
        "tbl_meta_permission_group",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("label", sa.String(length=150), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.Column("action", sa.String(length=150), nullable=False),
        sa.Column("action_url", sa.String(length=500), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("action", name="uq_permission_group_action"),
    )

    op.create_table(
        "tbl_meta_permission",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("disp_name", sa.String(length=150), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.Column("permission_group_id", sa.Integer(), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("disp_name", name="uq_permission_disp_name"),
        sa.ForeignKeyConstraint(
            ["permission_group_id"], ["tbl_meta_permission_group.id"], name="fk_permission_group"
        ),
    )
    op.create_index(
        "idx_permission_group", "tbl_meta_permission", ["permission_group_id"], unique=False
    )

    op.create_table(
        "tbl_meta_user_role",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("disp_name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.Column("parent_role_id", sa.Integer(), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("disp_name", name="uq_user_role_disp_name"),
        sa.ForeignKeyConstraint(
            ["parent_role_id"],
            ["tbl_meta_user_role.id"],
            name="fk_user_role_parent",
            ondelete="SET NULL",
        ),
    )

    op.create_table(
        "tbl_xref_user_role",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("role_id", sa.Integer(), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("user_id", "role_id"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["tbl_user.id"], name="fk_xref_user_role_user", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["role_id"],
            ["tbl_meta_user_role.id"],
            name="fk_xref_user_role_role",
            ondelete="CASCADE",
        ),
    )

    op.create_table(
        "tbl_xref_role_permission",
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.Column("permission_id", sa.Integer(), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("role_id", "permission_id"),
        sa.ForeignKeyConstraint(
            ["role_id"],
            ["tbl_meta_user_role.id"],
            name="fk_xref_role_permission_role",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["permission_id"],
            ["tbl_meta_permission.id"],
            name="fk_xref_role_permission_permission",
            ondelete="CASCADE",
        ),
    )

    op.create_table(
        "tbl_sidebar",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("disp_name", sa.Text(), nullable=False),
        sa.Column("screen_name", sa.String(length=255), nullable=False),
        sa.Column("icon", sa.String(length=50), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("screen_name", name="uq_sidebar_screen_name"),
    )

    op.create_table(
        "tbl_xref_role_sidebar",
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.Column("sidebar_id", sa.Integer(), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("role_id", "sidebar_id"),
        sa.ForeignKeyConstraint(
            ["role_id"],
            ["tbl_meta_user_role.id"],
            name="fk_xref_role_sidebar_role",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["sidebar_id"],
            ["tbl_sidebar.id"],
            name="fk_xref_role_sidebar_sidebar",
            ondelete="CASCADE",
        ),
    )

    op.create_table(
        "tbl_post",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("tags", sa.String(length=255), nullable=True),
        sa.Column("latitude", sa.Numeric(10, 8), nullable=True),
        sa.Column("longitude", sa.Numeric(11, 8), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["tbl_user.id"], name="fk_post_user", ondelete="CASCADE"
        ),
    )
    op.create_index("idx_post_user", "tbl_post", ["user_id"], unique=False)

    op.create_table(
        "tbl_post_image",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("image_url", sa.String(length=500), nullable=False),
        sa.Column("caption", sa.String(length=255), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["post_id"], ["tbl_post.id"], name="fk_post_image_post", ondelete="CASCADE"
        ),
    )
    op.create_index("idx_post_image_post", "tbl_post_image", ["post_id"], unique=False)


def downgrade() -> None:
    op.drop_index("idx_post_image_post", table_name="tbl_post_image")
    op.drop_table("tbl_post_image")
    op.drop_index("idx_post_user", table_name="tbl_post")
    op.drop_table("tbl_post")
    op.drop_table("tbl_xref_role_sidebar")
    op.drop_table("tbl_sidebar")
    op.drop_table("tbl_xref_role_permission")
    op.drop_table("tbl_xref_user_role")
    op.drop_table("tbl_meta_user_role")
    op.drop_index("idx_permission_group", table_name="tbl_meta_permission")
    op.drop_table("tbl_meta_permission")
    op.drop_table("tbl_meta_permission_group")
    op.drop_index("idx_user_otp_user", table_name="tbl_user_otp")
    op.drop_table("tbl_user_otp")
    op.drop_table("tbl_user")
