"""Replace tbl_post_image with tbl_post_media (photos and videos).

Existing images are carried over as PHOTO rows, numbered per post in id order.
Downgrade keeps PHOTO rows only; VIDEO rows have no place in tbl_post_image.

Revision ID: 20241106090000
Revises: 20241102090000
Create Date: 2024-11-06

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20241106090000"
down_revision: Union[str, None] = "20241102090000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

media_type_enum = sa.Enum("PHOTO", "VIDEO", name="post_media_type")

_AUDIT_NAMES = ("status", "created_by", "updated_by", "created_at", "updated_at")

post_image = sa.table(
    "tbl_post_image",
    sa.column("id"),
    sa.column("post_id"),
    sa.column("image_url"),
    sa.column("caption"),
    *(sa.column(name) for name in _AUDIT_NAMES),
)

post_media = sa.table(
    "tbl_post_media",
    sa.column("post_id"),
    sa.column("media_type"),
    sa.column("media_url"),
    sa.column("position_number"),
    sa.column("caption"),
    *(sa.column(name) for name in _AUDIT_NAMES),
)


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
        "tbl_post_media",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("media_type", media_type_enum, nullable=False),
        sa.Column("media_url", sa.String(length=500), nullable=False),
        sa.Column("thumbnail_url", sa.String(length=500), nullable=True),
        sa.Column("mime_type", sa.String(length=100), nullable=True),
        sa.Column("duration_second", sa.Integer(), nullable=True),
        sa.Column("position_number", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("caption", sa.String(length=255), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["post_id"], ["tbl_post.id"], name="fk_post_media_post", ondelete="CASCADE"
        ),
    )
    op.create_index(
        "idx_post_media_post_status", "tbl_post_media", ["post_id", "status"], unique=False
    )
    op.create_index(
        "idx_post_media_post_type", "tbl_post_media", ["post_id", "media_type"], unique=False
    )

    position = sa.func.row_number().over(
        partition_by=post_image.c.post_id, order_by=post_image.c.id
    )
    op.execute(
        post_media.insert().from_select(
            ["post_id", "media_type", "media_url", "position_number", "caption", *_AUDIT_NAMES],
            sa.select(
                post_image.c.post_id,
                sa.cast(sa.literal("PHOTO"), media_type_enum),
                post_image.c.image_url,
                position,
                post_image.c.caption,
                *(post_image.c[name] for name in _AUDIT_NAMES),
            ),
        )
    )

    op.drop_index("idx_post_image_post", table_name="tbl_post_image")
    op.drop_table("tbl_post_image")


def downgrade() -> None:
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

    op.execute(
        post_image.insert().from_select(
            ["post_id", "image_url", "caption", *_AUDIT_NAMES],
            sa.select(
                post_media.c.post_id,
                post_media.c.media_url,
                post_media.c.caption,
                *(post_media.c[name] for name in _AUDIT_NAMES),
            )
            .where(post_media.c.media_type == "PHOTO")
            .order_by(post_media.c.post_id, post_media.c.position_number),
        )
    )

    op.drop_index("idx_post_media_post_type", table_name="tbl_post_media")
    op.drop_index("idx_post_media_post_status", table_name="tbl_post_media")
    op.drop_table("tbl_post_media")
    media_type_enum.drop(op.get_bind(), checkfirst=True)
