"""Key OTP records by contact number instead of user id.

OTPs can be requested before a user row exists, so tbl_user_otp stores the
contact number directly. Downgrade maps contact numbers back to user ids;
OTP rows whose contact number matches no user cannot be mapped and are deleted.

Revision ID: 20241102090000
Revises: 20241101090000
Create Date: 2024-11-02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20241102090000"
down_revision: Union[str, None] = "20241101090000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    with op.batch_alter_table("tbl_user_otp") as batch_op:
        batch_op.add_column(sa.Column("contact_number", sa.String(length=45), nullable=True))

    op.execute(
        """
        UPDATE tbl_user_otp
        SET contact_number = (
            SELECT u.contact_number FROM tbl_user u WHERE u.id = tbl_user_otp.user_id
        )
        """
    )

    with op.batch_alter_table("tbl_user_otp") as batch_op:
        batch_op.alter_column(
            "contact_number", existing_type=sa.String(length=45), nullable=False
        )
        batch_op.create_index("idx_user_otp_contact_number", ["contact_number"], unique=False)
        batch_op.drop_constraint("fk_user_otp_user", type_="foreignkey")
        batch_op.drop_index("idx_user_otp_user")
        batch_op.drop_column("user_id")


def downgrade() -> None:
    with op.batch_alter_table("tbl_user_otp") as batch_op:
        batch_op.add_column(sa.Column("user_id", sa.Integer(), nullable=True))

    op.execute(
        """
        DELETE FROM tbl_user_otp
        WHERE NOT EXISTS (
            SELECT 1 FROM tbl_user u WHERE u.contact_number = tbl_user_otp.contact_number
        )
        """
    )
    op.execute(
        """
        UPDATE tbl_user_otp
        SET user_id = (
            SELECT u.id FROM tbl_user u WHERE u.contact_number = tbl_user_otp.contact_number
        )
        """
    )

    with op.batch_alter_table("tbl_user_otp") as batch_op:
        batch_op.alter_column("user_id", existing_type=sa.Integer(), nullable=False)
        batch_op.create_foreign_key(
            "fk_user_otp_user", "tbl_user", ["user_id"], ["id"], ondelete="CASCADE"
        )
        batch_op.create_index("idx_user_otp_user", ["user_id"], unique=False)
        batch_op.drop_index("idx_user_otp_contact_number")
        batch_op.drop_column("contact_number")
