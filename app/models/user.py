"""ORM models for user accounts and OTP records."""

from sqlalchemy import Column, DateTime, Index, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import AuditMixin, Base


class User(AuditMixin, Base):
    """
    Platform user identified by a unique contact number.

    Users are never deleted; disabling an account flips status to 0.
    """

    __tablename__ = "tbl_user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    contact_number = Column(String(20), nullable=False, unique=True)
    email = Column(String(191), nullable=True, unique=True)
    full_name = Column(String(191), nullable=True)

    user_roles = relationship("UserRole", back_populates="user")


class UserOtp(AuditMixin, Base):
    """One-time password issued to a contact number (not tied to a user row)."""

    __tablename__ = "tbl_user_otp"

    id = Column(Integer, primary_key=True, autoincrement=True)
    contact_number = Column(String(45), nullable=False)
    otp_code = Column(String(10), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    verified_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (Index("idx_user_otp_contact_number", "contact_number"),)
