"""ORM models for roles and user-role assignments."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import AuditMixin, Base


class Role(AuditMixin, Base):
    """
    Flat role catalog entry; disp_name is the natural key.

    parent_role_id groups roles for display only. Permissions are never
    inherited through it.
    """

    __tablename__ = "tbl_meta_user_role"

    id = Column(Integer, primary_key=True, autoincrement=True)
    disp_name = Column(String(100), nullable=False, unique=True)
    description = Column(String(255), nullable=True)
    parent_role_id = Column(
        Integer,
        ForeignKey("tbl_meta_user_role.id", name="fk_user_role_parent", ondelete="SET NULL"),
        nullable=True,
    )

    parent_role = relationship("Role", remote_side=[id])
    user_roles = relationship("UserRole", back_populates="role")
    role_permissions = relationship("RolePermission", back_populates="role")
    role_sidebars = relationship("RoleSidebar", back_populates="role")


class UserRole(AuditMixin, Base):
    """User to role assignment; unique on (user_id, role_id), revoked via status=0."""

    __tablename__ = "tbl_xref_user_role"

    user_id = Column(
        Integer,
        ForeignKey("tbl_user.id", name="fk_xref_user_role_user", ondelete="CASCADE"),
        primary_key=True,
    )
    role_id = Column(
        Integer,
        ForeignKey("tbl_meta_user_role.id", name="fk_xref_user_role_role", ondelete="CASCADE"),
        primary_key=True,
    )

    user = relationship("User", back_populates="user_roles")
    role = relationship("Role", back_populates="user_roles")
