"""ORM models for permission groups, permissions and role grants."""

from sqlalchemy import Column, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import AuditMixin, Base


class PermissionGroup(AuditMixin, Base):
    """Named bucket of related permissions, keyed by a unique action such as 'posts:*'."""

    __tablename__ = "tbl_meta_permission_group"

    id = Column(Integer, primary_key=True, autoincrement=True)
    label = Column(String(150), nullable=False)
    description = Column(String(255), nullable=True)
    action = Column(String(150), nullable=False, unique=True)
    action_url = Column(String(500), nullable=True)

    permissions = relationship("Permission", back_populates="group")


class Permission(AuditMixin, Base):
    """Permission key (e.g. 'posts:create'); always belongs to exactly one group."""

    __tablename__ = "tbl_meta_permission"

    id = Column(Integer, primary_key=True, autoincrement=True)
    disp_name = Column(String(150), nullable=False, unique=True)
    description = Column(String(255), nullable=True)
    permission_group_id = Column(
        Integer,
        ForeignKey("tbl_meta_permission_group.id", name="fk_permission_group"),
        nullable=False,
    )

    group = relationship("PermissionGroup", back_populates="permissions")
    role_permissions = relationship("RolePermission", back_populates="permission")

    __table_args__ = (Index("idx_permission_group", "permission_group_id"),)


class RolePermission(AuditMixin, Base):
    """Role to permission grant; unique on (role_id, permission_id), revoked via status=0."""

    __tablename__ = "tbl_xref_role_permission"

    role_id = Column(
        Integer,
        ForeignKey("tbl_meta_user_role.id", name="fk_xref_role_permission_role", ondelete="CASCADE"),
        primary_key=True,
    )
    permission_id = Column(
        Integer,
        ForeignKey(
            "tbl_meta_permission.id", name="fk_xref_role_permission_permission", ondelete="CASCADE"
        ),
        primary_key=True,
    )

    role = relationship("Role", back_populates="role_permissions")
    permission = relationship("Permission", back_populates="role_permissions")
