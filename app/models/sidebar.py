"""ORM models for navigation sidebars and their role assignments."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.models.base import AuditMixin, Base


class Sidebar(AuditMixin, Base):
    """Navigation menu entry shown to roles that are assigned to it."""

    __tablename__ = "tbl_sidebar"

    id = Column(Integer, primary_key=True, autoincrement=True)
    disp_name = Column(Text, nullable=False)
    screen_name = Column(String(255), nullable=False, unique=True)
    icon = Column(String(50), nullable=True)

    role_sidebars = relationship("RoleSidebar", back_populates="sidebar")


class RoleSidebar(AuditMixin, Base):
    """Role to sidebar assignment; unique on (role_id, sidebar_id), hidden via status=0."""

    __tablename__ = "tbl_xref_role_sidebar"

    role_id = Column(
        Integer,
        ForeignKey("tbl_meta_user_role.id", name="fk_xref_role_sidebar_role", ondelete="CASCADE"),
        primary_key=True,
    )
    sidebar_id = Column(
        Integer,
        ForeignKey("tbl_sidebar.id", name="fk_xref_role_sidebar_sidebar", ondelete="CASCADE"),
        primary_key=True,
    )

    role = relationship("Role", back_populates="role_sidebars")
    sidebar = relationship("Sidebar", back_populates="role_sidebars")
