"""ORM models for community posts and their ordered media attachments."""

import enum

from sqlalchemy import Column, Enum, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from app.models.base import AuditMixin, Base


class MediaType(str, enum.Enum):
    PHOTO = "PHOTO"
    VIDEO = "VIDEO"


class Post(AuditMixin, Base):
    __tablename__ = "tbl_post"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("tbl_user.id", name="fk_post_user", ondelete="CASCADE"),
        nullable=False,
    )
    description = Column(Text, nullable=False)
    tags = Column(String(255), nullable=True)
    latitude = Column(Numeric(10, 8), nullable=True)
    longitude = Column(Numeric(11, 8), nullable=True)

    media = relationship(
        "PostMedia",
        back_populates="post",
        order_by="PostMedia.position_number",
    )

    __table_args__ = (Index("idx_post_user", "user_id"),)


class PostMedia(AuditMixin, Base):
    """Photo or video attached to a post; position_number orders the gallery."""

    __tablename__ = "tbl_post_media"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(
        Integer,
        ForeignKey("tbl_post.id", name="fk_post_media_post", ondelete="CASCADE"),
        nullable=False,
    )
    media_type = Column(
        Enum(MediaType, name="post_media_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    media_url = Column(String(500), nullable=False)
    thumbnail_url = Column(String(500), nullable=True)
    mime_type = Column(String(100), nullable=True)
    duration_second = Column(Integer, nullable=True)
    position_number = Column(Integer, nullable=False, default=1, server_default="1")
    caption = Column(String(255), nullable=True)

    post = relationship("Post", back_populates="media")

    __table_args__ = (
        Index("idx_post_media_post_status", "post_id", "status"),
        Index("idx_post_media_post_type", "post_id", "media_type"),
    )
