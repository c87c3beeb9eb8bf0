"""ORM model for job applications submitted for oneself or on behalf of others."""

import enum

from sqlalchemy import Column, Enum, ForeignKey, Index, Integer, String, Text

from app.models.base import AuditMixin, Base


class SubmittedFor(str, enum.Enum):
    SELF = "self"
    OTHERS = "others"


class Job(AuditMixin, Base):
    """
    Job application.

    applicant_user_id is set when the applicant has an account; it is nulled if
    that user row is ever removed so the application history survives.
    """

    __tablename__ = "tbl_job"

    id = Column(Integer, primary_key=True, autoincrement=True)
    submitted_for = Column(
        Enum(SubmittedFor, name="job_submitted_for", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    applicant_user_id = Column(
        Integer,
        ForeignKey("tbl_user.id", name="fk_job_applicant_user", ondelete="SET NULL"),
        nullable=True,
    )
    full_name = Column(String(191), nullable=False)
    contact_number = Column(String(20), nullable=False)
    email = Column(String(191), nullable=True)
    alternative_contact_number = Column(String(20), nullable=True)
    full_address = Column(Text, nullable=False)
    education = Column(String(255), nullable=True)
    work_experience = Column(Text, nullable=True)
    description = Column(Text, nullable=False)
    resume_url = Column(String(500), nullable=True)

    __table_args__ = (
        Index("idx_job_status", "status"),
        Index("idx_job_applicant_status", "applicant_user_id", "status"),
        Index("idx_job_submitted_for_status", "submitted_for", "status"),
    )
