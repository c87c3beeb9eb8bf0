"""ORM models for meta lookup tables (controlled vocabularies)."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import AuditMixin, Base


class LookupMixin(AuditMixin):
    """Shared shape of every lookup row: surrogate id, display name, status, audit."""

    id = Column(Integer, primary_key=True, autoincrement=True)
    disp_name = Column(String(100), nullable=False)


class MetaBusinessType(LookupMixin, Base):
    __tablename__ = "tbl_meta_business_type"


class MetaCommunityType(LookupMixin, Base):
    __tablename__ = "tbl_meta_community_type"


class MetaMlaConstituency(LookupMixin, Base):
    __tablename__ = "tbl_meta_mla_constituency"

    num = Column(Integer, nullable=True)

    booth_numbers = relationship("MetaBoothNumber", back_populates="mla_constituency")


class MetaBoothNumber(LookupMixin, Base):
    """Polling booth; embeds its parent MLA constituency in lookup responses."""

    __tablename__ = "tbl_meta_booth_number"

    num = Column(Integer, nullable=True)
    mla_constituency_id = Column(
        Integer,
        ForeignKey("tbl_meta_mla_constituency.id", name="fk_booth_number_mla_constituency"),
        nullable=False,
    )

    mla_constituency = relationship("MetaMlaConstituency", back_populates="booth_numbers")


class MetaWardNumber(LookupMixin, Base):
    __tablename__ = "tbl_meta_ward_number"

    num = Column(Integer, nullable=True)


class MetaRelationType(LookupMixin, Base):
    __tablename__ = "tbl_meta_relation_type"


class MetaGovernmentLevel(LookupMixin, Base):
    __tablename__ = "tbl_meta_government_level"


class MetaSector(LookupMixin, Base):
    __tablename__ = "tbl_meta_sector"


class MetaSchemeTypeLookup(LookupMixin, Base):
    __tablename__ = "tbl_meta_scheme_type_lookup"


class MetaOwnershipType(LookupMixin, Base):
    __tablename__ = "tbl_meta_ownership_type"


class MetaGenderOption(LookupMixin, Base):
    __tablename__ = "tbl_meta_gender_option"


class MetaWidowStatus(LookupMixin, Base):
    __tablename__ = "tbl_meta_widow_status"


class MetaDisabilityStatus(LookupMixin, Base):
    __tablename__ = "tbl_meta_disability_status"


class MetaEmploymentStatus(LookupMixin, Base):
    __tablename__ = "tbl_meta_employment_status"


class MetaFieldType(LookupMixin, Base):
    __tablename__ = "tbl_meta_field_type"

    type = Column(String(50), nullable=True)


class MetaInputFormat(LookupMixin, Base):
    __tablename__ = "tbl_meta_input_format"

    format = Column(String(100), nullable=True)
