"""
Localized terms / legal text model
"""
from enum import Enum

from sqlalchemy import Column, Integer, String, Text, Boolean, CheckConstraint, Index
from catalog_api.database import Base
from catalog_api.models.base import UUIDPrimaryKeyMixin, TimestampMixin


class TermLanguage(str, Enum):
    EN = "en"
    SV = "sv"
    FR = "fr"


SUPPORTED_LANGUAGES = tuple(language.value for language in TermLanguage)


class Term(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """One content block of a section, in one language"""
    __tablename__ = "terms"
    __table_args__ = (
        CheckConstraint(
            "language IN ({})".format(", ".join(f"'{code}'" for code in SUPPORTED_LANGUAGES)),
            name="ck_terms_language",
        ),
        Index("ix_terms_language_section_key", "language", "section_key"),
    )

    language = Column(String(8), nullable=False)
    section_key = Column(String, nullable=False)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    order_index = Column(Integer, nullable=False, default=0, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
