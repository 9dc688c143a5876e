"""Модели раздела нормативных источников (законы, декреты, циркуляры)."""

import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Table, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from .base import Base
from .content_status import ContentStatus


class LegalSourceType(str, enum.Enum):
    """Тип нормативного источника."""
    LAW = "law"
    DECREE = "decree"
    LEGISLATIVE_DECREE = "legislative_decree"
    CIRCULAR = "circular"
    PRACTICE = "practice"
    JURISPRUDENCE = "jurisprudence"
    CONTRACT = "contract"
    OTHER = "other"


legal_source_tags = Table(
    "legal_source_tags",
    Base.metadata,
    Column("source_id", Integer, ForeignKey("legal_sources.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("legal_tags.id", ondelete="CASCADE"), primary_key=True),
)


class LegalSource(Base):
    """Нормативный источник с тегами и историей версий."""

    __tablename__ = "legal_sources"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(32), nullable=False, index=True)
    title = Column(String(600), nullable=False)
    issuing_body = Column(String(255), nullable=True)
    official_url = Column(String(1200), nullable=True)
    # YYYY-MM-DD или YYYY-MM
    published_at = Column(String(32), nullable=True)
    effective_from = Column(String(32), nullable=True)
    effective_to = Column(String(32), nullable=True)
    status = Column(String(20), nullable=False, default=ContentStatus.DRAFT.value, index=True)
    summary = Column(Text, nullable=True)
    body = Column(Text, nullable=True)
    created_by = Column(Integer, nullable=True)
    last_reviewed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False, index=True)

    tags = relationship("LegalTag", secondary=legal_source_tags, order_by="LegalTag.name", lazy="selectin")
    versions = relationship(
        "LegalSourceVersion",
        back_populates="source",
        order_by="LegalSourceVersion.created_at.desc()",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def tag_names(self):
        return [tag.name for tag in self.tags]

    def __repr__(self) -> str:
        return f"<LegalSource(id={self.id}, type='{self.type}', status='{self.status}')>"


class LegalTag(Base):
    """Тег нормативного источника."""

    __tablename__ = "legal_tags"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(80), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<LegalTag(id={self.id}, name='{self.name}')>"


class LegalSourceVersion(Base):
    """Запись истории версий источника."""

    __tablename__ = "legal_source_versions"
    __table_args__ = (
        UniqueConstraint("source_id", "version", name="uq_legal_source_versions_source_version"),
    )

    id = Column(Integer, primary_key=True, index=True)
    source_id = Column(Integer, ForeignKey("legal_sources.id", ondelete="CASCADE"), nullable=False, index=True)
    version = Column(String(32), nullable=False)
    change_note = Column(Text, nullable=True)
    created_by = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    source = relationship("LegalSource", back_populates="versions")

    def __repr__(self) -> str:
        return f"<LegalSourceVersion(id={self.id}, source_id={self.source_id}, version='{self.version}')>"
