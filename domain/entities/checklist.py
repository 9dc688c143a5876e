"""Модели чек-листов раздела Toolkit."""

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from .base import Base
from .content_status import ContentStatus


class Checklist(Base):
    """Операционный чек-лист консультанта (например, прием сотрудника)."""

    __tablename__ = "checklists"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    category = Column(String(64), nullable=True, index=True)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=ContentStatus.DRAFT.value, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    items = relationship(
        "ChecklistItem",
        back_populates="checklist",
        order_by="ChecklistItem.position, ChecklistItem.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Checklist(id={self.id}, title='{self.title}', status='{self.status}')>"


class ChecklistItem(Base):
    """Пункт чек-листа."""

    __tablename__ = "checklist_items"

    id = Column(Integer, primary_key=True, index=True)
    checklist_id = Column(Integer, ForeignKey("checklists.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0, server_default='0')
    text = Column(Text, nullable=False)
    notes = Column(Text, nullable=True)
    is_required = Column(Boolean, nullable=False, default=True)

    checklist = relationship("Checklist", back_populates="items")

    def __repr__(self) -> str:
        return f"<ChecklistItem(id={self.id}, checklist_id={self.checklist_id}, position={self.position})>"
