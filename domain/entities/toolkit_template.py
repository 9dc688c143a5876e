"""Модели шаблонов документов раздела Toolkit."""

import enum

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from .base import Base
from .content_status import ContentStatus


class TemplateFormat(str, enum.Enum):
    """Формат содержимого шаблона."""
    PLAINTEXT = "plaintext"
    MARKDOWN = "markdown"


class FieldType(str, enum.Enum):
    """Тип поля формы шаблона."""
    TEXT = "text"
    DATE = "date"
    NUMBER = "number"
    EMAIL = "email"


class ToolkitTemplate(Base):
    """Шаблон документа с плейсхолдерами {{ key }}."""

    __tablename__ = "toolkit_templates"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    category = Column(String(64), nullable=True, index=True)
    description = Column(Text, nullable=True)
    format = Column(String(20), nullable=False, default=TemplateFormat.PLAINTEXT.value)
    content = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default=ContentStatus.DRAFT.value, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    fields = relationship(
        "TemplateField",
        back_populates="template",
        order_by="TemplateField.position, TemplateField.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<ToolkitTemplate(id={self.id}, title='{self.title}', status='{self.status}')>"


class TemplateField(Base):
    """Поле формы для заполнения шаблона."""

    __tablename__ = "template_fields"

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(Integer, ForeignKey("toolkit_templates.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(128), nullable=False)  # ключ плейсхолдера
    label = Column(String(255), nullable=False)
    field_type = Column(String(20), nullable=False, default=FieldType.TEXT.value)
    required = Column(Boolean, nullable=False, default=False)
    default_value = Column(Text, nullable=True)
    help_text = Column(Text, nullable=True)
    position = Column(Integer, nullable=False, default=0, server_default='0')

    template = relationship("ToolkitTemplate", back_populates="fields")

    def __repr__(self) -> str:
        return f"<TemplateField(id={self.id}, name='{self.name}', required={self.required})>"
