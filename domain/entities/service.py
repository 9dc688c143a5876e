"""Модель услуги консультанта."""

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func

from .base import Base
from .content_status import ContentStatus


class Service(Base):
    """Услуга, которую пользователь может заказать у консультанта."""

    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    category = Column(String(64), nullable=True, index=True)
    description = Column(Text, nullable=True)
    eligibility = Column(Text, nullable=True)  # кто может запросить
    procedure = Column(Text, nullable=True)
    sla_days = Column(Integer, nullable=True)
    status = Column(String(20), nullable=False, default=ContentStatus.DRAFT.value, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def is_published(self) -> bool:
        return self.status == ContentStatus.PUBLISHED.value

    def __repr__(self) -> str:
        return f"<Service(id={self.id}, name='{self.name}', status='{self.status}')>"
