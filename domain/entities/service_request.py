"""Модель заявки на услугу."""

import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from .base import Base


class ServiceRequestStatus(str, enum.Enum):
    """Статусы заявки."""
    DRAFT = "draft"
    SUBMITTED = "submitted"
    IN_REVIEW = "in_review"
    NEEDS_INFO = "needs_info"
    APPROVED = "approved"
    REJECTED = "rejected"
    CLOSED = "closed"


class ServiceRequest(Base):
    """Заявка пользователя на услугу консультанта."""

    __tablename__ = "service_requests"

    id = Column(Integer, primary_key=True, index=True)
    service_id = Column(Integer, ForeignKey("services.id", ondelete="CASCADE"), nullable=False, index=True)
    requester_user_id = Column(Integer, nullable=False, index=True)
    subject = Column(String(255), nullable=False)
    notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=ServiceRequestStatus.DRAFT.value, index=True)

    submitted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    service = relationship("Service", lazy="selectin")

    def __repr__(self) -> str:
        return f"<ServiceRequest(id={self.id}, service_id={self.service_id}, status='{self.status}')>"
