"""Модель взноса по договору (ente bilaterale, welfare, sanità, previdenza)."""

import enum

from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from .base import Base


class ContributionCategory(str, enum.Enum):
    """Категории взносов."""
    BILATERAL = "bilateral"
    WELFARE = "welfare"
    HEALTH = "health"
    PENSION = "pension"
    OTHER = "other"


class ContributionMode(str, enum.Enum):
    """Способ расчета взноса."""
    FIXED = "fixed"  # фиксированная сумма в месяц
    PERCENTAGE = "percentage"  # процент от оклада
    FIXED_BY_EMPLOYMENT_TYPE = "fixed_by_employment_type"  # сумма зависит от full-time/part-time


class ContributionRule(Base):
    """Взнос работодателя по договору."""

    __tablename__ = "agreement_contribution_rules"

    id = Column(Integer, primary_key=True, index=True)
    agreement_id = Column(Integer, ForeignKey("agreements.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(20), nullable=False, default=ContributionCategory.OTHER.value)
    mode = Column(String(32), nullable=False, default=ContributionMode.FIXED.value)

    amount = Column(Numeric(10, 2), nullable=False, default=0, server_default='0')  # full-time для fixed_by_employment_type
    part_time_amount = Column(Numeric(10, 2), nullable=True)
    percentage = Column(Numeric(7, 3), nullable=False, default=0, server_default='0')

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    agreement = relationship("Agreement", back_populates="contribution_rules")

    @property
    def is_percentage(self) -> bool:
        return self.mode == ContributionMode.PERCENTAGE.value

    def __repr__(self) -> str:
        return f"<ContributionRule(id={self.id}, name='{self.name}', mode='{self.mode}')>"
