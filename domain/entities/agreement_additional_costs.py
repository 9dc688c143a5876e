"""Модель дополнительных затрат договора (TFR, взносы, прочие льготы)."""

from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from .base import Base


class AgreementAdditionalCosts(Base):
    """Ставки в процентах от оклада; 6.5 означает 6.5%."""

    __tablename__ = "agreement_additional_costs"

    id = Column(Integer, primary_key=True, index=True)
    agreement_id = Column(Integer, ForeignKey("agreements.id", ondelete="CASCADE"), nullable=False, unique=True)
    severance_rate = Column(Numeric(7, 3), nullable=False)  # TFR
    social_rate = Column(Numeric(7, 3), nullable=False)
    other_rate = Column(Numeric(7, 3), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    agreement = relationship("Agreement", back_populates="additional_costs")

    def __repr__(self) -> str:
        return (
            f"<AgreementAdditionalCosts(agreement_id={self.agreement_id}, tfr={self.severance_rate}, "
            f"social={self.social_rate}, other={self.other_rate})>"
        )
