"""Модель профессионального уровня договора."""

from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from .base import Base


class AgreementLevel(Base):
    """Профессиональный уровень (livello) с месячным окладом брутто."""

    __tablename__ = "agreement_levels"

    id = Column(Integer, primary_key=True, index=True)
    agreement_id = Column(Integer, ForeignKey("agreements.id", ondelete="CASCADE"), nullable=False, index=True)
    code = Column(String(64), nullable=False)  # "Livello 1"
    description = Column(String(255), nullable=False)
    base_salary_monthly = Column(Numeric(10, 2), nullable=False)
    # Порядок отображения; уровни не обязаны быть отсортированы по окладу
    position = Column(Integer, nullable=False, default=0, server_default='0')

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    agreement = relationship("Agreement", back_populates="levels")

    def __repr__(self) -> str:
        return f"<AgreementLevel(id={self.id}, code='{self.code}', base_salary_monthly={self.base_salary_monthly})>"
