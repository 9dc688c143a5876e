"""Модель коллективного договора (CCNL)."""

from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from .base import Base


class Agreement(Base):
    """
    Коллективный договор (CCNL).

    Один и тот же тип описывает договоры каталога и пользовательские договоры:
    пользовательский договор отличается флагом is_custom и владельцем created_by.
    """

    __tablename__ = "agreements"

    id = Column(Integer, primary_key=True, index=True)
    external_id = Column(String(128), nullable=False, unique=True, index=True)  # engeb_multisettore
    name = Column(String(500), nullable=False, index=True)
    sector = Column(String(255), nullable=False)
    sector_category = Column(String(64), nullable=False, index=True)
    issuer = Column(String(255), nullable=True)
    valid_from = Column(Date, nullable=True)
    valid_to = Column(Date, nullable=True)
    description = Column(Text, nullable=True)

    # Класс эмитента: собственные договоры (ENGEB) или национальные/конкурентные
    is_house = Column(Boolean, nullable=False, default=False, index=True)

    # Пользовательский договор
    is_custom = Column(Boolean, nullable=False, default=False)
    created_by = Column(Integer, nullable=True, index=True)

    # Данные CNEL
    cnel_code = Column(String(10), nullable=True, index=True)
    cnel_macro_sector = Column(String(100), nullable=True, index=True)
    employer_parties = Column(Text, nullable=True)
    union_parties = Column(Text, nullable=True)

    # Статистика INPS-UNIEMENS
    workers_count = Column(Integer, nullable=True)
    companies_count = Column(Integer, nullable=True)
    data_source = Column(String(128), nullable=True, default="simulato")  # simulato, inps, istat
    data_updated_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Связи
    levels = relationship(
        "AgreementLevel",
        back_populates="agreement",
        order_by="AgreementLevel.position, AgreementLevel.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    additional_costs = relationship(
        "AgreementAdditionalCosts",
        back_populates="agreement",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    contribution_rules = relationship(
        "ContributionRule",
        back_populates="agreement",
        order_by="ContributionRule.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def issuer_class(self) -> str:
        """Класс эмитента: house | national."""
        return "house" if self.is_house else "national"

    def is_owned_by(self, user_id: int) -> bool:
        """Принадлежит ли пользовательский договор пользователю."""
        return bool(self.is_custom) and self.created_by == user_id

    def __repr__(self) -> str:
        return f"<Agreement(id={self.id}, external_id='{self.external_id}', name='{self.name}')>"
