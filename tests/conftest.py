"""
Конфигурация pytest для тестов CCNL Compare
Моки сессии БД и образцы договоров для unit и интеграционных тестов
"""
import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.agreement import Agreement
from domain.entities.agreement_level import AgreementLevel
from domain.entities.agreement_additional_costs import AgreementAdditionalCosts
from domain.entities.contribution_rule import ContributionRule
from shared.models.agreement_data import (
    AgreementData, LevelData, AdditionalCostsData, ContributionRuleData,
)
from domain.entities.contribution_rule import ContributionMode, ContributionCategory


# =============================================================================
# Моки для unit тестов
# =============================================================================

@pytest.fixture
def mock_db_session():
    """Мок сессии базы данных для unit тестов"""
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


def _make_result(one=None, items=None, scalar=None, rows=None):
    """Результат session.execute с нужными методами чтения."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = one
    result.scalars.return_value.all.return_value = items or []
    result.scalar_one.return_value = scalar
    result.all.return_value = rows or []
    result.one.return_value = rows[0] if rows else None
    return result


# =============================================================================
# Образцы договоров
# =============================================================================

@pytest.fixture
def engeb_data():
    """ENGEB Multisettore в виде значений для калькулятора"""
    return AgreementData(
        external_id="engeb_multisettore",
        name="ENGEB Multisettore",
        levels=(
            LevelData("1", "Operaio generico", Decimal("1450")),
            LevelData("2", "Operaio specializzato", Decimal("1550")),
        ),
        contribution_rules=(
            ContributionRuleData(
                name="Ente Bilaterale ENGEB",
                mode=ContributionMode.FIXED_BY_EMPLOYMENT_TYPE,
                amount=Decimal("10"),
                part_time_amount=Decimal("5"),
                category=ContributionCategory.BILATERAL,
            ),
        ),
        additional_costs=AdditionalCostsData(Decimal("6.5"), Decimal("24.0"), Decimal("2.5")),
        sector_category="multiservizi",
    )


@pytest.fixture
def ebinter_data():
    """EBINTER Terziario с процентными взносами"""
    return AgreementData(
        external_id="ebinter_terziario",
        name="EBINTER Terziario, Distribuzione e Servizi",
        levels=(
            LevelData("1", "Addetto generico", Decimal("1500")),
            LevelData("2", "Addetto specializzato", Decimal("1620")),
        ),
        contribution_rules=(
            ContributionRuleData(
                name="Contributo EBINTER",
                mode=ContributionMode.PERCENTAGE,
                percentage=Decimal("0.45"),
                category=ContributionCategory.BILATERAL,
            ),
            ContributionRuleData(
                name="Fondo Previdenziale",
                mode=ContributionMode.PERCENTAGE,
                percentage=Decimal("1.4"),
                category=ContributionCategory.PENSION,
            ),
        ),
        additional_costs=AdditionalCostsData(Decimal("6.5"), Decimal("24.5"), Decimal("2.5")),
        sector_category="servizi",
    )


@pytest.fixture
def sample_agreement():
    """ORM-договор каталога с уровнями, затратами и взносом"""
    agreement = Agreement(
        id=1,
        external_id="engeb_multisettore",
        name="ENGEB Multisettore",
        sector="Multiservizi, Pulizie, Logistica",
        sector_category="multiservizi",
        issuer="CONFAEL-FAL / CONFIMITALIA / SNALP",
        is_house=True,
        is_custom=False,
        created_by=None,
    )
    agreement.levels = [
        AgreementLevel(id=11, code="1", description="Operaio generico",
                       base_salary_monthly=Decimal("1450.00"), position=0),
        AgreementLevel(id=12, code="2", description="Operaio specializzato",
                       base_salary_monthly=Decimal("1550.00"), position=1),
    ]
    agreement.additional_costs = AgreementAdditionalCosts(
        id=21, severance_rate=Decimal("6.5"), social_rate=Decimal("24.0"), other_rate=Decimal("2.5"),
    )
    agreement.contribution_rules = [
        ContributionRule(
            id=31, name="Ente Bilaterale ENGEB", description=None, category="bilateral",
            mode="fixed_by_employment_type", amount=Decimal("10"), part_time_amount=Decimal("5"),
            percentage=Decimal("0"),
        ),
    ]
    return agreement


@pytest.fixture
def custom_agreement():
    """Пользовательский договор пользователя 42"""
    agreement = Agreement(
        id=5,
        external_id="custom_42_abcdef123456",
        name="Il mio CCNL",
        sector="Personalizzato",
        sector_category="custom",
        is_house=False,
        is_custom=True,
        created_by=42,
    )
    agreement.levels = [
        AgreementLevel(id=51, code="A", description="Livello A",
                       base_salary_monthly=Decimal("1300.00"), position=0),
    ]
    agreement.contribution_rules = []
    return agreement


@pytest.fixture
def make_result():
    """Фабрика результатов session.execute"""
    return _make_result
