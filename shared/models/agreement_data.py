"""Модели данных договора для калькулятора стоимости.

Калькулятор и сравнение работают с неизменяемыми значениями, а не с ORM-объектами:
один и тот же тип описывает договоры каталога и пользовательские договоры.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple

from domain.entities.contribution_rule import ContributionMode, ContributionCategory


# Взнос в ente bilaterale: сумма зависит от типа занятости
BILATERAL_FEE_RULE_NAMES = frozenset({"Ente Bilaterale ENGEB", "Contributo ENGEB"})
BILATERAL_FEE_FULL_TIME = Decimal("10")
BILATERAL_FEE_PART_TIME = Decimal("5")


def to_decimal(value) -> Decimal:
    """Приводит число к Decimal без артефактов float."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class LevelData:
    """Профессиональный уровень."""
    code: str
    description: str
    base_salary_monthly: Decimal


@dataclass(frozen=True)
class AdditionalCostsData:
    """Ставки дополнительных затрат в процентах от оклада."""
    severance_rate: Decimal
    social_rate: Decimal
    other_rate: Decimal

    @classmethod
    def default(cls) -> "AdditionalCostsData":
        """Ставки по умолчанию, если у договора они не заданы."""
        return cls(
            severance_rate=Decimal("8.33"),
            social_rate=Decimal("30"),
            other_rate=Decimal("2"),
        )


@dataclass(frozen=True)
class ContributionRuleData:
    """Взнос работодателя.

    mode определяет, какие поля активны:
    - fixed: amount в месяц на сотрудника
    - percentage: percentage от оклада
    - fixed_by_employment_type: amount для full-time, part_time_amount для part-time
    """
    name: str
    mode: ContributionMode = ContributionMode.FIXED
    amount: Decimal = Decimal("0")
    part_time_amount: Optional[Decimal] = None
    percentage: Decimal = Decimal("0")
    category: ContributionCategory = ContributionCategory.OTHER
    description: Optional[str] = None

    @property
    def is_percentage(self) -> bool:
        return self.mode == ContributionMode.PERCENTAGE

    def monthly_amount(self, is_part_time: bool) -> Decimal:
        """Фиксированная сумма взноса в месяц (для процентных взносов 0)."""
        if self.mode == ContributionMode.FIXED_BY_EMPLOYMENT_TYPE:
            if is_part_time:
                return self.part_time_amount if self.part_time_amount is not None else self.amount
            return self.amount
        if self.mode == ContributionMode.FIXED:
            return self.amount
        return Decimal("0")


@dataclass(frozen=True)
class AgreementData:
    """Договор в виде, пригодном для расчета."""
    external_id: str
    name: str
    levels: Tuple[LevelData, ...] = ()
    contribution_rules: Tuple[ContributionRuleData, ...] = ()
    additional_costs: AdditionalCostsData = field(default_factory=AdditionalCostsData.default)
    sector: Optional[str] = None
    sector_category: Optional[str] = None
    issuer: Optional[str] = None
    is_custom: bool = False


def resolve_contribution_mode(
    name: str,
    is_percentage: bool = False,
    mode: Optional[str] = None,
) -> ContributionMode:
    """
    Определяет режим взноса.

    Явный mode имеет приоритет. Без него процентные взносы получают percentage,
    а фиксированные взносы с историческими названиями ente bilaterale ENGEB
    получают fixed_by_employment_type.
    """
    if mode:
        return ContributionMode(mode)
    if is_percentage:
        return ContributionMode.PERCENTAGE
    if name.strip() in BILATERAL_FEE_RULE_NAMES:
        return ContributionMode.FIXED_BY_EMPLOYMENT_TYPE
    return ContributionMode.FIXED


def normalize_contribution_rule(
    name: str,
    is_percentage: bool = False,
    amount=None,
    percentage=None,
    part_time_amount=None,
    mode: Optional[str] = None,
) -> dict:
    """
    Приводит входные данные взноса к полям модели.

    Для fixed_by_employment_type без явных сумм подставляются 10/5.
    Неактивное поле режима обнуляется.
    """
    resolved = resolve_contribution_mode(name, is_percentage, mode)
    result = {
        "mode": resolved.value,
        "amount": Decimal("0"),
        "part_time_amount": None,
        "percentage": Decimal("0"),
    }

    if resolved == ContributionMode.PERCENTAGE:
        result["percentage"] = to_decimal(percentage)
    elif resolved == ContributionMode.FIXED_BY_EMPLOYMENT_TYPE:
        if mode is None:
            # Историческая запись по названию: сумма не хранится, всегда 10/5
            result["amount"] = BILATERAL_FEE_FULL_TIME
            result["part_time_amount"] = BILATERAL_FEE_PART_TIME
        else:
            result["amount"] = to_decimal(amount)
            result["part_time_amount"] = (
                to_decimal(part_time_amount) if part_time_amount is not None else result["amount"]
            )
    else:
        result["amount"] = to_decimal(amount)

    return result
