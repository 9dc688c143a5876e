"""Калькулятор стоимости труда по договору (CCNL)."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional, Dict, Any

from shared.models.agreement_data import AdditionalCostsData, AgreementData, to_decimal


MAX_RATE = Decimal("1000")
MONTHS_IN_YEAR = 12
_HUNDRED = Decimal("100")


class CostCalculationError(ValueError):
    """Некорректные входные данные расчета (отрицательный оклад, ставка вне диапазона)."""


@dataclass(frozen=True)
class CostCalculation:
    """Результат расчета стоимости одного сотрудника в месяц."""
    base_salary: Decimal
    severance_accrual: Decimal
    social_contribution: Decimal
    other_benefits: Decimal
    fixed_contributions: Decimal
    percentage_contributions: Decimal
    total_monthly_cost: Decimal
    total_annual_cost: Decimal
    # None, если оклад равен 0
    total_cost_percentage: Optional[Decimal]

    @property
    def additional_cost(self) -> Decimal:
        """Затраты сверх оклада в месяц."""
        return self.total_monthly_cost - self.base_salary

    def breakdown(self) -> Dict[str, Any]:
        """Разбивка затрат для отображения (округление до центов)."""
        def money(value: Decimal) -> float:
            return float(value.quantize(Decimal("0.01")))

        return {
            "base_salary": money(self.base_salary),
            "severance_accrual": money(self.severance_accrual),
            "social_contribution": money(self.social_contribution),
            "other_benefits": money(self.other_benefits),
            "fixed_contributions": money(self.fixed_contributions),
            "percentage_contributions": money(self.percentage_contributions),
            "additional_cost": money(self.additional_cost),
            "total_monthly_cost": money(self.total_monthly_cost),
            "total_annual_cost": money(self.total_annual_cost),
            "total_cost_percentage": (
                money(self.total_cost_percentage) if self.total_cost_percentage is not None else None
            ),
        }


def _finite(label: str, value) -> Decimal:
    """Приводит значение к Decimal; NaN, бесконечность и нечисла отклоняются."""
    try:
        number = to_decimal(value)
    except (InvalidOperation, ValueError) as e:
        raise CostCalculationError(f"{label} must be a number, got {value!r}") from e
    if not number.is_finite():
        raise CostCalculationError(f"{label} must be a finite number, got {number}")
    return number


def _check_rate(label: str, rate) -> Decimal:
    rate = _finite(label, rate)
    if rate < 0 or rate > MAX_RATE:
        raise CostCalculationError(f"{label} must be between 0 and {MAX_RATE}%, got {rate}")
    return rate


def calculate_cost(
    base_salary,
    additional_costs: AdditionalCostsData,
    agreement: Optional[AgreementData] = None,
    is_part_time: bool = False,
    include_percentage_rules: bool = False,
) -> CostCalculation:
    """
    Рассчитывает стоимость сотрудника для работодателя.

    Args:
        base_salary: Месячный оклад брутто (>= 0)
        additional_costs: Ставки TFR, взносов и прочих льгот в процентах
        agreement: Договор, чьи взносы учитываются (опционально)
        is_part_time: Part-time для взносов fixed_by_employment_type
        include_percentage_rules: Учитывать процентные взносы в итоге

    Returns:
        CostCalculation

    Raises:
        CostCalculationError: Отрицательный оклад, ставка вне [0, 1000], отрицательная сумма взноса,
            NaN или бесконечность
    """
    salary = _finite("Base salary", base_salary)
    if salary < 0:
        raise CostCalculationError(f"Base salary must be non-negative, got {salary}")

    severance_rate = _check_rate("Severance rate", additional_costs.severance_rate)
    social_rate = _check_rate("Social rate", additional_costs.social_rate)
    other_rate = _check_rate("Other rate", additional_costs.other_rate)

    severance_accrual = salary * severance_rate / _HUNDRED
    social_contribution = salary * social_rate / _HUNDRED
    other_benefits = salary * other_rate / _HUNDRED

    fixed_contributions = Decimal("0")
    percentage_contributions = Decimal("0")
    rules = agreement.contribution_rules if agreement is not None else ()
    for rule in rules:
        if rule.is_percentage:
            percentage = _check_rate(f"Contribution '{rule.name}'", rule.percentage)
            if include_percentage_rules:
                percentage_contributions += salary * percentage / _HUNDRED
            continue

        amount = _finite(f"Contribution '{rule.name}' amount", rule.monthly_amount(is_part_time))
        if amount < 0:
            raise CostCalculationError(f"Contribution '{rule.name}' amount must be non-negative, got {amount}")
        fixed_contributions += amount

    total_monthly_cost = (
        salary
        + severance_accrual
        + social_contribution
        + other_benefits
        + fixed_contributions
        + percentage_contributions
    )
    total_annual_cost = total_monthly_cost * MONTHS_IN_YEAR

    total_cost_percentage = None
    if salary > 0:
        total_cost_percentage = (total_monthly_cost - salary) / salary * _HUNDRED

    return CostCalculation(
        base_salary=salary,
        severance_accrual=severance_accrual,
        social_contribution=social_contribution,
        other_benefits=other_benefits,
        fixed_contributions=fixed_contributions,
        percentage_contributions=percentage_contributions,
        total_monthly_cost=total_monthly_cost,
        total_annual_cost=total_annual_cost,
        total_cost_percentage=total_cost_percentage,
    )
