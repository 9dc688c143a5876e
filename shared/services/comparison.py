"""Сравнение стоимости труда по двум договорам."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Any

from shared.models.agreement_data import AgreementData, LevelData
from shared.services.cost_calculator import CostCalculation, calculate_cost, MONTHS_IN_YEAR


MAX_MONTHS_PER_YEAR = 14


class ComparisonError(ValueError):
    """Некорректные параметры сравнения."""


@dataclass(frozen=True)
class ComparisonSide:
    """Выбор договора и уровня для одной стороны сравнения."""
    agreement: AgreementData
    level_index: int = 0
    is_part_time: bool = False


@dataclass(frozen=True)
class SideResult:
    """Результат расчета одной стороны."""
    agreement: AgreementData
    level_index: int
    level: LevelData
    is_part_time: bool
    calculation: CostCalculation
    total_annual_cost: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "agreement_id": self.agreement.external_id,
            "agreement_name": self.agreement.name,
            "level_index": self.level_index,
            "level_code": self.level.code,
            "level_description": self.level.description,
            "is_part_time": self.is_part_time,
            "calculation": self.calculation.breakdown(),
            "total_annual_cost": float(self.total_annual_cost.quantize(Decimal("0.01"))),
        }


@dataclass(frozen=True)
class ComparisonResult:
    """Результат сравнения двух договоров."""
    side1: SideResult
    side2: SideResult
    headcount: int
    months_per_year: int
    delta: Decimal
    delta_percentage: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "side1": self.side1.to_dict(),
            "side2": self.side2.to_dict(),
            "headcount": self.headcount,
            "months_per_year": self.months_per_year,
            "delta": float(self.delta.quantize(Decimal("0.01"))),
            "delta_percentage": float(self.delta_percentage.quantize(Decimal("0.01"))),
        }


def normalize_level_index(agreement: AgreementData, level_index: int) -> int:
    """
    Возвращает допустимый индекс уровня.

    Индекс за пределами списка уровней (например, после смены договора
    на договор с меньшим числом уровней) сбрасывается в 0.
    """
    if level_index < 0:
        raise ComparisonError(f"Level index must be non-negative, got {level_index}")
    if not agreement.levels:
        raise ComparisonError(f"Agreement '{agreement.external_id}' has no levels")
    if level_index >= len(agreement.levels):
        return 0
    return level_index


def _calculate_side(
    side: ComparisonSide,
    headcount: int,
    months_per_year: int,
    include_percentage_rules: bool,
) -> SideResult:
    index = normalize_level_index(side.agreement, side.level_index)
    level = side.agreement.levels[index]
    calculation = calculate_cost(
        level.base_salary_monthly,
        side.agreement.additional_costs,
        side.agreement,
        is_part_time=side.is_part_time,
        include_percentage_rules=include_percentage_rules,
    )
    total = calculation.total_annual_cost * headcount * Decimal(months_per_year) / MONTHS_IN_YEAR
    return SideResult(
        agreement=side.agreement,
        level_index=index,
        level=level,
        is_part_time=side.is_part_time,
        calculation=calculation,
        total_annual_cost=total,
    )


def compare(
    side1: ComparisonSide,
    side2: ComparisonSide,
    headcount: int = 1,
    months_per_year: int = MONTHS_IN_YEAR,
    include_percentage_rules: bool = False,
) -> ComparisonResult:
    """
    Сравнивает годовую стоимость персонала по двум договорам.

    delta = total1 - total2; delta_percentage считается от total1 (0, если total1 == 0).
    """
    if headcount < 1:
        raise ComparisonError(f"Headcount must be at least 1, got {headcount}")
    if months_per_year < 1 or months_per_year > MAX_MONTHS_PER_YEAR:
        raise ComparisonError(
            f"Months per year must be between 1 and {MAX_MONTHS_PER_YEAR}, got {months_per_year}"
        )

    result1 = _calculate_side(side1, headcount, months_per_year, include_percentage_rules)
    result2 = _calculate_side(side2, headcount, months_per_year, include_percentage_rules)

    delta = result1.total_annual_cost - result2.total_annual_cost
    if result1.total_annual_cost == 0:
        delta_percentage = Decimal("0")
    else:
        delta_percentage = delta / result1.total_annual_cost * 100

    return ComparisonResult(
        side1=result1,
        side2=result2,
        headcount=headcount,
        months_per_year=months_per_year,
        delta=delta,
        delta_percentage=delta_percentage,
    )
