"""
Unit-тесты для нормализации взносов договора.
"""
from decimal import Decimal

import pytest

from domain.entities.contribution_rule import ContributionMode
from shared.models.agreement_data import (
    AdditionalCostsData, ContributionRuleData, normalize_contribution_rule,
    resolve_contribution_mode, to_decimal,
)


def test_to_decimal_avoids_float_artifacts():
    """Тест: float приводится через строку."""
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(None) == Decimal("0")
    assert to_decimal(Decimal("2.5")) == Decimal("2.5")


def test_default_additional_costs():
    """Тест ставок по умолчанию."""
    costs = AdditionalCostsData.default()
    assert (costs.severance_rate, costs.social_rate, costs.other_rate) == (
        Decimal("8.33"), Decimal("30"), Decimal("2"),
    )


@pytest.mark.parametrize("name, is_percentage, mode, expected", [
    ("Ente Bilaterale ENGEB", False, None, ContributionMode.FIXED_BY_EMPLOYMENT_TYPE),
    (" Contributo ENGEB ", False, None, ContributionMode.FIXED_BY_EMPLOYMENT_TYPE),
    ("COASCO", False, None, ContributionMode.FIXED),
    ("COASCO", True, None, ContributionMode.PERCENTAGE),
    ("Ente Bilaterale ENGEB", False, "fixed", ContributionMode.FIXED),
])
def test_resolve_contribution_mode(name, is_percentage, mode, expected):
    """Тест определения режима взноса."""
    assert resolve_contribution_mode(name, is_percentage, mode) == expected


def test_legacy_bilateral_fee_always_ten_and_five():
    """Тест: историческая запись ENGEB получает 10/5 независимо от суммы."""
    fields = normalize_contribution_rule("Ente Bilaterale ENGEB", amount=25)

    assert fields["mode"] == "fixed_by_employment_type"
    assert fields["amount"] == Decimal("10")
    assert fields["part_time_amount"] == Decimal("5")
    assert fields["percentage"] == 0


def test_explicit_employment_type_mode_keeps_amounts():
    """Тест: явный режим fixed_by_employment_type использует переданные суммы."""
    fields = normalize_contribution_rule(
        "Fondo", amount=12, part_time_amount=6, mode="fixed_by_employment_type"
    )
    assert fields["amount"] == Decimal("12")
    assert fields["part_time_amount"] == Decimal("6")

    fields = normalize_contribution_rule("Fondo", amount=12, mode="fixed_by_employment_type")
    assert fields["part_time_amount"] == Decimal("12")


def test_percentage_rule_zeroes_amount():
    """Тест: у процентного взноса сумма обнуляется."""
    fields = normalize_contribution_rule("COASCO", is_percentage=True, amount=99, percentage=1.1)

    assert fields["mode"] == "percentage"
    assert fields["percentage"] == Decimal("1.1")
    assert fields["amount"] == 0


def test_monthly_amount_by_mode():
    """Тест фиксированной суммы взноса по режиму и типу занятости."""
    by_type = ContributionRuleData(
        name="Ente", mode=ContributionMode.FIXED_BY_EMPLOYMENT_TYPE,
        amount=Decimal("10"), part_time_amount=Decimal("5"),
    )
    fixed = ContributionRuleData(name="COASCO", amount=Decimal("10"))
    percentage = ContributionRuleData(name="Fondo", mode=ContributionMode.PERCENTAGE, percentage=Decimal("1"))

    assert by_type.monthly_amount(False) == Decimal("10")
    assert by_type.monthly_amount(True) == Decimal("5")
    assert fixed.monthly_amount(True) == Decimal("10")
    assert percentage.monthly_amount(False) == 0
    assert percentage.is_percentage
