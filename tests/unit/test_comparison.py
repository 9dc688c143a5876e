"""
Unit-тесты для сравнения договоров.
"""
import pytest
from decimal import Decimal

from shared.models.agreement_data import AgreementData
from shared.services.comparison import (
    ComparisonError, ComparisonSide, compare, normalize_level_index,
)


def test_compare_headcount_scales_annual_cost(engeb_data, ebinter_data):
    """Тест: годовая стоимость стороны = стоимость сотрудника * численность."""
    result = compare(ComparisonSide(engeb_data), ComparisonSide(ebinter_data), headcount=10)

    assert result.side1.total_annual_cost == result.side1.calculation.total_annual_cost * 10
    assert result.side1.total_annual_cost == Decimal("232620")
    assert result.side2.total_annual_cost == Decimal("240300")
    assert result.delta == Decimal("-7680")
    assert result.delta_percentage < 0


def test_delta_sign_matches_percentage(engeb_data, ebinter_data):
    """Тест: знак delta_percentage совпадает со знаком delta."""
    result = compare(ComparisonSide(ebinter_data), ComparisonSide(engeb_data), headcount=3)

    assert result.delta > 0
    assert result.delta_percentage > 0


def test_same_side_has_zero_delta(engeb_data):
    """Тест: сравнение договора с самим собой."""
    result = compare(ComparisonSide(engeb_data, 1), ComparisonSide(engeb_data, 1))

    assert result.delta == 0
    assert result.delta_percentage == 0


def test_months_per_year_prorates(engeb_data, ebinter_data):
    """Тест: 13 месяцев в году увеличивают годовую стоимость пропорционально."""
    result = compare(ComparisonSide(engeb_data), ComparisonSide(ebinter_data), months_per_year=13)
    assert result.side1.total_annual_cost == Decimal("25200.5")


def test_part_time_per_side(engeb_data):
    """Тест: part-time задается для каждой стороны отдельно."""
    result = compare(
        ComparisonSide(engeb_data, 0, is_part_time=False),
        ComparisonSide(engeb_data, 0, is_part_time=True),
    )
    assert result.side1.calculation.fixed_contributions == Decimal("10")
    assert result.side2.calculation.fixed_contributions == Decimal("5")
    assert result.delta == Decimal("60")


def test_out_of_range_level_falls_back_to_first(engeb_data, ebinter_data):
    """Тест: индекс уровня за пределами списка сбрасывается в 0."""
    result = compare(ComparisonSide(engeb_data, 7), ComparisonSide(ebinter_data, 1))

    assert result.side1.level_index == 0
    assert result.side1.level.code == "1"
    assert result.side2.level_index == 1


def test_normalize_level_index_rejects_negative(engeb_data):
    """Тест: отрицательный индекс уровня отклоняется."""
    with pytest.raises(ComparisonError):
        normalize_level_index(engeb_data, -1)


def test_agreement_without_levels_rejected(engeb_data):
    """Тест: договор без уровней нельзя сравнить."""
    empty = AgreementData(external_id="empty", name="Vuoto")
    with pytest.raises(ComparisonError):
        compare(ComparisonSide(empty), ComparisonSide(engeb_data))


@pytest.mark.parametrize("headcount, months", [(0, 12), (1, 0), (1, 15)])
def test_invalid_parameters_rejected(engeb_data, headcount, months):
    """Тест валидации численности и числа месяцев."""
    with pytest.raises(ComparisonError):
        compare(ComparisonSide(engeb_data), ComparisonSide(engeb_data), headcount, months)


def test_to_dict_shape(engeb_data, ebinter_data):
    """Тест формата результата для API."""
    data = compare(ComparisonSide(engeb_data), ComparisonSide(ebinter_data), headcount=10).to_dict()

    assert data["headcount"] == 10
    assert data["months_per_year"] == 12
    assert data["delta"] == -7680.0
    assert data["side1"]["agreement_id"] == "engeb_multisettore"
    assert data["side1"]["level_description"] == "Operaio generico"
    assert data["side1"]["calculation"]["total_monthly_cost"] == 1938.5
    assert data["side2"]["total_annual_cost"] == 240300.0
