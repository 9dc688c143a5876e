"""
Unit-тесты для AgreementService.

Тестируем:
- Чтение каталога и пагинацию
- Создание договора с уровнями и взносами
- Пользовательские договоры и проверку владельца
- Преобразование в значения для калькулятора
"""
import pytest
from decimal import Decimal

from apps.api.services.agreement_service import (
    AgreementAccessError, AgreementService, to_agreement_data,
)
from domain.entities.agreement import Agreement
from domain.entities.contribution_rule import ContributionMode, ContributionRule


@pytest.fixture
def agreement_service(mock_db_session):
    """Фикстура для AgreementService."""
    return AgreementService(mock_db_session)


@pytest.mark.asyncio
async def test_get_by_external_id(agreement_service, mock_db_session, make_result, sample_agreement):
    """Тест получения договора по внешнему ключу."""
    mock_db_session.execute.return_value = make_result(one=sample_agreement)

    agreement = await agreement_service.get_by_external_id("engeb_multisettore")

    assert agreement is sample_agreement
    mock_db_session.execute.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_by_external_id_not_found(agreement_service, mock_db_session, make_result):
    """Тест: неизвестный договор возвращает None."""
    mock_db_session.execute.return_value = make_result(one=None)
    assert await agreement_service.get_by_external_id("missing") is None
    assert await agreement_service.get_agreement_data("missing") is None


@pytest.mark.asyncio
async def test_search_empty_query_skips_db(agreement_service, mock_db_session):
    """Тест: пустой поиск не обращается к БД."""
    assert await agreement_service.search("   ") == []
    mock_db_session.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_sector_category_all_returns_catalog(agreement_service, mock_db_session, make_result, sample_agreement):
    """Тест: категория "all" означает весь каталог."""
    mock_db_session.execute.return_value = make_result(items=[sample_agreement])

    agreements = await agreement_service.get_by_sector_category("all")

    assert agreements == [sample_agreement]


@pytest.mark.asyncio
async def test_get_paginated_clamps_page_size(agreement_service, mock_db_session, make_result, sample_agreement):
    """Тест пагинации: размер страницы ограничен, страниц считается по total."""
    mock_db_session.execute.side_effect = [
        make_result(scalar=120),
        make_result(items=[sample_agreement]),
    ]

    page = await agreement_service.get_paginated(page=0, page_size=500, sort_by="unknown")

    assert page["page_size"] == 100
    assert page["current_page"] == 1
    assert page["total_count"] == 120
    assert page["total_pages"] == 2
    assert page["items"] == [sample_agreement]


@pytest.mark.asyncio
async def test_get_paginated_empty(agreement_service, mock_db_session, make_result):
    """Тест пустого каталога."""
    mock_db_session.execute.side_effect = [make_result(scalar=0), make_result(items=[])]

    page = await agreement_service.get_paginated()

    assert page["total_pages"] == 0
    assert page["page_size"] == 50


def test_sector_categories():
    """Тест списка категорий секторов."""
    categories = AgreementService.get_sector_categories()
    assert {"id": "turismo", "name": "Turismo e Ospitalità"} in categories


@pytest.mark.asyncio
async def test_create_agreement_builds_children(agreement_service, mock_db_session):
    """Тест создания договора с уровнями, затратами и взносами."""
    agreement = await agreement_service.create_agreement({
        "external_id": "engeb_turismo",
        "name": "ENGEB Turismo e Pubblici Esercizi",
        "sector": "Turismo",
        "sector_category": "turismo",
        "is_house": True,
        "levels": [
            {"code": "1", "description": "Cameriere", "base_salary_monthly": 1400},
            {"code": "2", "description": "Cuoco", "base_salary_monthly": 1750, "position": None},
        ],
        "additional_costs": {"severance_rate": 6.5, "social_rate": 23.0, "other_rate": 3.0},
        "contribution_rules": [
            {"name": "Ente Bilaterale ENGEB", "is_percentage": False, "amount": 10, "category": "bilateral"},
            {"name": "COASCO", "is_percentage": False, "amount": 10, "category": "bilateral"},
        ],
    })

    mock_db_session.add.assert_called_once_with(agreement)
    mock_db_session.commit.assert_awaited_once()
    assert agreement.is_custom is False
    assert [level.position for level in agreement.levels] == [0, 1]
    assert agreement.levels[1].base_salary_monthly == Decimal("1750")
    assert agreement.additional_costs.other_rate == Decimal("3.0")
    assert agreement.contribution_rules[0].mode == "fixed_by_employment_type"
    assert agreement.contribution_rules[0].part_time_amount == Decimal("5")
    assert agreement.contribution_rules[1].mode == "fixed"


@pytest.mark.asyncio
async def test_delete_agreement_not_found(agreement_service, mock_db_session, make_result):
    """Тест удаления несуществующего договора."""
    mock_db_session.execute.return_value = make_result(one=None)

    assert await agreement_service.delete_agreement(99) is False
    mock_db_session.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_contribution_rule_keeps_mode(agreement_service, mock_db_session, sample_agreement):
    """Тест: обновление суммы сохраняет режим взноса."""
    rule = sample_agreement.contribution_rules[0]
    mock_db_session.get.return_value = rule

    updated = await agreement_service.update_contribution_rule(31, {"amount": 12})

    assert updated is rule
    assert rule.mode == "fixed_by_employment_type"
    assert rule.amount == Decimal("12")
    assert rule.part_time_amount == Decimal("5")


@pytest.mark.asyncio
async def test_delete_level_not_found(agreement_service, mock_db_session):
    """Тест удаления несуществующего уровня."""
    mock_db_session.get.return_value = None
    assert await agreement_service.delete_level(1) is False


@pytest.mark.asyncio
async def test_create_custom_marks_owner(agreement_service, mock_db_session):
    """Тест создания пользовательского договора."""
    agreement = await agreement_service.create_custom(42, {
        "name": "Il mio CCNL",
        "sector": "Personalizzato",
        "levels": [{"code": "A", "description": "Livello A", "base_salary_monthly": 1300}],
    })

    assert agreement.external_id.startswith("custom_42_")
    assert agreement.is_custom is True
    assert agreement.created_by == 42
    assert agreement.sector_category == "custom"
    assert agreement.is_owned_by(42)


@pytest.mark.asyncio
async def test_create_custom_requires_levels(agreement_service):
    """Тест: пользовательский договор без уровней отклоняется."""
    with pytest.raises(ValueError):
        await agreement_service.create_custom(42, {"name": "Vuoto", "levels": []})


@pytest.mark.asyncio
async def test_update_custom_by_other_user_denied(agreement_service, mock_db_session, make_result, custom_agreement):
    """Тест: чужой пользовательский договор изменить нельзя."""
    mock_db_session.execute.return_value = make_result(one=custom_agreement)

    with pytest.raises(AgreementAccessError):
        await agreement_service.update_custom(5, 7, {"name": "Rubato"})
    mock_db_session.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_custom_replaces_levels(agreement_service, mock_db_session, make_result, custom_agreement):
    """Тест: уровни пользовательского договора заменяются целиком."""
    mock_db_session.execute.return_value = make_result(one=custom_agreement)

    agreement = await agreement_service.update_custom(5, 42, {
        "name": "Rinominato",
        "levels": [
            {"code": "B", "description": "Livello B", "base_salary_monthly": 1400},
            {"code": "C", "description": "Livello C", "base_salary_monthly": 1600},
        ],
    })

    assert agreement.name == "Rinominato"
    assert [level.code for level in agreement.levels] == ["B", "C"]
    mock_db_session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_catalog_agreement_is_not_custom_deletable(agreement_service, mock_db_session, make_result, sample_agreement):
    """Тест: договор каталога не удаляется как пользовательский."""
    mock_db_session.execute.return_value = make_result(one=sample_agreement)
    assert await agreement_service.delete_custom(1, 42) is False


def test_to_agreement_data(sample_agreement):
    """Тест преобразования ORM-договора в значения калькулятора."""
    data = to_agreement_data(sample_agreement)

    assert data.external_id == "engeb_multisettore"
    assert [level.base_salary_monthly for level in data.levels] == [Decimal("1450.00"), Decimal("1550.00")]
    assert data.additional_costs.social_rate == Decimal("24.0")
    assert data.contribution_rules[0].mode == ContributionMode.FIXED_BY_EMPLOYMENT_TYPE
    assert data.contribution_rules[0].monthly_amount(True) == Decimal("5")


def test_to_agreement_data_default_costs(custom_agreement):
    """Тест: без дополнительных затрат используются ставки по умолчанию."""
    data = to_agreement_data(custom_agreement)

    assert data.is_custom is True
    assert data.additional_costs.severance_rate == Decimal("8.33")
    assert data.contribution_rules == ()
