"""
Unit-тесты для StatisticsService.
"""
import pytest
from types import SimpleNamespace

from apps.api.services.statistics_service import StatisticsService


@pytest.mark.asyncio
async def test_aggregate_stats_sums_issuer_classes(mock_db_session, make_result):
    """Тест суммирования показателей по классу эмитента."""
    mock_db_session.execute.return_value = make_result(rows=[
        (True, 2, 1500, 120),
        (False, 5, 900000, 45000),
    ])

    stats = await StatisticsService(mock_db_session).get_aggregate_stats()

    assert stats["house_agreements"] == 2
    assert stats["national_agreements"] == 5
    assert stats["total_agreements"] == 7
    assert stats["total_workers"] == 901500
    assert stats["total_companies"] == 45120


@pytest.mark.asyncio
async def test_aggregate_stats_empty_catalog(mock_db_session, make_result):
    """Тест пустого каталога."""
    mock_db_session.execute.return_value = make_result(rows=[])

    stats = await StatisticsService(mock_db_session).get_aggregate_stats()

    assert all(value == 0 for value in stats.values())


@pytest.mark.asyncio
async def test_workers_by_sector(mock_db_session, make_result):
    """Тест распределения работников по секторам."""
    mock_db_session.execute.return_value = make_result(rows=[
        SimpleNamespace(sector="Commercio", total_workers=2000000, total_companies=300000, agreement_count=3),
    ])

    sectors = await StatisticsService(mock_db_session).get_workers_by_sector()

    assert sectors == [{
        "sector": "Commercio",
        "total_workers": 2000000,
        "total_companies": 300000,
        "agreement_count": 3,
    }]


@pytest.mark.asyncio
async def test_macro_sector_house_count(mock_db_session, make_result):
    """Тест макросекторов с числом собственных договоров."""
    mock_db_session.execute.return_value = make_result(rows=[
        SimpleNamespace(cnel_macro_sector="TERZIARIO", total_workers=10, total_companies=2,
                        agreement_count=4, house_count=None),
    ])

    macro = await StatisticsService(mock_db_session).get_by_macro_sector()

    assert macro[0]["macro_sector"] == "TERZIARIO"
    assert macro[0]["house_count"] == 0


@pytest.mark.asyncio
async def test_top_by_workers(mock_db_session, make_result, sample_agreement):
    """Тест топа договоров по числу работников."""
    mock_db_session.execute.return_value = make_result(items=[sample_agreement])

    top = await StatisticsService(mock_db_session).get_top_by_workers(5)

    assert top == [sample_agreement]
