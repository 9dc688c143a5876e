"""
Unit-тесты для LegalSourceService.
"""
import pytest

from apps.api.services.legal_source_service import LegalSourceService
from domain.entities.legal_source import LegalSource, LegalTag, LegalSourceVersion


def _executed_query(mock_db_session):
    query = mock_db_session.execute.call_args.args[0]
    compiled = query.compile()
    return str(compiled), compiled.params


@pytest.fixture
def jobs_act():
    """Опубликованный декрет с тегами и двумя версиями."""
    source = LegalSource(
        id=11,
        type="legislative_decree",
        title="D.Lgs. 81/2015 - Disciplina organica dei contratti di lavoro",
        issuing_body="Governo",
        published_at="2015-06-15",
        status="published",
    )
    source.tags = [LegalTag(id=1, name="contratti"), LegalTag(id=2, name="part-time")]
    source.versions = [
        LegalSourceVersion(id=2, version="2.0", change_note="Aggiornamento 2024"),
        LegalSourceVersion(id=1, version="1.0"),
    ]
    return source


@pytest.mark.asyncio
async def test_list_sources_published_by_default(mock_db_session, make_result, jobs_act):
    """Тест: по умолчанию возвращаются только опубликованные источники."""
    mock_db_session.execute.return_value = make_result(items=[jobs_act])

    sources = await LegalSourceService(mock_db_session).list_sources()

    assert sources == [jobs_act]
    sql, params = _executed_query(mock_db_session)
    assert "legal_sources.status = " in sql
    assert "published" in params.values()
    assert "ORDER BY legal_sources.updated_at DESC" in sql


@pytest.mark.asyncio
async def test_list_sources_all_statuses(mock_db_session, make_result):
    """Тест: status=None снимает фильтр по статусу."""
    mock_db_session.execute.return_value = make_result(items=[])

    await LegalSourceService(mock_db_session).list_sources(status=None)

    sql, _ = _executed_query(mock_db_session)
    assert "WHERE" not in sql


@pytest.mark.asyncio
async def test_list_sources_filters(mock_db_session, make_result):
    """Тест фильтров по типу, году, тегу, органу и поиску с пагинацией."""
    mock_db_session.execute.return_value = make_result(items=[])

    await LegalSourceService(mock_db_session).list_sources(
        search="part-time",
        source_type="legislative_decree",
        tag="contratti",
        year="2015",
        issuing_body="Governo",
        limit=10,
        offset=20,
    )

    sql, params = _executed_query(mock_db_session)
    values = list(params.values())
    assert "legislative_decree" in values
    assert "2015%" in values
    assert "contratti" in values
    assert "%Governo%" in values
    assert "%part-time%" in values
    assert "EXISTS" in sql
    assert 10 in values
    assert 20 in values


@pytest.mark.asyncio
async def test_get_source_with_tags_and_versions(mock_db_session, make_result, jobs_act):
    """Тест получения источника с тегами и версиями."""
    mock_db_session.execute.return_value = make_result(one=jobs_act)

    source = await LegalSourceService(mock_db_session).get_source(11)

    assert source.tag_names == ["contratti", "part-time"]
    assert [version.version for version in source.versions] == ["2.0", "1.0"]


@pytest.mark.asyncio
async def test_get_source_not_found(mock_db_session, make_result):
    """Тест: неизвестный источник возвращает None."""
    mock_db_session.execute.return_value = make_result(one=None)
    assert await LegalSourceService(mock_db_session).get_source(404) is None
