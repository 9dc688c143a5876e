"""
Unit-тесты для ToolkitService.
"""
import pytest

from apps.api.services.toolkit_service import ToolkitService
from domain.entities.checklist import Checklist, ChecklistItem
from domain.entities.toolkit_template import ToolkitTemplate, TemplateField


@pytest.fixture
def lettera_template():
    """Шаблон письма о приеме с обязательными полями."""
    template = ToolkitTemplate(
        id=3,
        title="Lettera di assunzione",
        category="assunzioni",
        format="plaintext",
        status="published",
        content="Gentile {{ nome }}, la assumiamo dal {{ data_inizio }} presso {{ azienda }}.",
    )
    template.fields = [
        TemplateField(id=1, name="nome", label="Nome", field_type="text", required=True, position=0),
        TemplateField(id=2, name="data_inizio", label="Data inizio", field_type="date", required=True, position=1),
        TemplateField(id=3, name="azienda", label="Azienda", field_type="text", required=False,
                      default_value="ENGEB Srl", position=2),
    ]
    return template


@pytest.mark.asyncio
async def test_list_checklists(mock_db_session, make_result):
    """Тест списка чек-листов."""
    checklist = Checklist(id=1, title="Assunzione dipendente", status="published")
    mock_db_session.execute.return_value = make_result(items=[checklist])

    checklists = await ToolkitService(mock_db_session).list_checklists(search="assunzione")

    assert checklists == [checklist]


@pytest.mark.asyncio
async def test_get_checklist_with_items(mock_db_session, make_result):
    """Тест получения чек-листа с пунктами."""
    checklist = Checklist(id=1, title="Assunzione dipendente", status="published")
    checklist.items = [ChecklistItem(id=1, position=0, text="Comunicazione UNILAV", is_required=True)]
    mock_db_session.execute.return_value = make_result(one=checklist)

    result = await ToolkitService(mock_db_session).get_checklist(1)

    assert result.items[0].text == "Comunicazione UNILAV"


@pytest.mark.asyncio
async def test_get_template_not_found(mock_db_session, make_result):
    """Тест: неизвестный шаблон возвращает None."""
    mock_db_session.execute.return_value = make_result(one=None)
    assert await ToolkitService(mock_db_session).get_template(404) is None


def test_placeholders(lettera_template):
    """Тест списка плейсхолдеров шаблона."""
    assert ToolkitService.get_placeholders(lettera_template) == ["nome", "data_inizio", "azienda"]


def test_render_uses_field_defaults(lettera_template):
    """Тест: значение по умолчанию подставляется, если пользователь его не передал."""
    result = ToolkitService.render(lettera_template, {"nome": "Mario Rossi", "data_inizio": "01/03/2026"})

    assert result["output"] == "Gentile Mario Rossi, la assumiamo dal 01/03/2026 presso ENGEB Srl."
    assert result["missing_keys"] == []
    assert result["missing_required"] == []


def test_render_user_value_overrides_default(lettera_template):
    """Тест: значение пользователя важнее значения по умолчанию."""
    result = ToolkitService.render(
        lettera_template, {"nome": "Anna", "data_inizio": "oggi", "azienda": "Altra Srl"}
    )
    assert result["output"].endswith("presso Altra Srl.")


def test_render_reports_missing_required(lettera_template):
    """Тест: пустые обязательные поля возвращаются в missing_required."""
    result = ToolkitService.render(lettera_template, {"nome": ""})

    assert "{{ nome }}" in result["output"]
    assert result["missing_keys"] == ["nome", "data_inizio"]
    assert result["missing_required"] == ["nome", "data_inizio"]
