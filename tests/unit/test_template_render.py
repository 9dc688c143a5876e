"""
Unit-тесты для рендера шаблонов документов.
"""
from shared.services.template_render import extract_placeholders, render_template


def test_extract_placeholders_in_order():
    """Тест: ключи уникальны и в порядке первого появления."""
    text = "Gentile {{ nome }}, {{cognome}}. Firma: {{ nome }} {{ data.assunzione }}"
    assert extract_placeholders(text) == ["nome", "cognome", "data.assunzione"]


def test_render_replaces_known_keys():
    """Тест подстановки значений с приведением к строке."""
    result = render_template("Ore: {{ ore }}, dipendente {{nome}}", {"ore": 40, "nome": "Mario"})

    assert result.output == "Ore: 40, dipendente Mario"
    assert result.missing_keys == []


def test_missing_and_empty_keys_stay_in_text():
    """Тест: отсутствующие и пустые ключи остаются плейсхолдерами."""
    result = render_template("{{ a }}-{{ b }}-{{ c }}-{{ a }}", {"b": "", "c": None})

    assert result.output == "{{ a }}-{{ b }}-{{ c }}-{{ a }}"
    assert result.missing_keys == ["a", "b", "c"]


def test_text_without_placeholders_unchanged():
    """Тест: текст без плейсхолдеров не меняется."""
    result = render_template("Testo { singolo } e {{ }}", {"x": 1})
    assert result.output == "Testo { singolo } e {{ }}"
    assert result.missing_keys == []


def test_zero_is_a_value():
    """Тест: 0 считается заполненным значением."""
    result = render_template("Totale: {{ totale }}", {"totale": 0})
    assert result.output == "Totale: 0"
