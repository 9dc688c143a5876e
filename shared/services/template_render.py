"""
Рендер шаблонов документов с плейсхолдерами {{ key }}.

Неизвестные плейсхолдеры остаются в тексте без изменений.
Значения приводятся к строке.
"""

import re
from dataclasses import dataclass, field
from typing import List, Mapping, Any

PLACEHOLDER_RE = re.compile(r"\{\{\s*([a-zA-Z0-9_.-]+)\s*\}\}")


@dataclass
class RenderResult:
    """Результат рендера шаблона."""
    output: str
    missing_keys: List[str] = field(default_factory=list)


def extract_placeholders(template: str) -> List[str]:
    """Уникальные ключи плейсхолдеров в порядке первого появления."""
    keys: List[str] = []
    for match in PLACEHOLDER_RE.finditer(template):
        key = match.group(1)
        if key not in keys:
            keys.append(key)
    return keys


def render_template(template: str, data: Mapping[str, Any]) -> RenderResult:
    """Подставляет значения из data; пустые и отсутствующие ключи попадают в missing_keys."""
    missing: List[str] = []

    def replace(match: "re.Match[str]") -> str:
        key = match.group(1)
        value = data.get(key)
        if value is None or value == "":
            if key not in missing:
                missing.append(key)
            return match.group(0)
        return str(value)

    output = PLACEHOLDER_RE.sub(replace, template)
    return RenderResult(output=output, missing_keys=missing)
