"""Статусы публикации контента (чек-листы, шаблоны, услуги)."""

import enum


class ContentStatus(str, enum.Enum):
    """Статус публикации."""
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"
