"""Сервис раздела Toolkit: чек-листы и шаблоны документов."""

from typing import List, Optional, Dict, Any

from sqlalchemy import select, and_, or_
from sqlalchemy.ext.asyncio import AsyncSession

from core.logging.logger import logger
from domain.entities.checklist import Checklist
from domain.entities.content_status import ContentStatus
from domain.entities.toolkit_template import ToolkitTemplate
from shared.services.template_render import extract_placeholders, render_template


class ToolkitService:
    """Чтение и рендер материалов Toolkit."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_checklists(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        status: Optional[str] = ContentStatus.PUBLISHED.value,
        limit: int = 50,
    ) -> List[Checklist]:
        """Список чек-листов; status=None означает все статусы."""
        conditions = []
        if status:
            conditions.append(Checklist.status == status)
        if category:
            conditions.append(Checklist.category == category)
        if search:
            pattern = f"%{search.strip()}%"
            conditions.append(or_(Checklist.title.ilike(pattern), Checklist.description.ilike(pattern)))

        query = select(Checklist)
        if conditions:
            query = query.where(and_(*conditions))
        query = query.order_by(Checklist.updated_at.desc(), Checklist.id.desc()).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_checklist(self, checklist_id: int) -> Optional[Checklist]:
        """Чек-лист с пунктами."""
        result = await self.session.execute(select(Checklist).where(Checklist.id == checklist_id))
        return result.scalar_one_or_none()

    async def list_templates(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        status: Optional[str] = ContentStatus.PUBLISHED.value,
        limit: int = 50,
    ) -> List[ToolkitTemplate]:
        """Список шаблонов; поиск также по содержимому."""
        conditions = []
        if status:
            conditions.append(ToolkitTemplate.status == status)
        if category:
            conditions.append(ToolkitTemplate.category == category)
        if search:
            pattern = f"%{search.strip()}%"
            conditions.append(
                or_(
                    ToolkitTemplate.title.ilike(pattern),
                    ToolkitTemplate.description.ilike(pattern),
                    ToolkitTemplate.content.ilike(pattern),
                )
            )

        query = select(ToolkitTemplate)
        if conditions:
            query = query.where(and_(*conditions))
        query = query.order_by(ToolkitTemplate.updated_at.desc(), ToolkitTemplate.id.desc()).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_template(self, template_id: int) -> Optional[ToolkitTemplate]:
        """Шаблон с полями формы."""
        result = await self.session.execute(select(ToolkitTemplate).where(ToolkitTemplate.id == template_id))
        return result.scalar_one_or_none()

    @staticmethod
    def get_placeholders(template: ToolkitTemplate) -> List[str]:
        return extract_placeholders(template.content)

    @staticmethod
    def render(template: ToolkitTemplate, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Рендерит шаблон.

        Значения по умолчанию полей подставляются под данные пользователя.
        Обязательные поля, оставшиеся пустыми, возвращаются в missing_required.
        """
        merged: Dict[str, Any] = {
            field.name: field.default_value
            for field in template.fields
            if field.default_value not in (None, "")
        }
        for key, value in (data or {}).items():
            if value is not None and value != "":
                merged[key] = value

        rendered = render_template(template.content, merged)
        missing_required = [
            field.name
            for field in template.fields
            if field.required and merged.get(field.name) in (None, "")
        ]

        if missing_required:
            logger.debug(
                "Template rendered with missing required fields",
                template_id=template.id,
                missing_required=missing_required,
            )

        return {
            "output": rendered.output,
            "missing_keys": rendered.missing_keys,
            "missing_required": missing_required,
        }
