"""Сервис нормативных источников (чтение)."""

from typing import List, Optional

from sqlalchemy import select, and_, or_
from sqlalchemy.ext.asyncio import AsyncSession

from core.logging.logger import logger
from domain.entities.content_status import ContentStatus
from domain.entities.legal_source import LegalSource, LegalTag


class LegalSourceService:
    """Поиск и чтение нормативных источников."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_sources(
        self,
        search: Optional[str] = None,
        source_type: Optional[str] = None,
        status: Optional[str] = ContentStatus.PUBLISHED.value,
        tag: Optional[str] = None,
        year: Optional[str] = None,
        issuing_body: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[LegalSource]:
        """
        Список источников, последние измененные первыми.

        Args:
            search: Подстрока в заголовке, резюме, тексте или органе
            source_type: Тип источника (law, decree, ...)
            status: Статус публикации; None означает все статусы
            tag: Точное имя тега
            year: Год публикации (YYYY)
            issuing_body: Подстрока в названии органа
            limit: Размер страницы
            offset: Смещение
        """
        conditions = []
        if status:
            conditions.append(LegalSource.status == status)
        if source_type:
            conditions.append(LegalSource.type == source_type)
        if issuing_body:
            conditions.append(LegalSource.issuing_body.ilike(f"%{issuing_body.strip()}%"))
        if year:
            conditions.append(LegalSource.published_at.like(f"{year.strip()}%"))
        if search:
            pattern = f"%{search.strip()}%"
            conditions.append(
                or_(
                    LegalSource.title.ilike(pattern),
                    LegalSource.summary.ilike(pattern),
                    LegalSource.body.ilike(pattern),
                    LegalSource.issuing_body.ilike(pattern),
                )
            )
        if tag:
            conditions.append(LegalSource.tags.any(LegalTag.name == tag.strip()))

        query = select(LegalSource)
        if conditions:
            query = query.where(and_(*conditions))
        query = (
            query.order_by(LegalSource.updated_at.desc(), LegalSource.id.desc())
            .offset(offset)
            .limit(limit)
        )

        result = await self.session.execute(query)
        sources = list(result.scalars().all())
        logger.debug("Legal sources listed", count=len(sources), status=status, tag=tag, year=year)
        return sources

    async def get_source(self, source_id: int) -> Optional[LegalSource]:
        """Источник с тегами и версиями (версии от новых к старым)."""
        result = await self.session.execute(select(LegalSource).where(LegalSource.id == source_id))
        return result.scalar_one_or_none()
