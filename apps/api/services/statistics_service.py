"""Сервис статистики каталога договоров."""

from typing import List, Dict, Any

from sqlalchemy import select, func, case, and_
from sqlalchemy.ext.asyncio import AsyncSession

from core.logging.logger import logger
from domain.entities.agreement import Agreement


class StatisticsService:
    """Агрегированная статистика по договорам каталога (пользовательские исключены)."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_aggregate_stats(self) -> Dict[str, int]:
        """
        Общие показатели каталога.

        Returns:
            dict: количество договоров, работников и компаний всего и по классу эмитента
        """
        query = (
            select(
                Agreement.is_house,
                func.count(Agreement.id),
                func.coalesce(func.sum(Agreement.workers_count), 0),
                func.coalesce(func.sum(Agreement.companies_count), 0),
            )
            .where(Agreement.is_custom == False)
            .group_by(Agreement.is_house)
        )
        result = await self.session.execute(query)

        stats = {
            "total_agreements": 0,
            "house_agreements": 0,
            "national_agreements": 0,
            "total_workers": 0,
            "total_companies": 0,
            "house_workers": 0,
            "house_companies": 0,
            "national_workers": 0,
            "national_companies": 0,
        }
        for is_house, count, workers, companies in result.all():
            prefix = "house" if is_house else "national"
            stats[f"{prefix}_agreements"] += int(count)
            stats[f"{prefix}_workers"] += int(workers)
            stats[f"{prefix}_companies"] += int(companies)

        stats["total_agreements"] = stats["house_agreements"] + stats["national_agreements"]
        stats["total_workers"] = stats["house_workers"] + stats["national_workers"]
        stats["total_companies"] = stats["house_companies"] + stats["national_companies"]

        logger.debug("Aggregate stats computed", total_agreements=stats["total_agreements"])
        return stats

    async def get_workers_by_sector(self) -> List[Dict[str, Any]]:
        """Распределение работников по секторам, по убыванию числа работников."""
        total_workers = func.coalesce(func.sum(Agreement.workers_count), 0)
        query = (
            select(
                Agreement.sector,
                total_workers.label("total_workers"),
                func.coalesce(func.sum(Agreement.companies_count), 0).label("total_companies"),
                func.count(Agreement.id).label("agreement_count"),
            )
            .where(and_(Agreement.is_custom == False, Agreement.workers_count.isnot(None)))
            .group_by(Agreement.sector)
            .order_by(total_workers.desc(), Agreement.sector)
        )
        result = await self.session.execute(query)

        return [
            {
                "sector": row.sector,
                "total_workers": int(row.total_workers),
                "total_companies": int(row.total_companies),
                "agreement_count": int(row.agreement_count),
            }
            for row in result.all()
        ]

    async def get_by_macro_sector(self) -> List[Dict[str, Any]]:
        """Распределение по макросекторам CNEL с числом собственных договоров."""
        total_workers = func.coalesce(func.sum(Agreement.workers_count), 0)
        query = (
            select(
                Agreement.cnel_macro_sector,
                total_workers.label("total_workers"),
                func.coalesce(func.sum(Agreement.companies_count), 0).label("total_companies"),
                func.count(Agreement.id).label("agreement_count"),
                func.sum(case((Agreement.is_house == True, 1), else_=0)).label("house_count"),
            )
            .where(and_(Agreement.is_custom == False, Agreement.cnel_macro_sector.isnot(None)))
            .group_by(Agreement.cnel_macro_sector)
            .order_by(total_workers.desc(), Agreement.cnel_macro_sector)
        )
        result = await self.session.execute(query)

        return [
            {
                "macro_sector": row.cnel_macro_sector or "N/D",
                "total_workers": int(row.total_workers),
                "total_companies": int(row.total_companies),
                "agreement_count": int(row.agreement_count),
                "house_count": int(row.house_count or 0),
            }
            for row in result.all()
        ]

    async def get_top_by_workers(self, limit: int = 10) -> List[Agreement]:
        """Договоры с наибольшим числом работников."""
        query = (
            select(Agreement)
            .where(and_(Agreement.is_custom == False, Agreement.workers_count.isnot(None)))
            .order_by(Agreement.workers_count.desc(), Agreement.id)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
