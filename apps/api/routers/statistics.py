"""
API роутер статистики каталога
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from core.database.session import get_db_session
from apps.api.schemas import (
    AggregateStatsResponse, SectorStatsResponse, MacroSectorStatsResponse, AgreementSummary,
)
from apps.api.services.statistics_service import StatisticsService

router = APIRouter(prefix="/statistics", tags=["statistics"])


@router.get("/aggregate", response_model=AggregateStatsResponse)
async def get_aggregate_stats(db: AsyncSession = Depends(get_db_session)):
    """Общие показатели каталога."""
    return await StatisticsService(db).get_aggregate_stats()


@router.get("/workers-by-sector", response_model=List[SectorStatsResponse])
async def get_workers_by_sector(db: AsyncSession = Depends(get_db_session)):
    """Работники по секторам."""
    return await StatisticsService(db).get_workers_by_sector()


@router.get("/macro-sectors", response_model=List[MacroSectorStatsResponse])
async def get_by_macro_sector(db: AsyncSession = Depends(get_db_session)):
    """Распределение по макросекторам CNEL."""
    return await StatisticsService(db).get_by_macro_sector()


@router.get("/top", response_model=List[AgreementSummary])
async def get_top_by_workers(
    limit: int = Query(10, ge=1, le=50),
    db: AsyncSession = Depends(get_db_session)
):
    """Договоры с наибольшим числом работников."""
    return await StatisticsService(db).get_top_by_workers(limit)
