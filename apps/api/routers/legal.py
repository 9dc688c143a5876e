"""
API роутер нормативных источников
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from core.database.session import get_db_session
from domain.entities.content_status import ContentStatus
from domain.entities.legal_source import LegalSourceType
from apps.api.dependencies import (
    CurrentUser, get_current_user, visible_content_status, ensure_content_visible,
)
from apps.api.schemas import LegalSourceSummary, LegalSourceResponse
from apps.api.services.legal_source_service import LegalSourceService

router = APIRouter(prefix="/legal", tags=["legal"])


@router.get("/", response_model=List[LegalSourceSummary])
async def list_legal_sources(
    search: Optional[str] = Query(None, min_length=1),
    source_type: Optional[LegalSourceType] = Query(None, alias="type"),
    content_status: Optional[ContentStatus] = Query(None, alias="status"),
    tag: Optional[str] = Query(None, min_length=1),
    year: Optional[str] = Query(None, pattern=r"^\d{4}$"),
    issuing_body: Optional[str] = Query(None, min_length=2),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0, le=10_000),
    user: Optional[CurrentUser] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Список нормативных источников, последние измененные первыми."""
    requested = content_status.value if content_status else None
    return await LegalSourceService(db).list_sources(
        search=search,
        source_type=source_type.value if source_type else None,
        status=visible_content_status(user, requested),
        tag=tag,
        year=year,
        issuing_body=issuing_body,
        limit=limit,
        offset=offset,
    )


@router.get("/{source_id}", response_model=LegalSourceResponse)
async def get_legal_source(
    source_id: int,
    user: Optional[CurrentUser] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Источник с тегами и историей версий."""
    source = await LegalSourceService(db).get_source(source_id)
    if not source:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fonte non trovata")
    ensure_content_visible(user, source.status)
    return LegalSourceResponse.model_validate(source)
