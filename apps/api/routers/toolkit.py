"""
API роутер раздела Toolkit (чек-листы и шаблоны документов)
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from core.database.session import get_db_session
from domain.entities.content_status import ContentStatus
from apps.api.dependencies import (
    CurrentUser, get_current_user, visible_content_status, ensure_content_visible,
)
from apps.api.schemas import (
    ChecklistSummary, ChecklistResponse, TemplateSummary, TemplateResponse,
    RenderRequest, RenderResponse,
)
from apps.api.services.toolkit_service import ToolkitService

router = APIRouter(prefix="/toolkit", tags=["toolkit"])


@router.get("/checklists", response_model=List[ChecklistSummary])
async def list_checklists(
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    content_status: Optional[ContentStatus] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=100),
    user: Optional[CurrentUser] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Список чек-листов."""
    requested = content_status.value if content_status else None
    return await ToolkitService(db).list_checklists(
        category=category,
        search=search,
        status=visible_content_status(user, requested),
        limit=limit,
    )


@router.get("/checklists/{checklist_id}", response_model=ChecklistResponse)
async def get_checklist(
    checklist_id: int,
    user: Optional[CurrentUser] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Чек-лист с пунктами."""
    checklist = await ToolkitService(db).get_checklist(checklist_id)
    if not checklist:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Checklist non trovata")
    ensure_content_visible(user, checklist.status)
    return checklist


@router.get("/templates", response_model=List[TemplateSummary])
async def list_templates(
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    content_status: Optional[ContentStatus] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=100),
    user: Optional[CurrentUser] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Список шаблонов документов."""
    requested = content_status.value if content_status else None
    return await ToolkitService(db).list_templates(
        category=category,
        search=search,
        status=visible_content_status(user, requested),
        limit=limit,
    )


@router.get("/templates/{template_id}", response_model=TemplateResponse)
async def get_template(
    template_id: int,
    user: Optional[CurrentUser] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Шаблон с полями и списком плейсхолдеров."""
    template = await ToolkitService(db).get_template(template_id)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template non trovato")
    ensure_content_visible(user, template.status)

    response = TemplateResponse.model_validate(template)
    response.placeholders = ToolkitService.get_placeholders(template)
    return response


@router.post("/templates/{template_id}/render", response_model=RenderResponse)
async def render_template(
    template_id: int,
    request: RenderRequest,
    user: Optional[CurrentUser] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Рендер шаблона с данными пользователя."""
    template = await ToolkitService(db).get_template(template_id)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template non trovato")
    ensure_content_visible(user, template.status)
    return ToolkitService.render(template, request.data)
