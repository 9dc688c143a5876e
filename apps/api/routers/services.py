"""
API роутер услуг консультанта и заявок
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from core.database.session import get_db_session
from domain.entities.content_status import ContentStatus
from domain.entities.service_request import ServiceRequestStatus
from apps.api.dependencies import CurrentUser, get_current_user, require_user, require_staff
from apps.api.schemas import (
    ServiceResponse, ServiceRequestCreate, ServiceRequestResponse, ServiceRequestPage,
    StatusChangeRequest,
)
from apps.api.services.service_request_service import (
    ServiceRequestService, ServiceUnavailableError, RequestAccessError,
)
from shared.services.request_workflow import RequestTransitionError

router = APIRouter(tags=["services"])

REQUEST_NOT_FOUND = "Richiesta non trovata"
SERVICE_NOT_FOUND = "Servizio non trovato"


@router.get("/services", response_model=List[ServiceResponse])
async def list_services(
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    content_status: Optional[ContentStatus] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=100),
    user: Optional[CurrentUser] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Список услуг (неопубликованные только для администратора)."""
    if user is not None and user.is_admin:
        visible = content_status.value if content_status else None
    else:
        visible = ContentStatus.PUBLISHED.value
    return await ServiceRequestService(db).list_services(
        category=category, search=search, status=visible, limit=limit
    )


@router.get("/services/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: int,
    user: Optional[CurrentUser] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Карточка услуги."""
    service = await ServiceRequestService(db).get_service(service_id)
    if not service:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=SERVICE_NOT_FOUND)
    if not service.is_published and not (user and user.is_admin):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Contenuto non pubblicato")
    return service


@router.post("/service-requests", response_model=ServiceRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_request_draft(
    data: ServiceRequestCreate,
    user: CurrentUser = Depends(require_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Создание черновика заявки."""
    try:
        request = await ServiceRequestService(db).create_draft(
            data.service_id, user.id, data.subject, data.notes
        )
    except ServiceUnavailableError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Servizio non disponibile")

    if not request:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=SERVICE_NOT_FOUND)
    return request


@router.get("/service-requests/mine", response_model=List[ServiceRequestResponse])
async def list_my_requests(
    request_status: Optional[ServiceRequestStatus] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=100),
    user: CurrentUser = Depends(require_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Заявки текущего пользователя."""
    return await ServiceRequestService(db).list_for_user(
        user.id, request_status.value if request_status else None, limit
    )


@router.get("/service-requests", response_model=ServiceRequestPage)
async def list_all_requests(
    request_status: Optional[ServiceRequestStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=100),
    staff: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db_session)
):
    """Все заявки (консультант, администратор)."""
    return await ServiceRequestService(db).list_all(
        request_status.value if request_status else None, page, page_size
    )


@router.get("/service-requests/{request_id}", response_model=ServiceRequestResponse)
async def get_request(
    request_id: int,
    user: CurrentUser = Depends(require_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Заявка: доступна автору и консультантам."""
    request = await ServiceRequestService(db).get_request(request_id)
    if not request:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=REQUEST_NOT_FOUND)
    if request.requester_user_id != user.id and not user.is_staff:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Non autorizzato")
    return request


@router.post("/service-requests/{request_id}/submit", response_model=ServiceRequestResponse)
async def submit_request(
    request_id: int,
    user: CurrentUser = Depends(require_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Отправка заявки автором."""
    try:
        request = await ServiceRequestService(db).submit(request_id, user.id)
    except RequestAccessError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Non autorizzato")
    except RequestTransitionError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Stato non valido")

    if not request:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=REQUEST_NOT_FOUND)
    return request


@router.post("/service-requests/{request_id}/status", response_model=ServiceRequestResponse)
async def change_request_status(
    request_id: int,
    data: StatusChangeRequest,
    staff: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db_session)
):
    """Смена статуса заявки консультантом."""
    try:
        request = await ServiceRequestService(db).change_status(
            request_id, data.status.value, staff.id, data.note
        )
    except RequestTransitionError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Transizione non consentita: {e.from_status} -> {e.to_status}"
        )

    if not request:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=REQUEST_NOT_FOUND)
    return request
