"""Сервис услуг консультанта и заявок на них."""

from datetime import datetime, timezone
from typing import List, Optional, Dict, Any

from sqlalchemy import select, func, and_, or_
from sqlalchemy.ext.asyncio import AsyncSession

from core.logging.logger import logger
from domain.entities.content_status import ContentStatus
from domain.entities.service import Service
from domain.entities.service_request import ServiceRequest, ServiceRequestStatus
from shared.services.request_workflow import (
    RequestTransitionError,
    SUBMITTABLE_STATUSES,
    ensure_transition,
)


class ServiceUnavailableError(ValueError):
    """Услуга не опубликована."""


class RequestAccessError(PermissionError):
    """Пользователь не является автором заявки."""


class ServiceRequestService:
    """Каталог услуг и жизненный цикл заявок."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # ------------------------------------------------------------------
    # Услуги
    # ------------------------------------------------------------------

    async def list_services(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        status: Optional[str] = ContentStatus.PUBLISHED.value,
        limit: int = 50,
    ) -> List[Service]:
        """Список услуг; status=None означает все статусы."""
        conditions = []
        if status:
            conditions.append(Service.status == status)
        if category:
            conditions.append(Service.category == category)
        if search:
            pattern = f"%{search.strip()}%"
            conditions.append(
                or_(
                    Service.name.ilike(pattern),
                    Service.description.ilike(pattern),
                    Service.procedure.ilike(pattern),
                )
            )

        query = select(Service)
        if conditions:
            query = query.where(and_(*conditions))
        query = query.order_by(Service.updated_at.desc(), Service.id.desc()).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_service(self, service_id: int) -> Optional[Service]:
        """Услуга по ID."""
        result = await self.session.execute(select(Service).where(Service.id == service_id))
        return result.scalar_one_or_none()

    # ------------------------------------------------------------------
    # Заявки
    # ------------------------------------------------------------------

    async def get_request(self, request_id: int) -> Optional[ServiceRequest]:
        """Заявка по ID."""
        result = await self.session.execute(select(ServiceRequest).where(ServiceRequest.id == request_id))
        return result.scalar_one_or_none()

    async def create_draft(
        self,
        service_id: int,
        user_id: int,
        subject: str,
        notes: Optional[str] = None,
    ) -> Optional[ServiceRequest]:
        """
        Создает черновик заявки.

        Returns:
            ServiceRequest или None, если услуга не найдена

        Raises:
            ServiceUnavailableError: Услуга не опубликована
        """
        service = await self.get_service(service_id)
        if not service:
            return None
        if not service.is_published:
            logger.warning("Draft rejected: service not published", service_id=service_id, user_id=user_id)
            raise ServiceUnavailableError(f"Service {service_id} is not published")

        request = ServiceRequest(
            service_id=service_id,
            requester_user_id=user_id,
            subject=subject,
            notes=notes,
            status=ServiceRequestStatus.DRAFT.value,
        )
        self.session.add(request)
        await self.session.commit()
        await self.session.refresh(request)

        logger.info(
            "Service request transition",
            request_id=request.id,
            from_status=None,
            to_status=ServiceRequestStatus.DRAFT.value,
            actor_id=user_id,
        )
        return request

    async def submit(self, request_id: int, user_id: int) -> Optional[ServiceRequest]:
        """
        Отправляет заявку (из draft или needs_info).

        Raises:
            RequestAccessError: Пользователь не автор заявки
            RequestTransitionError: Заявка не в отправляемом статусе
        """
        request = await self.get_request(request_id)
        if not request:
            return None
        if request.requester_user_id != user_id:
            logger.warning("Submit rejected: not the requester", request_id=request_id, user_id=user_id)
            raise RequestAccessError(f"User {user_id} is not the requester of request {request_id}")

        from_status = ServiceRequestStatus(request.status)
        if from_status not in SUBMITTABLE_STATUSES:
            logger.warning("Submit rejected: invalid status", request_id=request_id, status=request.status)
            raise RequestTransitionError(from_status.value, ServiceRequestStatus.SUBMITTED.value)

        return await self._apply_transition(request, ServiceRequestStatus.SUBMITTED, user_id, "Richiesta inviata")

    async def change_status(
        self,
        request_id: int,
        to_status: str,
        actor_id: int,
        note: Optional[str] = None,
    ) -> Optional[ServiceRequest]:
        """
        Меняет статус заявки (консультант или администратор).

        Raises:
            RequestTransitionError: Переход не разрешен таблицей переходов
        """
        request = await self.get_request(request_id)
        if not request:
            return None

        try:
            target = ensure_transition(request.status, to_status)
        except RequestTransitionError:
            logger.warning(
                "Status change rejected",
                request_id=request_id,
                from_status=request.status,
                to_status=to_status,
                actor_id=actor_id,
            )
            raise

        return await self._apply_transition(request, target, actor_id, note)

    async def _apply_transition(
        self,
        request: ServiceRequest,
        to_status: ServiceRequestStatus,
        actor_id: int,
        note: Optional[str],
    ) -> ServiceRequest:
        from_status = request.status
        request.status = to_status.value
        if to_status == ServiceRequestStatus.SUBMITTED:
            request.submitted_at = datetime.now(timezone.utc)

        await self.session.commit()
        await self.session.refresh(request)

        logger.info(
            "Service request transition",
            request_id=request.id,
            from_status=from_status,
            to_status=to_status.value,
            actor_id=actor_id,
            note=note,
        )
        return request

    async def list_for_user(
        self,
        user_id: int,
        status: Optional[str] = None,
        limit: int = 50,
    ) -> List[ServiceRequest]:
        """Заявки пользователя, последние обновленные первыми."""
        conditions = [ServiceRequest.requester_user_id == user_id]
        if status:
            conditions.append(ServiceRequest.status == status)

        query = (
            select(ServiceRequest)
            .where(and_(*conditions))
            .order_by(ServiceRequest.updated_at.desc(), ServiceRequest.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_all(
        self,
        status: Optional[str] = None,
        page: int = 1,
        page_size: int = 50,
    ) -> Dict[str, Any]:
        """Все заявки для консультанта с пагинацией."""
        page = max(1, page)
        page_size = max(1, page_size)

        count_query = select(func.count()).select_from(ServiceRequest)
        query = select(ServiceRequest)
        if status:
            count_query = count_query.where(ServiceRequest.status == status)
            query = query.where(ServiceRequest.status == status)

        count_result = await self.session.execute(count_query)
        total_count = int(count_result.scalar_one() or 0)

        query = (
            query.order_by(ServiceRequest.updated_at.desc(), ServiceRequest.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await self.session.execute(query)

        return {
            "items": list(result.scalars().all()),
            "total_count": total_count,
            "current_page": page,
            "page_size": page_size,
        }
