"""Таблица переходов статусов заявки на услугу."""

from typing import Dict, FrozenSet, Union

from domain.entities.service_request import ServiceRequestStatus

S = ServiceRequestStatus

ALLOWED_TRANSITIONS: Dict[ServiceRequestStatus, FrozenSet[ServiceRequestStatus]] = {
    S.DRAFT: frozenset({S.SUBMITTED}),
    S.SUBMITTED: frozenset({S.IN_REVIEW}),
    S.IN_REVIEW: frozenset({S.NEEDS_INFO, S.APPROVED, S.REJECTED}),
    S.NEEDS_INFO: frozenset({S.SUBMITTED}),
    S.APPROVED: frozenset({S.CLOSED}),
    S.REJECTED: frozenset({S.CLOSED}),
    S.CLOSED: frozenset(),
}

# Статусы, из которых заявитель может отправить заявку
SUBMITTABLE_STATUSES = frozenset({S.DRAFT, S.NEEDS_INFO})


class RequestTransitionError(ValueError):
    """Недопустимый переход статуса заявки."""

    def __init__(self, from_status: str, to_status: str):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(f"Transition {from_status} -> {to_status} is not allowed")


def _status(value: Union[str, ServiceRequestStatus]) -> ServiceRequestStatus:
    return value if isinstance(value, ServiceRequestStatus) else ServiceRequestStatus(value)


def can_transition(from_status: Union[str, ServiceRequestStatus], to_status: Union[str, ServiceRequestStatus]) -> bool:
    """Разрешен ли переход."""
    return _status(to_status) in ALLOWED_TRANSITIONS[_status(from_status)]


def ensure_transition(
    from_status: Union[str, ServiceRequestStatus],
    to_status: Union[str, ServiceRequestStatus],
) -> ServiceRequestStatus:
    """Проверяет переход и возвращает новый статус."""
    if not can_transition(from_status, to_status):
        raise RequestTransitionError(_status(from_status).value, _status(to_status).value)
    return _status(to_status)
