"""
Unit-тесты для таблицы переходов статусов заявки.
"""
import pytest

from domain.entities.service_request import ServiceRequestStatus as S
from shared.services.request_workflow import (
    ALLOWED_TRANSITIONS, RequestTransitionError, can_transition, ensure_transition,
)


@pytest.mark.parametrize("from_status, to_status", [
    (S.DRAFT, S.SUBMITTED),
    (S.SUBMITTED, S.IN_REVIEW),
    (S.IN_REVIEW, S.NEEDS_INFO),
    (S.IN_REVIEW, S.APPROVED),
    (S.IN_REVIEW, S.REJECTED),
    (S.NEEDS_INFO, S.SUBMITTED),
    (S.APPROVED, S.CLOSED),
    (S.REJECTED, S.CLOSED),
])
def test_allowed_transitions(from_status, to_status):
    """Тест разрешенных переходов."""
    assert can_transition(from_status, to_status)
    assert ensure_transition(from_status.value, to_status.value) == to_status


@pytest.mark.parametrize("from_status, to_status", [
    (S.DRAFT, S.APPROVED),
    (S.SUBMITTED, S.CLOSED),
    (S.NEEDS_INFO, S.APPROVED),
    (S.APPROVED, S.REJECTED),
    (S.DRAFT, S.DRAFT),
])
def test_forbidden_transitions(from_status, to_status):
    """Тест запрещенных переходов."""
    assert not can_transition(from_status, to_status)
    with pytest.raises(RequestTransitionError) as exc_info:
        ensure_transition(from_status, to_status)

    assert exc_info.value.from_status == from_status.value
    assert exc_info.value.to_status == to_status.value


def test_closed_is_terminal():
    """Тест: из closed переходов нет."""
    assert ALLOWED_TRANSITIONS[S.CLOSED] == frozenset()
    assert all(not can_transition(S.CLOSED, status) for status in S)


def test_unknown_status_rejected():
    """Тест: неизвестный статус не принимается."""
    with pytest.raises(ValueError):
        can_transition("draft", "archived")
