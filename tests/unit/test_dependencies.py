"""
Unit-тесты для зависимостей идентификации пользователя.
"""
import pytest
from fastapi import HTTPException

from apps.api.dependencies import CurrentUser, get_current_user, require_admin, require_staff, require_user


@pytest.mark.asyncio
async def test_anonymous_request():
    """Тест: без заголовков пользователь анонимный."""
    assert await get_current_user(None, None) is None


@pytest.mark.asyncio
async def test_default_role_is_user():
    """Тест роли по умолчанию."""
    user = await get_current_user("42", None)
    assert user == CurrentUser(id=42, role="user")
    assert not user.is_staff


@pytest.mark.asyncio
async def test_role_is_case_insensitive():
    """Тест: роль нормализуется."""
    user = await get_current_user("1", " Admin ")
    assert user.is_admin
    assert user.is_staff


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id, role", [("abc", None), ("5", "superuser")])
async def test_invalid_identity_rejected(user_id, role):
    """Тест: неверный ID или роль дают 401."""
    with pytest.raises(HTTPException) as exc_info:
        await get_current_user(user_id, role)
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_require_user_rejects_anonymous():
    """Тест: анонимный запрос не проходит require_user."""
    with pytest.raises(HTTPException) as exc_info:
        await require_user(None)
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_role_checks():
    """Тест проверок ролей."""
    consultant = CurrentUser(id=3, role="consultant")

    assert await require_staff(consultant) is consultant
    with pytest.raises(HTTPException) as exc_info:
        await require_admin(consultant)
    assert exc_info.value.status_code == 403
