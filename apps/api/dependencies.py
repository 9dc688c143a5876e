"""
Зависимости FastAPI: идентификация пользователя
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from core.logging.logger import logger
from domain.entities.content_status import ContentStatus


ROLES = ("user", "consultant", "admin")


@dataclass(frozen=True)
class CurrentUser:
    """Пользователь, установленный шлюзом через заголовки X-User-Id / X-User-Role."""
    id: int
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def is_staff(self) -> bool:
        """Консультант или администратор."""
        return self.role in ("consultant", "admin")


async def get_current_user(
    x_user_id: Optional[str] = Header(None),
    x_user_role: Optional[str] = Header(None),
) -> Optional[CurrentUser]:
    """Текущий пользователь или None для анонимного запроса."""
    if not x_user_id:
        return None

    try:
        user_id = int(x_user_id)
    except ValueError:
        logger.warning("Invalid X-User-Id header", header_value=x_user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Identità utente non valida"
        )

    role = (x_user_role or "user").strip().lower()
    if role not in ROLES:
        logger.warning("Unknown X-User-Role header", user_id=user_id, role=role)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Ruolo utente non valido"
        )

    return CurrentUser(id=user_id, role=role)


async def require_user(
    user: Optional[CurrentUser] = Depends(get_current_user),
) -> CurrentUser:
    """Требует идентифицированного пользователя."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Autenticazione richiesta"
        )
    return user


def require_role(*roles: str):
    """Фабрика зависимости, требующей одну из ролей."""

    async def dependency(user: CurrentUser = Depends(require_user)) -> CurrentUser:
        if user.role not in roles:
            logger.warning("Role check failed", user_id=user.id, role=user.role, required=list(roles))
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Permessi insufficienti"
            )
        return user

    return dependency


require_admin = require_role("admin")
require_staff = require_role("consultant", "admin")


def visible_content_status(user: Optional[CurrentUser], requested: Optional[str]) -> Optional[str]:
    """Администратор видит любые статусы, остальные только опубликованные."""
    if user is not None and user.is_admin:
        return requested
    return ContentStatus.PUBLISHED.value


def ensure_content_visible(user: Optional[CurrentUser], content_status: str) -> None:
    """Неопубликованный контент доступен только администратору."""
    if content_status != ContentStatus.PUBLISHED.value and not (user and user.is_admin):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Contenuto non pubblicato"
        )
