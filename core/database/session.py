"""
Фабрика для создания сессий базы данных
"""

from typing import AsyncGenerator
from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from core.config.settings import settings
from core.logging.logger import logger


class DatabaseManager:
    """Менеджер базы данных для создания сессий."""

    def __init__(self, database_url: str | None = None):
        self.database_url = database_url or settings.async_database_url
        self.engine = None
        self.session_factory = None
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self):
        """Инициализирует подключение к базе данных."""
        if self._initialized:
            return

        try:
            self.engine = create_async_engine(
                self.database_url,
                echo=settings.database_echo,
                poolclass=NullPool,
            )

            self.session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False
            )

            self._initialized = True
            logger.info("Database connection initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize database connection: {e}")
            raise

    async def close(self):
        """Закрывает подключение к базе данных."""
        if self.engine:
            await self.engine.dispose()
            self._initialized = False
            logger.info("Database connection closed")

    def get_session(self) -> AsyncSession:
        """Возвращает новую сессию базы данных."""
        if not self._initialized:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        return self.session_factory()


# Глобальный экземпляр менеджера БД
db_manager = DatabaseManager()


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Асинхронный контекстный менеджер для получения сессии БД.

    Обеспечивает ленивую инициализацию подключения и корректное закрытие сессии.
    Использование:
        async with get_async_session() as session:
            ...
    """
    if not db_manager.initialized:
        await db_manager.initialize()
    session = db_manager.get_session()
    try:
        yield session
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency для получения сессии БД."""
    async with get_async_session() as session:
        yield session


async def init_database():
    """Инициализирует базу данных."""
    await db_manager.initialize()


async def close_database():
    """Закрывает подключение к базе данных."""
    await db_manager.close()
