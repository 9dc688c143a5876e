"""
Главный API роутер CCNL Compare
"""
from fastapi import APIRouter

from apps.api.routers.agreements import router as agreements_router, admin_router as agreements_admin_router
from apps.api.routers.calculator import router as calculator_router
from apps.api.routers.toolkit import router as toolkit_router
from apps.api.routers.legal import router as legal_router
from apps.api.routers.services import router as services_router
from apps.api.routers.statistics import router as statistics_router

# Создаем главный роутер
api_router = APIRouter(prefix="/api/v1")

# Подключаем роутеры
api_router.include_router(agreements_router)
api_router.include_router(agreements_admin_router)
api_router.include_router(calculator_router)
api_router.include_router(toolkit_router)
api_router.include_router(legal_router)
api_router.include_router(services_router)
api_router.include_router(statistics_router)
