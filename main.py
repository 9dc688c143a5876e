#!/usr/bin/env python3
"""
Запуск API сервиса CCNL Compare
"""

import uvicorn

from core.config.settings import settings


def main():
    """Основная функция запуска API."""
    print(f"🚀 Запуск {settings.app_name} на {settings.api_host}:{settings.api_port}")
    uvicorn.run(
        "apps.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
