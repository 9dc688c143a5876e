"""
FastAPI приложение CCNL Compare
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException
import time
import uuid

from core.config.settings import settings
from core.database.session import init_database, close_database
from core.logging.logger import logger, setup_logging
from .main import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Инициализация и закрытие подключения к БД."""
    await init_database()
    logger.info("Application started", environment=settings.environment, version=settings.version)
    yield
    await close_database()
    logger.info("Application stopped")


def create_app() -> FastAPI:
    """Создание FastAPI приложения."""
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title=settings.app_name,
        description="API per il confronto del costo del lavoro tra CCNL",
        version=settings.version,
        debug=settings.debug,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Content-Type", "X-User-Id", "X-User-Role", "X-Request-ID"],
        expose_headers=["X-Request-ID", "X-Process-Time"],
    )

    # Middleware для логирования запросов
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Логирование всех HTTP запросов."""
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        start_time = time.perf_counter()

        logger.info(
            "HTTP Request started",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            query=request.url.query or None,
            user_id=request.headers.get("x-user-id"),
            client_ip=request.client.host if request.client else None
        )

        try:
            response = await call_next(request)

            process_time = time.perf_counter() - start_time
            logger.info(
                "HTTP Request completed",
                request_id=request_id,
                status_code=response.status_code,
                process_time=process_time
            )

            # Добавляем заголовки для отслеживания
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = str(process_time)

            return response

        except Exception as e:
            process_time = time.perf_counter() - start_time
            logger.error(
                "HTTP Request failed",
                request_id=request_id,
                error=str(e),
                process_time=process_time
            )
            raise

    # Обработчики ошибок
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Обработчик HTTP исключений."""
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            "HTTP Exception",
            status_code=exc.status_code,
            detail=exc.detail,
            path=request.url.path
        )

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "HTTP Error",
                "message": exc.detail,
                "status_code": exc.status_code
            },
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Обработчик ошибок валидации."""
        errors = jsonable_encoder(exc.errors())
        logger.warning(
            "Validation Error",
            errors=errors,
            path=request.url.path
        )

        return JSONResponse(
            status_code=422,
            content={
                "error": "Validation Error",
                "message": "Errore di validazione dei dati",
                "details": errors
            }
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Общий обработчик исключений."""
        logger.error(
            "General Exception",
            error=str(exc),
            path=request.url.path,
            exc_info=True
        )

        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "message": "Errore interno del server"
            }
        )

    # Подключаем API роутеры
    app.include_router(api_router)

    @app.get("/")
    async def root():
        """Разделы API."""
        return {
            "app": settings.app_name,
            "version": settings.version,
            "status": "running",
            "api": api_router.prefix,
            "sections": ["agreements", "calculator", "toolkit", "legal", "services", "statistics"],
        }

    # Health check
    @app.get("/health")
    async def health_check():
        """Проверка состояния приложения."""
        return {
            "status": "healthy",
            "timestamp": time.time(),
            "environment": settings.environment,
            "version": settings.version
        }

    return app


# Создаем экземпляр приложения
app = create_app()
