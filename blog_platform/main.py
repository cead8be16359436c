"""
Главный файл приложения
Здесь инициализируется FastAPI и подключаются маршруты
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from dotenv import load_dotenv
load_dotenv()

from blog_platform.routes import posts, comments, auth, users
from blog_platform.config import settings
from blog_platform.models import Base
from blog_platform.utils.database import engine

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Таблицы создаём при старте (миграций в проекте нет)
    if settings.CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
    logger.info("Blog API started, prefix=%s", settings.API_PREFIX)
    yield
    engine.dispose()


# Создаем приложение
app = FastAPI(
    title="Blog API",
    description="Blog with posts, comments, likes and cookie sessions",
    version="1.0.0",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    lifespan=lifespan,
)


# Подключаем хендлеры

from blog_platform.utils.exceptions import (
    app_error_handler,
    http_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
    AppError,
    rate_limit_exceeded_handler,
)

# Глобальные обработчики ошибок

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# =============================
# Ограничитель частоты запросов
# =============================
from slowapi.middleware import SlowAPIMiddleware
from slowapi.errors import RateLimitExceeded
from blog_platform.utils.limiter import limiter


app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# CORS (чтобы фронтенд мог обращаться к API с cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    )


# ==============
# HEALTH-CHECKING
# ==============

@app.get("/health")
async def health_check():
    """Проверка, что приложение живо"""
    return {"status": "ok"}


# =====================
# Подключаем все ROUTES
# =====================

app.include_router(auth.router, prefix=settings.API_PREFIX) # Регистрация и авторизация
app.include_router(posts.router, prefix=settings.API_PREFIX) # Посты
app.include_router(comments.router, prefix=settings.API_PREFIX) # Комментарии
app.include_router(users.router, prefix=settings.API_PREFIX) # Профили


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
