# blog_platform/routes/auth.py

"""
API endpoints для регистрации и авторизации.

Сессия живёт в HTTP-only cookie "token".
"""

from fastapi import APIRouter, Depends, status, Request, Response

from sqlalchemy.orm import Session

from blog_platform.schemas import (
    UserCreate,
    UserLogin,
    UserResponse,
    MessageResponse,
)

from blog_platform.models import User
from blog_platform.utils.database import get_db
from blog_platform.dependencies import get_current_user
from blog_platform.services.auth_service import (
    register_user_in_db,
    authenticate_user,
    get_user_or_404,
)

from blog_platform.utils.limiter import limiter
from blog_platform.config import settings

# Router для всех auth-эндпоинтов
router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={400: {"description": "Bad Request"}},
)


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.TOKEN_COOKIE_NAME,
        value=token,
        max_age=settings.TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        samesite="strict",
        secure=settings.COOKIE_SECURE,
    )


# ===============================
# РЕГИСТРАЦИЯ НОВОГО ПОЛЬЗОВАТЕЛЯ
# ===============================

@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.REGISTER_RATE_LIMIT)
async def register_user(
        user: UserCreate,
        request: Request,
        response: Response,
        db: Session = Depends(get_db)
):
    """Регистрация: создаём пользователя и сразу логиним его через cookie"""

    db_user, token = await register_user_in_db(db=db, user_in=user)
    set_session_cookie(response, token)

    return UserResponse.model_validate(db_user)


# ==============================
# Авторизация созданного профиля
# ==============================

@router.post("/login", response_model=UserResponse, status_code=status.HTTP_200_OK)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login_user(
        user: UserLogin,
        request: Request,
        response: Response,
        db: Session = Depends(get_db)
):
    """Логин пользователя"""

    db_user, token = await authenticate_user(db=db, creds=user)
    set_session_cookie(response, token)

    return UserResponse.model_validate(db_user)


# ===============
# LOGOUT ENDPOINT
# ===============

@router.post("/logout", response_model=MessageResponse, status_code=status.HTTP_200_OK)
async def logout(response: Response):
    """Затираем cookie пустым уже истёкшим значением. Всегда успешно."""
    response.delete_cookie(
        key=settings.TOKEN_COOKIE_NAME,
        httponly=True,
        samesite="strict",
        secure=settings.COOKIE_SECURE,
    )
    return {"message": "User logged out"}


# ==================
# ТЕКУЩИЙ ПОЛЬЗОВАТЕЛЬ
# ==================

@router.get("/me", response_model=UserResponse, status_code=status.HTTP_200_OK)
async def get_me(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
):
    """
    Возвращает данные текущего пользователя без пароля
    """
    db_user = await get_user_or_404(db, current_user.id)
    return UserResponse.model_validate(db_user)
