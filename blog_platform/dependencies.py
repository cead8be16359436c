# blog_platform/dependencies.py

"""
Зависимости для использования в endpoints
"""

from fastapi import Depends
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session
from blog_platform.config import settings
from blog_platform.models import User
from blog_platform.utils.database import get_db
from blog_platform.utils.exceptions import UnauthorizedError
from blog_platform.utils.security import verify_access_token
from typing import Optional

session_cookie = APIKeyCookie(name=settings.TOKEN_COOKIE_NAME, auto_error=False)


async def get_current_user(
        token: Optional[str] = Depends(session_cookie),
        db: Session = Depends(get_db)
) -> User:
    """
    Получаем текущего авторизованного пользователя

    Берём токен из cookie, проверяем подпись и срок действия,
    из токена берем user_id, ищем пользователя в БД и возвращаем объект User.
    При любой неудаче отвечаем 401, обработчик маршрута не вызывается.
    """
    if not token:
        raise UnauthorizedError("Not authenticated")

    # Токен подделан или истек -> InvalidToken (401)
    user_id = verify_access_token(token)

    # Ищем пользователя в БД
    user = db.query(User).filter(User.id == user_id).first()

    if user is None:
        raise UnauthorizedError("Not authenticated")

    return user
