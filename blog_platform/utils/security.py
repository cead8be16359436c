# blog_platform/utils/security.py

"""
Утилиты для безопасности: хэширование пароля и JWT токены
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt
from passlib.context import CryptContext
from blog_platform.config import settings
from blog_platform.utils.exceptions import InvalidToken, ValidationError

# Контекст bcrypt алгоритм
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

MIN_PASSWORD_LENGTH = 6

# =============================
# ФУНКЦИЯ ДЛЯ РАБОТЫ С ПАРОЛЯМИ
# =============================

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

# Проверка, что введённый пароль совпадает с хэшем в БД
def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def validate_password_strength(password: str) -> None:
    """
    Проверяет минимальную длину пароля.
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

# =============================
# ФУНКЦИИ ДЛЯ РАБОТЫ С JWT
# =============================

def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    # Определяем время истечения токена
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            days=settings.TOKEN_EXPIRE_DAYS
        )

    to_encode = {
        "sub": str(user_id),
        "exp": expire,
    }

    # Кодируем в JWT
    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def decode_token(token: str) -> Optional[dict]:
    """
    Декодируем JWT токен и проверяем подпись
    """

    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
        return payload
    except jwt.ExpiredSignatureError:
        # Токен истек
        return None
    except jwt.InvalidTokenError:
        # Токен подделан
        return None


def verify_access_token(token: str) -> int:
    """
    Возвращает id пользователя из токена или бросает InvalidToken
    """
    payload = decode_token(token)
    if payload is None:
        raise InvalidToken()

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        raise InvalidToken() from None
