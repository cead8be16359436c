# blog_platform/services/auth_service.py

"""
Сервисный слой для регистрации и логина.

Знает про модели, БД, хэширование и JWT, но не про HTTP и cookie.
Ошибки сообщает доменными исключениями из utils.exceptions.
"""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_platform.models import User
from blog_platform.schemas import UserCreate, UserLogin
from blog_platform.utils.exceptions import ConflictError, NotFound, UnauthorizedError
from blog_platform.utils.security import (
    hash_password,
    verify_password,
    validate_password_strength,
    create_access_token,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


async def ensure_unique_identity(
    db: Session,
    email: str | None,
    username: str | None,
    exclude_user_id: int | None = None,
) -> None:
    """
    Проверка уникальности email и username.

    Если заняты оба, в сообщении побеждает email.
    """
    conditions = []
    if email:
        conditions.append(User.email == email)
    if username:
        conditions.append(User.username == username)
    if not conditions:
        return

    query = db.query(User).filter(or_(*conditions))
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)

    taken = query.all()
    if any(user.email == email for user in taken):
        raise ConflictError("Email already in use")
    if taken:
        raise ConflictError("Username already taken")


def commit_identity_change(db: Session) -> None:
    """
    Commit после ensure_unique_identity.

    Параллельный запрос мог занять email/username между проверкой и записью,
    тогда сработает уникальный индекс.
    """
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Unique constraint hit on user email/username")
        raise ConflictError("Email or username already in use")


async def register_user_in_db(
    db: Session,
    user_in: UserCreate,
) -> tuple[User, str]:
    """
    Зарегистрировать нового пользователя.

    Возвращает созданного пользователя и сессионный токен.
    """
    email = user_in.email.lower()
    await ensure_unique_identity(db, email=email, username=user_in.username)
    validate_password_strength(user_in.password)

    # Хэшируем пароль и создаём пользователя
    db_user = User(
        email=email,
        username=user_in.username,
        hashed_password=hash_password(user_in.password),
    )

    db.add(db_user)
    commit_identity_change(db)
    db.refresh(db_user)

    logger.info("Registered user id=%s username=%s", db_user.id, db_user.username)

    return db_user, create_access_token(db_user.id)


async def authenticate_user(
    db: Session,
    creds: UserLogin,
) -> tuple[User, str]:
    """
    Аутентифицировать пользователя по email и паролю.

    "Нет такого пользователя" и "неверный пароль" неразличимы для клиента.
    """
    email = creds.email.strip().lower()
    db_user = db.query(User).filter(User.email == email).first()

    if not db_user or not verify_password(creds.password, db_user.hashed_password):
        logger.debug("Failed login attempt")
        raise UnauthorizedError(INVALID_CREDENTIALS)

    return db_user, create_access_token(db_user.id)


async def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFound("User not found")
    return user
