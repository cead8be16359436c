# blog_platform/services/user_service.py

"""
Сервисный слой для профиля пользователя.
"""

import logging

from sqlalchemy.orm import Session

from blog_platform.models import User
from blog_platform.schemas import UserProfileUpdate, PasswordChange
from blog_platform.services.auth_service import ensure_unique_identity, commit_identity_change
from blog_platform.utils.exceptions import UnauthorizedError
from blog_platform.utils.security import hash_password, verify_password, validate_password_strength

logger = logging.getLogger(__name__)


async def update_profile(
    db: Session,
    current_user: User,
    profile_in: UserProfileUpdate,
) -> User:
    """
    Обновить свой профиль.

    username/email/profilePicture: пустое значение = не менять.
    bio: применяется, если передано, в том числе пустая строка.
    """
    email = profile_in.email.lower() if profile_in.email else None
    new_email = email if email != current_user.email else None
    new_username = profile_in.username if profile_in.username != current_user.username else None

    await ensure_unique_identity(
        db,
        email=new_email,
        username=new_username,
        exclude_user_id=current_user.id,
    )

    current_user.username = new_username or current_user.username
    current_user.email = new_email or current_user.email
    current_user.profile_picture = profile_in.profile_picture or current_user.profile_picture
    if profile_in.bio is not None:
        current_user.bio = profile_in.bio

    commit_identity_change(db)
    db.refresh(current_user)
    return current_user


async def change_password(
    db: Session,
    current_user: User,
    passwords: PasswordChange,
) -> None:
    """
    Сменить пароль. Текущий пароль обязателен.
    """
    if not verify_password(passwords.current_password, current_user.hashed_password):
        raise UnauthorizedError("Current password is incorrect")

    validate_password_strength(passwords.new_password)

    current_user.hashed_password = hash_password(passwords.new_password)
    db.commit()

    logger.info("Password changed for user id=%s", current_user.id)
