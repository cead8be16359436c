# blog_platform/routes/users.py

"""
API enpoints для профилей пользователей.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blog_platform.schemas import UserResponse, UserProfileUpdate, PasswordChange, MessageResponse
from blog_platform.models import User
from blog_platform.utils.database import get_db
from blog_platform.dependencies import get_current_user
from blog_platform.services.auth_service import get_user_or_404
from blog_platform.services.user_service import update_profile, change_password

router = APIRouter(
    prefix="/users",
    tags=["users"],
)

# /profile и /password объявлены раньше /{user_id}

@router.get("/profile", response_model=UserResponse, status_code=status.HTTP_200_OK)
async def get_own_profile(
        current_user: User = Depends(get_current_user),
):
    """
    Возвращает профиль текущего пользователя
    """
    return UserResponse.model_validate(current_user)


@router.put("/profile", response_model=UserResponse)
async def update_own_profile(
        profile: UserProfileUpdate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
):
    db_user = await update_profile(db=db, current_user=current_user, profile_in=profile)
    return UserResponse.model_validate(db_user)


@router.put("/password", response_model=MessageResponse)
async def update_password(
        passwords: PasswordChange,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
):
    await change_password(db=db, current_user=current_user, passwords=passwords)
    return {"message": "Password updated successfully"}


@router.get("/{user_id}", response_model=UserResponse)
async def get_profile(
        user_id: int,
        db: Session = Depends(get_db),
):
    """
    Публичный профиль: id, username, email, аватар, bio, роль, дата регистрации
    """
    db_user = await get_user_or_404(db, user_id)
    return UserResponse.model_validate(db_user)
