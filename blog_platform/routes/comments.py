# blog_platform/routes/comments.py

"""
API endpoints для комментариев.

Все endpoints кроме GET требуют авторизации.
Обновление - только автор комментария, удаление - автор или админ.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blog_platform.schemas import (
    CommentCreate,
    CommentUpdate,
    CommentWithAuthor,
    LikeResponse,
    MessageResponse,
)
from blog_platform.models import User
from blog_platform.utils.database import get_db
from blog_platform.dependencies import get_current_user
from blog_platform.services.comment_service import (
    create_comment_for_post,
    list_comments_for_post,
    update_comment_for_user,
    delete_comment_for_user,
    toggle_comment_like,
)


router = APIRouter(prefix="/comments", tags=["comments"])


@router.post(
    "",
    response_model=CommentWithAuthor,
    status_code=status.HTTP_201_CREATED
)
async def create_comment(
    comment: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Создаём комментарий к посту blogId.

    Только для авторизованных пользователей.
    """
    db_comment = await create_comment_for_post(
        db=db,
        author=current_user,
        comment_in=comment,
    )
    return CommentWithAuthor.model_validate(db_comment)


@router.get("/blog/{post_id}", response_model=list[CommentWithAuthor])
async def list_comments(
    post_id: int,
    db: Session = Depends(get_db),
):
    """
    Получить все комментарии к посту, новые первыми.

    Не требует авторизации.
    """
    comments = await list_comments_for_post(db=db, post_id=post_id)
    return [CommentWithAuthor.model_validate(c) for c in comments]


@router.put("/{comment_id}", response_model=CommentWithAuthor)
async def update_comment(
    comment_id: int,
    comment: CommentUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Обновить комментарий.

    Только для автора комментария.
    """
    db_comment = await update_comment_for_user(
        db=db,
        comment_id=comment_id,
        comment_update=comment,
        current_user=current_user,
    )
    return CommentWithAuthor.model_validate(db_comment)


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Удалить комментарий.

    Автор комментария или админ.
    """
    await delete_comment_for_user(
        db=db,
        comment_id=comment_id,
        current_user=current_user,
    )
    return {"message": "Comment removed"}


@router.put("/{comment_id}/like", response_model=LikeResponse)
async def like_comment(
    comment_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    likes, is_liked = await toggle_comment_like(
        db=db,
        comment_id=comment_id,
        current_user=current_user,
    )
    return LikeResponse(likes=likes, is_liked=is_liked)
