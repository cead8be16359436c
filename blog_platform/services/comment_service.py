# blog_platform/services/comment_service.py

"""
Сервисный слой для комментариев.

Знает про Comment/Post/User и БД, но не про HTTP-статусы.
"""

import logging
from typing import List

from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload

from blog_platform.models import Comment, User
from blog_platform.schemas import CommentCreate, CommentUpdate
from blog_platform.services.likes import toggle_like
from blog_platform.services.post_services import get_post_by_id
from blog_platform.utils.exceptions import NotFound, PermissionDeniedError

logger = logging.getLogger(__name__)


async def get_comment_by_id(db: Session, comment_id: int, for_update: bool = False) -> Comment:
    """
    Найти комментарий по id. Нет комментария -> NotFound.
    """
    query = db.query(Comment).filter(Comment.id == comment_id)
    if for_update:
        query = query.with_for_update()
    comment = query.first()
    if comment is None:
        raise NotFound("Comment not found")
    return comment


async def create_comment_for_post(
    db: Session,
    author: User,
    comment_in: CommentCreate,
) -> Comment:
    """
    Создать комментарий к посту от имени пользователя.
    """
    post = await get_post_by_id(db, comment_in.blog_id)

    db_comment = Comment(
        content=comment_in.content,
        author_id=author.id,
        post_id=post.id,
    )
    db.add(db_comment)
    db.commit()
    db.refresh(db_comment)
    return db_comment


async def list_comments_for_post(
    db: Session,
    post_id: int,
) -> List[Comment]:
    """
    Вернуть все комментарии к посту, новые первыми.
    """
    return (
        db.query(Comment)
        .options(joinedload(Comment.author))
        .filter(Comment.post_id == post_id)
        .order_by(desc(Comment.created_at), desc(Comment.id))
        .all()
    )


async def update_comment_for_user(
    db: Session,
    comment_id: int,
    comment_update: CommentUpdate,
    current_user: User,
) -> Comment:
    """
    Обновить текст комментария (только автор).
    """
    db_comment = await get_comment_by_id(db, comment_id)

    if db_comment.author_id != current_user.id:
        raise PermissionDeniedError("Not authorized to update this comment")

    db_comment.content = comment_update.content

    db.commit()
    db.refresh(db_comment)
    return db_comment


async def delete_comment_for_user(
    db: Session,
    comment_id: int,
    current_user: User,
) -> None:
    """
    Удалить комментарий (автор или админ).
    """
    db_comment = await get_comment_by_id(db, comment_id)

    if db_comment.author_id != current_user.id and not current_user.is_admin:
        raise PermissionDeniedError("Not authorized to delete this comment")

    db.delete(db_comment)
    db.commit()

    logger.info("Comment id=%s deleted by user id=%s", comment_id, current_user.id)


async def toggle_comment_like(
    db: Session,
    comment_id: int,
    current_user: User,
) -> tuple[int, bool]:
    db_comment = await get_comment_by_id(db, comment_id, for_update=True)
    return await toggle_like(db, db_comment, current_user)
