# blog_platform/services/post_services.py

"""
Сервисный слой для постов.

Знает про модели и БД, но не про HTTP-статусы.
"""

import logging
import math
from typing import Optional

from sqlalchemy import desc, or_
from sqlalchemy.orm import Session, joinedload

from blog_platform.config import settings
from blog_platform.models import Post, PostTag, User, Comment
from blog_platform.schemas import PostCreate, PostUpdate, PostDetail
from blog_platform.services.likes import toggle_like
from blog_platform.utils.exceptions import NotFound, PermissionDeniedError

logger = logging.getLogger(__name__)

BLOG_NOT_FOUND = "Blog not found"


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _search_clause(search: str):
    """
    Полнотекстовый поиск по заголовку, тексту и тегам.

    Как и текстовый индекс: пост подходит, если совпал хотя бы один термин.
    """
    clauses = []
    for term in search.split():
        pattern = _like_pattern(term)
        clauses.append(
            or_(
                Post.title.ilike(pattern, escape="\\"),
                Post.content.ilike(pattern, escape="\\"),
                Post.tag_rows.any(PostTag.name.ilike(pattern, escape="\\")),
            )
        )
    return or_(*clauses)


def _newest_first(query):
    return query.order_by(desc(Post.created_at), desc(Post.id))


async def get_post_by_id(db: Session, post_id: int, for_update: bool = False) -> Post:
    """
    Утилита для поиска поста по id. Нет поста -> NotFound.
    """
    query = db.query(Post).filter(Post.id == post_id)
    if for_update:
        query = query.with_for_update()
    post = query.first()
    if post is None:
        raise NotFound(BLOG_NOT_FOUND)
    return post


async def create_post_for_user(
    db: Session,
    author: User,
    post_in: PostCreate,
) -> Post:
    """
    Создать пост для конкретного пользователя.
    """
    db_post = Post(
        title=post_in.title,
        content=post_in.content,
        author_id=author.id,
        cover_image=post_in.cover_image or settings.DEFAULT_COVER_IMAGE,
        tags=post_in.tags or [],
    )

    db.add(db_post)
    db.commit()
    db.refresh(db_post)

    return db_post


async def list_posts_with_filters(
    db: Session,
    page: int,
    limit: int,
    tag: Optional[str],
    search: Optional[str],
) -> dict:
    """
    Вернуть страницу ленты с учётом:
    - фильтра по тегу,
    - поисковой строки (оба фильтра через AND),
    - пагинации page/limit, новые посты первыми.
    """
    query = db.query(Post)

    if tag:
        query = query.filter(Post.tag_rows.any(PostTag.name == tag))

    if search and search.strip():
        query = query.filter(_search_clause(search))

    total = query.count()

    # Пагинация
    posts = (
        _newest_first(query.options(joinedload(Post.author)))
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return {
        "blogs": posts,
        "current_page": page,
        "total_pages": math.ceil(total / limit),
        "total_blogs": total,
    }


async def get_post_detail(
    db: Session,
    post_id: int,
) -> PostDetail:
    """
    Вернуть пост с автором и количеством комментариев.

    Каждый вызов увеличивает счётчик просмотров ровно на 1.
    В ответе - состояние поста до этого просмотра.
    """
    post = (
        db.query(Post)
        .options(joinedload(Post.author))
        .filter(Post.id == post_id)
        .first()
    )
    if post is None:
        raise NotFound(BLOG_NOT_FOUND)

    detail = PostDetail.model_validate(post)
    detail.comment_count = db.query(Comment).filter(Comment.post_id == post_id).count()

    # Атомарный инкремент на стороне БД
    db.query(Post).filter(Post.id == post_id).update(
        {Post.views: Post.views + 1},
        synchronize_session=False,
    )
    db.commit()

    return detail


async def update_post_for_user(
    db: Session,
    post_id: int,
    post_update: PostUpdate,
    current_user: User,
) -> Post:
    """
    Обновить пост (только автор).

    Пустые/ложные значения игнорируются - прежнее значение остаётся.
    Теги заменяются любым переданным списком, пустой список их очищает.
    """
    db_post = await get_post_by_id(db, post_id)

    if db_post.author_id != current_user.id:
        raise PermissionDeniedError("Not authorized to update this blog")

    db_post.title = post_update.title or db_post.title
    db_post.content = post_update.content or db_post.content
    db_post.cover_image = post_update.cover_image or db_post.cover_image
    if post_update.tags is not None:
        db_post.tags = post_update.tags

    db.commit()
    db.refresh(db_post)

    return db_post


async def delete_post_for_user(
    db: Session,
    post_id: int,
    current_user: User,
) -> None:
    """
    Удалить пост (автор или админ) вместе со всеми его комментариями.
    """
    db_post = await get_post_by_id(db, post_id)

    if db_post.author_id != current_user.id and not current_user.is_admin:
        raise PermissionDeniedError("Not authorized to delete this blog")

    # Комментарии, теги и лайки уходят каскадом
    db.delete(db_post)
    db.commit()

    logger.info("Post id=%s deleted by user id=%s", post_id, current_user.id)


async def toggle_post_like(
    db: Session,
    post_id: int,
    current_user: User,
) -> tuple[int, bool]:
    db_post = await get_post_by_id(db, post_id, for_update=True)
    return await toggle_like(db, db_post, current_user)


async def list_posts_by_author(
    db: Session,
    author_id: int,
) -> list[Post]:
    """
    Все посты автора, новые первыми, без пагинации.
    """
    query = (
        db.query(Post)
        .options(joinedload(Post.author))
        .filter(Post.author_id == author_id)
    )
    return _newest_first(query).all()
