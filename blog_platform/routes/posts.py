"""
API endpoints для публикаций (блогов)
"""

import re

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from blog_platform.schemas import (
    PostCreate,
    PostResponse,
    PostUpdate,
    PostDetail,
    PostWithAuthor,
    PostListResponse,
    LikeResponse,
    MessageResponse,
)
from blog_platform.models import User
from blog_platform.utils.database import get_db
from blog_platform.dependencies import get_current_user
from blog_platform.services.post_services import (
    create_post_for_user,
    list_posts_with_filters,
    get_post_detail,
    update_post_for_user,
    delete_post_for_user,
    toggle_post_like,
    list_posts_by_author,
)

router = APIRouter(prefix="/blogs", tags=["blogs"])

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _positive_int_or(raw: Optional[str], default: int) -> int:
    # Ведущее целое из строки ("3", "3abc"), иначе значение по умолчанию
    match = re.match(r"\s*(\d+)", raw or "")
    value = int(match.group(1)) if match else 0
    return value if value >= 1 else default


def pagination_params(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
) -> tuple[int, int]:
    """
    Нечисловые, нулевые и отрицательные значения не ошибка:
    подставляются page=1, limit=10.
    """
    return _positive_int_or(page, DEFAULT_PAGE), _positive_int_or(limit, DEFAULT_LIMIT)


# =========================
# СОЗДАНИЕ НОВОЙ ПУБЛИКАЦИИ
# =========================

@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post: PostCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Создание публикации с привязкой к текущему пользователю.
    """
    db_post = await create_post_for_user(db=db, author=current_user, post_in=post)
    return PostResponse.model_validate(db_post)


# ==========================
# ПОЛУЧИТЬ СПИСОК ВСЕХ ПУБЛИКАЦИЙ
# ==========================

@router.get("", response_model=PostListResponse)
async def list_posts(
    pagination: tuple[int, int] = Depends(pagination_params),
    tag: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    Лента постов с пагинацией, фильтром по тегу и поиском.

    Не требует авторизации.
    """
    page, limit = pagination
    result = await list_posts_with_filters(
        db=db,
        page=page,
        limit=limit,
        tag=tag,
        search=search,
    )
    return PostListResponse.model_validate(result)


# ==========================================
# ПОСТЫ КОНКРЕТНОГО АВТОРА
# ==========================================
# /myblogs и /user/{id} объявлены раньше /{post_id}

@router.get("/myblogs", response_model=list[PostWithAuthor])
async def list_my_posts(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Посты текущего пользователя"""
    posts = await list_posts_by_author(db=db, author_id=current_user.id)
    return [PostWithAuthor.model_validate(p) for p in posts]


@router.get("/user/{user_id}", response_model=list[PostWithAuthor])
async def list_user_posts(
    user_id: int,
    db: Session = Depends(get_db),
):
    """Посты пользователя. Не требует авторизации."""
    posts = await list_posts_by_author(db=db, author_id=user_id)
    return [PostWithAuthor.model_validate(p) for p in posts]


# ==========================================
# ПОЛУЧИТЬ ПУБЛИКАЦИЮ
# ==========================================

@router.get("/{post_id}", response_model=PostDetail)
async def get_post(
    post_id: int,
    db: Session = Depends(get_db),
):
    """
    Полный пост с автором и количеством комментариев.

    Не требует авторизации. Каждый запрос засчитывается как просмотр.
    """
    return await get_post_detail(db=db, post_id=post_id)


# =====================================
# ОБНОВЛЕНИЕ(РЕДАКТИРОВАНИЕ) ПУБЛИКАЦИИ
# =====================================

@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    post_update: PostUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Обновление (редактирование) поста. Только автор.
    """
    db_post = await update_post_for_user(
        db=db,
        post_id=post_id,
        post_update=post_update,
        current_user=current_user,
    )
    return PostResponse.model_validate(db_post)


# ==================
# УДАЛИТЬ ПУБЛИКАЦИЮ
# ==================

@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Удаление поста вместе с комментариями. Автор или админ.
    """
    await delete_post_for_user(db=db, post_id=post_id, current_user=current_user)
    return {"message": "Blog removed"}


# ==========
# ЛАЙК/АНЛАЙК
# ==========

@router.put("/{post_id}/like", response_model=LikeResponse)
async def like_post(
    post_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    likes, is_liked = await toggle_post_like(db=db, post_id=post_id, current_user=current_user)
    return LikeResponse(likes=likes, is_liked=is_liked)
