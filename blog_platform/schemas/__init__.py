# blog_platform/schemas/__init__.py

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Annotated, Optional, List


class CamelModel(BaseModel):
    """
    Общая база: на проводе ключи в camelCase (coverImage, createdAt...),
    внутри - snake_case. Читать умеем прямо из ORM-объектов.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def wire_field(name: str, wire_name: str):
    """
    Поле, которое на проводе называется иначе (id -> _id, author_id -> author).
    Читаем и по имени атрибута ORM, и по имени из JSON.
    """
    return Field(
        validation_alias=AliasChoices(name, wire_name),
        serialization_alias=wire_name,
    )


def _blank_to_none(value):
    # Пустая строка из формы = поле не передано
    if isinstance(value, str) and not value.strip():
        return None
    return value


# =======================
# СХЕМЫ ДЛЯ ПОЛЬЗОВАТЕЛЕЙ
# =======================

class UserCreate(CamelModel):
    """
    Схема для создания пользователя (регистрация)
    """
    username: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
    email: EmailStr
    password: str


class UserLogin(CamelModel):
    """
    Схема для логина по e-mail
    """
    email: str
    password: str


class AuthorBrief(CamelModel):
    """Автор в списках постов и комментариев"""
    id: int = wire_field("id", "_id")
    username: str
    profile_picture: str


class AuthorDetail(AuthorBrief):
    """Автор на странице поста"""
    bio: str


class UserResponse(CamelModel):
    """
    Схема ответа с инфо о пользователе (без пароля)
    """
    id: int = wire_field("id", "_id")
    username: str
    email: str
    profile_picture: str
    bio: str
    role: str
    created_at: datetime


class UserProfileUpdate(CamelModel):
    """
    Обновление собственного профиля.
    bio можно очистить, остальные пустые значения игнорируются.
    """
    username: Optional[Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]] = None
    email: Optional[EmailStr] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = None

    @field_validator("username", "email", "profile_picture", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        return _blank_to_none(value)


class PasswordChange(CamelModel):
    current_password: str
    new_password: str


class MessageResponse(BaseModel):
    message: str


# ====================
# СХЕМЫ ДЛЯ ПУБЛИКАЦИИ
# ====================

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


def _clean_tags(value):
    if value is None:
        return None
    return [tag.strip() for tag in value if isinstance(tag, str) and tag.strip()]


class PostCreate(CamelModel):
    """Создание поста"""
    title: Title
    content: Annotated[str, StringConstraints(min_length=1)]
    cover_image: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, value):
        return _clean_tags(value)


class PostUpdate(CamelModel):
    """
    Обновление поста.
    Пустое значение означает "не менять": очистить поле через PUT нельзя.
    Исключение - tags: пустой список очищает теги.
    """
    title: Optional[Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]] = None
    content: Optional[str] = None
    cover_image: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, value):
        return _clean_tags(value)


class PostBase(CamelModel):
    """Общие поля поста в ответах"""
    id: int = wire_field("id", "_id")
    title: str
    content: str
    cover_image: str
    tags: List[str]
    likes: List[int]
    views: int
    created_at: datetime
    updated_at: datetime


class PostResponse(PostBase):
    """Пост как он хранится: author - это id автора"""
    author_id: int = wire_field("author_id", "author")


class PostWithAuthor(PostBase):
    """Пост в ленте: автор развернут"""
    author: AuthorBrief


class PostDetail(PostBase):
    """Страница поста: автор с bio и количество комментариев"""
    author: AuthorDetail
    comment_count: int = 0


class PostListResponse(CamelModel):
    blogs: List[PostWithAuthor]
    current_page: int
    total_pages: int
    total_blogs: int


class LikeResponse(CamelModel):
    likes: int
    is_liked: bool


# ======================
# СХЕМЫ ДЛЯ КОММЕНТАРИЕВ
# ======================

class CommentCreate(CamelModel):
    """Создание комментария"""
    content: Annotated[str, StringConstraints(min_length=1)]
    blog_id: int


class CommentUpdate(CamelModel):
    """Обновление комментария (текст заменяется целиком)"""
    content: Annotated[str, StringConstraints(min_length=1)]


class CommentWithAuthor(CamelModel):
    """Комментарий с инфо об авторе"""
    id: int = wire_field("id", "_id")
    content: str
    post_id: int = wire_field("post_id", "blog")
    author: AuthorBrief
    likes: List[int]
    created_at: datetime
    updated_at: datetime
