# blog_platform/models.py

from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Table
from sqlalchemy.orm import declarative_base, relationship

from blog_platform.config import settings

Base = declarative_base()

ROLE_USER = "user"
ROLE_ADMIN = "admin"


# Лайки храним как связи (запись, пользователь).
# Составной первичный ключ не даёт одному пользователю лайкнуть дважды.
post_likes = Table(
    "post_likes",
    Base.metadata,
    Column("post_id", Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)

comment_likes = Table(
    "comment_likes",
    Base.metadata,
    Column("comment_id", Integer, ForeignKey("comments.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    """
    Модель пользователя
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    profile_picture = Column(String(500), nullable=False, default=lambda: settings.DEFAULT_PROFILE_PICTURE)
    bio = Column(Text, nullable=False, default="")
    role = Column(String(20), nullable=False, default=ROLE_USER)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Связь с постами и комментариями данного пользователя
    posts = relationship("Post", back_populates="author")
    comments = relationship("Comment", back_populates="author")

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


class PostTag(Base):
    """
    Тег поста. Порядок тегов сохраняется по id.
    """
    __tablename__ = "post_tags"

    id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False, index=True)


class Post(Base):
    """
    Модель публикаций
    """

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False, index=True)
    content = Column(Text, nullable=False)
    author_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    cover_image = Column(String(500), nullable=False, default=lambda: settings.DEFAULT_COVER_IMAGE)
    views = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    author = relationship("User", back_populates="posts")
    comments = relationship("Comment", back_populates="post", cascade="all, delete-orphan")
    tag_rows = relationship("PostTag", cascade="all, delete-orphan", order_by=PostTag.id)
    liked_by = relationship("User", secondary=post_likes)

    @property
    def tags(self) -> list[str]:
        return [row.name for row in self.tag_rows]

    @tags.setter
    def tags(self, names: list[str]) -> None:
        self.tag_rows = [PostTag(name=name) for name in names]

    @property
    def likes(self) -> list[int]:
        return [user.id for user in self.liked_by]


class Comment(Base):
    """
    Модель комментария
    """

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    content = Column(Text, nullable=False)
    author_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    post_id = Column(Integer, ForeignKey('posts.id', ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    author = relationship("User", back_populates="comments")
    post = relationship("Post", back_populates="comments")
    liked_by = relationship("User", secondary=comment_likes)

    @property
    def likes(self) -> list[int]:
        return [user.id for user in self.liked_by]
