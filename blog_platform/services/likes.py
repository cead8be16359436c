# blog_platform/services/likes.py

"""
Лайк/анлайк для постов и комментариев.
"""

from sqlalchemy.orm import Session

from blog_platform.models import User


async def toggle_like(db: Session, record, user: User) -> tuple[int, bool]:
    """
    Переключить лайк пользователя на записи (Post или Comment).

    Запись должна быть прочитана с with_for_update(), тогда два
    параллельных запроса не перетрут друг друга.
    Возвращает (новое количество лайков, лайкнуто ли теперь).
    """
    if user in record.liked_by:
        record.liked_by.remove(user)
        is_liked = False
    else:
        record.liked_by.append(user)
        is_liked = True

    likes = len(record.liked_by)
    db.commit()
    return likes, is_liked
