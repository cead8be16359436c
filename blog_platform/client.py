# blog_platform/client.py

"""
Клиент для Blog API: то, что делает SPA, только на Python.

Держит состояние авторизации (текущий пользователь, флаг загрузки),
сессия живёт в cookie-jar httpx-клиента.
"""

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Ошибка ответа API: статус и message из тела"""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class BlogClient:
    def __init__(self, http: httpx.Client):
        # base_url клиента должен указывать на /api
        self._http = http
        self.user: Optional[dict] = None
        self.is_loading = True

    @classmethod
    def connect(cls, base_url: str = "http://localhost:8000/api", **kwargs) -> "BlogClient":
        return cls(httpx.Client(base_url=base_url, **kwargs))

    def close(self) -> None:
        self._http.close()

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def _request(self, method: str, url: str, **kwargs) -> Any:
        response = self._http.request(method, url, **kwargs)
        if response.is_error:
            try:
                message = response.json().get("message", response.reason_phrase)
            except ValueError:
                message = response.reason_phrase
            raise ApiError(response.status_code, message)
        return response.json()

    # ==================
    # АВТОРИЗАЦИЯ
    # ==================

    def check_auth_status(self) -> Optional[dict]:
        """
        Вызывается один раз при старте: кто я по текущей cookie.
        """
        try:
            self.user = self._request("GET", "/auth/me")
        except ApiError as exc:
            logger.debug("No active session: %s", exc)
            self.user = None
        finally:
            self.is_loading = False
        return self.user

    def login(self, email: str, password: str) -> dict:
        self.user = self._request("POST", "/auth/login", json={"email": email, "password": password})
        return self.user

    def register(self, username: str, email: str, password: str) -> dict:
        self.user = self._request(
            "POST",
            "/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        return self.user

    def logout(self) -> None:
        self._request("POST", "/auth/logout")
        self.user = None

    def update_user(self, user: dict) -> None:
        self.user = user

    # ==================
    # ПОСТЫ
    # ==================

    def list_blogs(
        self,
        page: int = 1,
        limit: int = 10,
        tag: Optional[str] = None,
        search: Optional[str] = None,
    ) -> dict:
        params: dict[str, Any] = {"page": page, "limit": limit}
        if tag:
            params["tag"] = tag
        if search:
            params["search"] = search
        return self._request("GET", "/blogs", params=params)

    def get_blog(self, blog_id: int) -> dict:
        return self._request("GET", f"/blogs/{blog_id}")

    def list_user_blogs(self, user_id: int) -> list[dict]:
        return self._request("GET", f"/blogs/user/{user_id}")

    def list_my_blogs(self) -> list[dict]:
        return self._request("GET", "/blogs/myblogs")

    def create_blog(self, title: str, content: str, cover_image: Optional[str] = None, tags: Optional[list[str]] = None) -> dict:
        payload: dict[str, Any] = {"title": title, "content": content}
        if cover_image:
            payload["coverImage"] = cover_image
        if tags is not None:
            payload["tags"] = tags
        return self._request("POST", "/blogs", json=payload)

    def update_blog(self, blog_id: int, **fields) -> dict:
        payload = {
            "title": fields.get("title"),
            "content": fields.get("content"),
            "coverImage": fields.get("cover_image"),
            "tags": fields.get("tags"),
        }
        payload = {key: value for key, value in payload.items() if value is not None}
        return self._request("PUT", f"/blogs/{blog_id}", json=payload)

    def delete_blog(self, blog_id: int) -> dict:
        return self._request("DELETE", f"/blogs/{blog_id}")

    def toggle_blog_like(self, blog: dict) -> dict:
        """
        Лайк/анлайк. Локально патчим только то, что вернул сервер.
        """
        result = self._request("PUT", f"/blogs/{blog['_id']}/like")
        self._patch_likes(blog, result)
        return result

    # ==================
    # КОММЕНТАРИИ
    # ==================

    def list_comments(self, blog_id: int) -> list[dict]:
        return self._request("GET", f"/comments/blog/{blog_id}")

    def add_comment(self, blog_id: int, content: str) -> dict:
        return self._request("POST", "/comments", json={"content": content, "blogId": blog_id})

    def update_comment(self, comment_id: int, content: str) -> dict:
        return self._request("PUT", f"/comments/{comment_id}", json={"content": content})

    def delete_comment(self, comment_id: int) -> dict:
        return self._request("DELETE", f"/comments/{comment_id}")

    def toggle_comment_like(self, comment: dict) -> dict:
        result = self._request("PUT", f"/comments/{comment['_id']}/like")
        self._patch_likes(comment, result)
        return result

    def _patch_likes(self, record: dict, result: dict) -> None:
        # В записи likes - список id, приводим его к ответу сервера
        if self.user is None:
            return
        user_id = self.user["_id"]
        likes = [uid for uid in record.get("likes", []) if uid != user_id]
        if result["isLiked"]:
            likes.append(user_id)
        record["likes"] = likes
        record["isLiked"] = result["isLiked"]

    # ==================
    # ПРОФИЛЬ
    # ==================

    def get_profile(self, user_id: int) -> dict:
        return self._request("GET", f"/users/{user_id}")

    def update_profile(self, **fields) -> dict:
        payload = {
            "username": fields.get("username"),
            "email": fields.get("email"),
            "bio": fields.get("bio"),
            "profilePicture": fields.get("profile_picture"),
        }
        payload = {key: value for key, value in payload.items() if value is not None}
        updated = self._request("PUT", "/users/profile", json=payload)
        self.update_user(updated)
        return updated

    def change_password(self, current_password: str, new_password: str) -> dict:
        return self._request(
            "PUT",
            "/users/password",
            json={"currentPassword": current_password, "newPassword": new_password},
        )
