# blog_platform/utils/limiter.py

from slowapi import Limiter
from slowapi.util import get_remote_address

from blog_platform.config import settings

# Ограничитель по IP клиента; лимиты задаются декоратором на эндпоинтах
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.RATE_LIMIT_ENABLED,
)
