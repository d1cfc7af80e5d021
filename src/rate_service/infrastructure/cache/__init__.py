# 🗄️ rate_service/infrastructure/cache/__init__.py
"""
🗄️ Кеш-сховища з TTL, що реалізують `ICacheStore`.

🔹 `InMemoryCacheStore` - процесний кеш (дефолт і тести).
🔹 `RedisCacheStore` - мережеве сховище для кількох інстансів сервісу.
"""

from .memory_cache import InMemoryCacheStore
from .redis_cache import RedisCacheStore

__all__ = ["InMemoryCacheStore", "RedisCacheStore"]
