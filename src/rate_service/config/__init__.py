# ⚙️ rate_service/config/__init__.py
"""
⚙️ Пакет Config - централізована конфігурація та збирання залежностей.

Цей пакет відповідає за:
- Завантаження налаштувань (`config.yaml`, .env, змінні середовища).
- Валідацію параметрів ланцюжка курсів (`ConverterSettings`).
- Створення та звʼязування сервісів через DI-контейнер (`setup.container`).
"""

from .config_service import ConfigService
from .settings import ConverterSettings

__all__ = ["ConfigService", "ConverterSettings"]
