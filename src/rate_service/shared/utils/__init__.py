# 🧰 rate_service/shared/utils/__init__.py
"""
🧰 Пакет узгоджених утиліт.

🔹 Експортує єдину схему логування та хелпер дочірніх логерів.
"""

from __future__ import annotations

# 🔠 Логування
from .logger import (
    LOG_NAME,
    get_logger,
    init_logging,
    init_logging_from_config,
)

__all__ = [
    "LOG_NAME",
    "get_logger",
    "init_logging",
    "init_logging_from_config",
]
