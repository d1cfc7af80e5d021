# 🛠️ rate_service/services/__init__.py
"""🛠️ Прикладні сервіси (оркестрація доменних алгоритмів та інфраструктури)."""

from .conversion_service import ConversionService

__all__ = ["ConversionService"]
