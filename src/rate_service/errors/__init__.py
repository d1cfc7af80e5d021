# 🚨 rate_service/errors/__init__.py
"""
🚨 Пакет помилок: доменна ієрархія та стратегії конвертації сторонніх винятків.
"""

from .custom_errors import (
    AppError,
    CircuitOpenError,
    ErrorCode,
    IncompleteRateDataError,
    InvalidInputError,
    RateNotFoundError,
    ServiceUnavailableError,
    UpstreamClientError,
    UpstreamError,
    UpstreamTransientError,
    UserVisibleError,
)
from .strategies import HttpxErrorStrategy, IErrorHandlingStrategy

__all__ = [
    "AppError",
    "CircuitOpenError",
    "ErrorCode",
    "HttpxErrorStrategy",
    "IErrorHandlingStrategy",
    "IncompleteRateDataError",
    "InvalidInputError",
    "RateNotFoundError",
    "ServiceUnavailableError",
    "UpstreamClientError",
    "UpstreamError",
    "UpstreamTransientError",
    "UserVisibleError",
]
