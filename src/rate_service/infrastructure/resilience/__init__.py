# 🛡️ rate_service/infrastructure/resilience/__init__.py
"""
🛡️ Стійкість викликів до зовнішнього провайдера.

🔹 `BackoffRetrier` - повтори з експоненційною паузою, без повторів на 4xx.
🔹 `CircuitBreaker` - відсікає виклики до провайдера після серії невдач.
"""

from .backoff_retrier import BackoffRetrier
from .circuit_breaker import BreakerSnapshot, CircuitBreaker, CircuitState

__all__ = ["BackoffRetrier", "BreakerSnapshot", "CircuitBreaker", "CircuitState"]
