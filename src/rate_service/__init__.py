# 💱 rate_service/__init__.py
"""
💱 Сервіс конвертації валют поверх курсів Monobank.

🔹 Стійкий конвеєр отримання курсів: circuit breaker → backoff retrier → HTTP.
🔹 TTL-кеш знімків курсів і готових результатів конвертації.
🔹 Розвʼязання курсу (прямий / синтетичний крос) та напрямковий вибір buy/sell/cross.
"""

__version__ = "1.0.0"
