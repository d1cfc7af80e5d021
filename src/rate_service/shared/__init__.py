# 🧰 rate_service/shared/__init__.py
"""🧰 Спільні утиліти сервісу (логування)."""
