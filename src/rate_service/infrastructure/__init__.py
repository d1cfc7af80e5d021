# 🏗️ rate_service/infrastructure/__init__.py
"""🏗️ Інфраструктурний шар: кеш-сховища, стійкість викликів, інтеграція з Monobank."""
