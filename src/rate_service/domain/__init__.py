# 🏛️ rate_service/domain/__init__.py
"""🏛️ Доменний шар: чисті моделі та алгоритми без I/O."""
