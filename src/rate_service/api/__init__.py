# 🌐 rate_service/api/__init__.py
"""🌐 HTTP-шар (FastAPI) поверх `ConversionService`."""

from .app import create_app

__all__ = ["create_app"]
