# 🧩 rate_service/config/setup/__init__.py
"""🧩 Збирання залежностей застосунку."""

from .container import Container, bootstrap_logging

__all__ = ["Container", "bootstrap_logging"]
