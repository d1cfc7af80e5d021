# 🚀 rate_service/__main__.py
"""
🚀 Точка входу: `python -m rate_service` або скрипт `rate-service`.

🔹 Піднімає uvicorn з FastAPI-застосунком; хост і порт - з ENV `HOST` / `PORT`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import uvicorn

# 🔠 Системні імпорти
import os

# 🧩 Внутрішні модулі проєкту
from rate_service.api import create_app


def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))
    uvicorn.run(create_app(), host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
