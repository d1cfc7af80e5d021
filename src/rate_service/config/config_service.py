# ⚙️ rate_service/config/config_service.py
"""
⚙️ config_service.py - Сервіс для доступу до статичної конфігурації.

🔹 Клас `ConfigService`:
- Завантажує `config.yaml` поруч із модулем, потім перекриває значення змінними середовища (.env).
- Надає єдиний метод .get() для доступу до будь-якого параметра за крапковим ключем.
- Працює як Singleton.
"""

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv               # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import os                                    # 📁 Доступ до змінних середовища
import logging                               # 🧾 Логування
from pathlib import Path                     # 📁 Побудова шляху до файлів
from typing import Any, Dict, Optional       # 🧩 Типізація

logger = logging.getLogger("rate_service.config")

# 🔐 Змінна середовища → крапковий ключ конфігурації
ENV_KEYS: Dict[str, str] = {
    "MONOBANK_API_URL": "currency_api.url",
    "MONOBANK_TIMEOUT_SEC": "currency_api.timeout_sec",
    "CACHE_TTL": "cache.ttl_sec",
    "CACHE_BACKEND": "cache.backend",
    "REDIS_HOST": "redis.host",
    "REDIS_PORT": "redis.port",
    "REDIS_DB": "redis.db",
    "CIRCUIT_BREAKER_THRESHOLD": "circuit_breaker.threshold",
    "CIRCUIT_BREAKER_TIMEOUT": "circuit_breaker.timeout_ms",
    "RETRY_ATTEMPTS": "retry.max_attempts",
    "RETRY_BASE_DELAY_MS": "retry.base_delay_ms",
    "LOG_LEVEL": "logging.level",
    "METRICS_PORT": "metrics.port",
}

DEFAULT_YAML_PATH = Path(__file__).parent / "config.yaml"


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Надає доступ до всіх конфігураційних параметрів сервісу.
    Працює як Singleton - конфігурація зчитується лише один раз.
    """

    _instance: Optional["ConfigService"] = None
    _config: Dict[str, Any]

    def __new__(cls, yaml_path: Optional[Path] = None):
        # ✅ Патерн Singleton: створюємо лише один екземпляр
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._config = {}
            instance._load_all_configs(Path(yaml_path) if yaml_path else DEFAULT_YAML_PATH)
            cls._instance = instance
            logger.debug("🔄 Singleton ConfigService створено і конфігурація завантажена")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """🧪 Скидає singleton (потрібно тестам та перезавантаженню конфігів)."""
        cls._instance = None

    def _load_all_configs(self, yaml_path: Path) -> None:
        """
        📥 Завантажує всі джерела конфігурації в один словник.
        Пріоритет (від слабшого до сильнішого): config.yaml → .env / змінні середовища.
        """
        # --- 1. YAML-файл ---
        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                self._deep_update(self._config, yaml.safe_load(f) or {})
        except (FileNotFoundError, yaml.YAMLError) as e:
            logger.warning("⚠️ Не вдалося завантажити %s: %s", yaml_path.name, e)

        # --- 2. .env змінні ---
        load_dotenv()
        env_vars = {key: os.getenv(env) for env, key in ENV_KEYS.items()}
        env_vars = {key: value for key, value in env_vars.items() if value not in (None, "")}
        self._deep_update(self._config, self._unflatten_dict(env_vars))

        logger.info("✅ Конфігурацію успішно завантажено.")
        logger.debug("🔍 Обʼєднаний словник конфігурації: %s", self._config)

    def get(self, key: str, default: Any = None) -> Any:
        """
        🔑 Отримує значення конфігурації за ключем (наприклад: 'cache.ttl_sec').

        Args:
            key (str): Ключ у форматі з крапкою.
            default (Any): Значення за замовчуванням, якщо ключ не знайдено.

        Returns:
            Any: Значення параметра або default.
        """
        value: Any = self._config
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._config)

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ КОНФІГІВ
    # ===============================
    @staticmethod
    def _unflatten_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        """
        🔁 Перетворює ключі з крапками в ієрархічний словник.
        'cache.ttl_sec' → {'cache': {'ttl_sec': ...}}
        """
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split(".")
            d_ref = result
            for part in parts[:-1]:
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value
        return result

    def _deep_update(self, source: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """🔁 Рекурсивно обʼєднує два словники (оновлення значень)."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(source.get(key), dict):
                self._deep_update(source[key], value)
            else:
                source[key] = value
