# ⚙️ config_service.py
"""
⚙️ config_service.py — Сервіс для доступу до статичної конфігурації рушія.

🔹 Клас `ConfigService`:
- Завантажує конфігурацію з config.yaml, config.json та .env (змінні середовища мають пріоритет).
- Надає єдиний метод .get() для доступу до будь-якого параметра за ключем з крапками.
- Працює як Singleton.
"""

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv              # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import os                                   # 📁 Доступ до змінних середовища
import json                                 # 📄 Робота з JSON-файлами
import logging                              # 🧾 Логування
from pathlib import Path                    # 📁 Побудова шляху до файлів
from typing import Any, Dict, Optional      # 🧩 Типізація

logger = logging.getLogger("lessoncart.config.config_service")

# 🔐 Змінна середовища → ключ конфігу
ENV_KEYS: Dict[str, str] = {
    "LESSONS_API_URL": "api.base_url",
    "LESSONS_API_TIMEOUT": "api.timeout_sec",
    "LESSONCART_LOG_LEVEL": "logging.level",
}


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Надає доступ до всіх статичних конфігураційних параметрів проєкту.
    Працює як Singleton — конфігурація зчитується лише один раз.
    """

    _instance: Optional["ConfigService"] = None   # 🧩 Singleton-екземпляр
    _config: Dict[str, Any]                       # 📦 Обʼєднана конфігурація зі всіх джерел

    config_dir: Path = Path(__file__).parent      # 📂 Де шукати config.yaml / config.json

    def __new__(cls):
        # ✅ Патерн Singleton: створюємо лише один екземпляр
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._config = {}
            instance._load_all_configs()  # 🔄 Завантаження конфігурації під час першого виклику
            cls._instance = instance
            logger.debug("🔄 Singleton ConfigService створено і конфігурація завантажена")
        else:
            logger.debug("📦 Використовується існуючий екземпляр ConfigService")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """🧹 Скидає Singleton (наступний виклик перечитає всі джерела)."""
        cls._instance = None

    def _load_all_configs(self):
        """
        📥 Завантажує всі джерела конфігурації в один словник.
        Пріоритет (від нижчого до вищого): config.yaml → config.json → .env/оточення
        """

        # --- 1. YAML-файл ---
        try:
            yaml_path = self.config_dir / "config.yaml"
            logger.debug("📘 Завантаження %s", yaml_path)
            with open(yaml_path, "r", encoding="utf-8") as f:
                self._deep_update(self._config, yaml.safe_load(f) or {})
        except (FileNotFoundError, yaml.YAMLError) as e:
            logger.warning(f"⚠️ Не вдалося завантажити config.yaml: {e}")

        # --- 2. JSON-файл (опційний) ---
        json_path = self.config_dir / "config.json"
        if json_path.exists():
            try:
                logger.debug("📄 Завантаження %s", json_path)
                with open(json_path, "r", encoding="utf-8") as f:
                    self._deep_update(self._config, json.load(f))
            except json.JSONDecodeError as e:
                logger.warning(f"⚠️ Не вдалося завантажити config.json: {e}")

        # --- 3. .env змінні ---
        logger.debug("🔐 Завантаження змінних з .env")
        load_dotenv()  # 🔐 Ініціалізує змінні середовища з файлу .env
        env_vars = {key: os.getenv(env) for env, key in ENV_KEYS.items() if os.getenv(env)}
        # 🔁 Перетворюємо крапкові ключі в словник та обʼєднуємо з config
        self._deep_update(self._config, self._unflatten_dict(env_vars))

        logger.info("✅ Конфігурацію успішно завантажено.")
        logger.debug(f"🔍 Обʼєднаний словник конфігурації: {self._config}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        🔑 Отримує значення конфігурації за ключем (наприклад: 'api.base_url').

        Args:
            key (str): Ключ у форматі з крапкою.
            default (Any): Значення за замовчуванням, якщо ключ не знайдено.

        Returns:
            Any: Значення параметра або default.
        """
        keys = key.split('.')                     # ⛓️ Розбиваємо ключ за крапкою
        value: Any = self._config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]                 # 🔎 Переходимо глибше в структуру
            else:
                logger.debug(f"❓ Ключ '{key}' не знайдено, повертаємо значення за замовчуванням")
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """✍️ Перевизначає значення в памʼяті (тести, ручне налаштування)."""
        self._deep_update(self._config, self._unflatten_dict({key: value}))

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ КОНФІГІВ
    # ===============================

    def _unflatten_dict(self, d: Dict[str, Any]) -> Dict[str, Any]:
        """
        🔁 Перетворює ключі з крапками в ієрархічний словник.
        'api.base_url' → {'api': {'base_url': ...}}
        """
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split('.')                   # 🧩 Розбиваємо ключ на частини
            d_ref = result
            for part in parts[:-1]:                  # 🔁 Ітеруємось по вкладеності
                if part not in d_ref:
                    d_ref[part] = {}
                d_ref = d_ref[part]
            d_ref[parts[-1]] = value                 # 🧷 Вставляємо значення у найглибший рівень
        return result

    def _deep_update(self, source: Dict, overrides: Dict):
        """
        🔁 Рекурсивно обʼєднує два словника (оновлення значень).
        Якщо значення — словник, обʼєднує його глибоко.
        """
        for key, value in overrides.items():
            if (
                isinstance(value, dict) and
                key in source and
                isinstance(source[key], dict)
            ):
                self._deep_update(source[key], value)  # 🔁 Глибоке обʼєднання
            else:
                source[key] = value                    # 🧩 Перезапис простого значення
