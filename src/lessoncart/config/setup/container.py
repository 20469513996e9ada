# 📦 lessoncart/config/setup/container.py
"""
📦 Контейнер залежностей рушія кошика уроків.

🔹 Читає конфіг, ініціалізує логування, будує API-клієнт і рушій у правильному порядку.
🔹 Дає єдину точку доступу до налаштувань і готового `LessonCartEngine`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx                                                             # 🔌 Тип транспорту для підміни в тестах

# 🔠 Системні імпорти
import logging                                                           # 🧾 Базові засоби логування
from typing import Optional                                              # 🧮 Допоміжні типи

# 🧩 Внутрішні модулі проєкту
from lessoncart.config.config_service import ConfigService               # 🗂️ Джерело конфігів
from lessoncart.config.setup.settings import EngineSettings              # ⚙️ Типізовані налаштування
from lessoncart.engine import LessonCartEngine                           # 🎛️ Фасад рушія
from lessoncart.infrastructure.api.lessons_api_client import LessonsApiClient  # 🌐 REST-клієнт
from lessoncart.shared.utils.logger import LOG_NAME, init_logging_from_config  # 🧾 Конфіг логування

logger = logging.getLogger(LOG_NAME)                                     # 🧾 Модульний логер контейнера


class Container:
    """
    📦 Збирає сервіси рушія з конфігурації.
    """

    def __init__(
        self,
        config: Optional[ConfigService] = None,
        *,
        settings: Optional[EngineSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        init_logging: bool = True,
    ) -> None:
        self.config = config or ConfigService()                          # ⚙️ Singleton конфігів
        if init_logging:
            init_logging_from_config(self.config.get("logging", {}) or {})
        self.settings = settings or EngineSettings.from_config(self.config)
        self._transport = transport                                      # 🔌 Кастомний транспорт httpx
        logger.debug("📦 Container готовий | api=%s", self.settings.api_base_url)

    def build_api_client(self) -> LessonsApiClient:
        return LessonsApiClient(
            self.settings.api_base_url,
            timeout=self.settings.api_timeout_sec,
            transport=self._transport,
        )

    def build_engine(self) -> LessonCartEngine:
        engine = LessonCartEngine(
            self.build_api_client(),
            submission=self.settings.submission,
            sort_by=self.settings.default_sort_by,
            sort_order=self.settings.default_sort_order,
        )
        logger.info("🚀 LessonCartEngine зібрано")
        return engine


def build_engine(
    config: Optional[ConfigService] = None,
    *,
    settings: Optional[EngineSettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    init_logging: bool = True,
) -> LessonCartEngine:
    """Швидкий шлях: конфіг → логування → рушій."""
    container = Container(config, settings=settings, transport=transport, init_logging=init_logging)
    return container.build_engine()


__all__ = ["Container", "build_engine"]
