# 📚 lessoncart/infrastructure/catalog/catalog_store.py
"""
📚 CatalogStore — поточний знімок каталогу уроків на клієнті.

🔹 `load_all()` / `search()` повністю замінюють список уроків даними сервера.
🔹 Збій завантаження лише логується: попередній список лишається на місці.
🔹 Результат пошуку авторитетний — може перезаписати локально зменшені `space`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логи каталогу
from typing import List, Optional                                   # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from lessoncart.domain.lessons.entities import Lesson, LessonId
from lessoncart.errors.custom_errors import FetchFailure
from lessoncart.infrastructure.api.lessons_api_client import LessonsApiClient
from lessoncart.shared.metrics import CATALOG_FETCHES
from lessoncart.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.infrastructure.catalog")


class CatalogStore:
    """📚 Тримає список уроків і оновлює його з API."""

    def __init__(self, api: LessonsApiClient, lessons: Optional[List[Lesson]] = None) -> None:
        self._api = api                                             # 🌐 Клієнт бекенду
        self._lessons: List[Lesson] = list(lessons or [])           # 📋 Поточний знімок каталогу

    @property
    def lessons(self) -> List[Lesson]:
        """Копія списку (самі уроки — ті ж обʼєкти, що бачить кошик)."""
        return list(self._lessons)

    def __len__(self) -> int:
        return len(self._lessons)

    def find(self, lesson_id: LessonId) -> Optional[Lesson]:
        """Перший урок із заданим id або None."""
        for lesson in self._lessons:
            if lesson.id == lesson_id:
                return lesson
        return None

    def replace(self, lessons: List[Lesson]) -> None:
        self._lessons = list(lessons)

    async def load_all(self) -> bool:
        """
        GET /lessons і заміна списку.

        Returns:
            True — список оновлено; False — збій (попередній список лишився).
        """
        try:
            lessons = await self._api.fetch_lessons()
        except FetchFailure as exc:
            CATALOG_FETCHES.labels(operation="load", outcome="failure").inc()
            logger.error("❌ Error fetching lessons: %s", exc, extra=exc.to_log_extra())
            return False
        self.replace(lessons)
        CATALOG_FETCHES.labels(operation="load", outcome="success").inc()
        return True

    async def search(self, query: Optional[str]) -> bool:
        """
        Серверний пошук; порожній запит → повне завантаження.
        """
        text = (query or "").strip()
        if not text:
            logger.debug("🔎 Порожній запит — повне завантаження каталогу")
            return await self.load_all()
        try:
            lessons = await self._api.search_lessons(text)
        except FetchFailure as exc:
            CATALOG_FETCHES.labels(operation="search", outcome="failure").inc()
            logger.error("❌ Error during search q=%r: %s", text, exc, extra=exc.to_log_extra())
            return False
        self.replace(lessons)
        CATALOG_FETCHES.labels(operation="search", outcome="success").inc()
        logger.info("🔎 Пошук q=%r → %d уроків", text, len(lessons))
        return True


__all__ = ["CatalogStore"]
