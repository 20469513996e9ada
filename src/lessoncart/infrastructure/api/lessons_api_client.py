# 🌐 lessoncart/infrastructure/api/lessons_api_client.py
"""
🌐 LessonsApiClient — асинхронний клієнт REST-бекенду уроків.

🎯 Призначення:
    • GET /lessons, GET /search?q=… — список уроків;
    • POST /orders — створення замовлення;
    • PUT /lessons/{id} — запис нового залишку місць;
    • побудова URL зображень /images/{name} (без завантаження).

⚙️ Нотатки:
    • кожен запит має явний таймаут (зависання не блокує координатор назавжди);
    • httpx-винятки конвертуються у доменні через стратегії з `lessoncart.errors`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx                                                        # 🌐 HTTP-клієнт

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логи клієнта
from typing import Any, List, Optional                              # 📐 Типізація
from urllib.parse import quote                                      # 🔤 Екранування сегментів шляху

# 🧩 Внутрішні модулі проєкту
from lessoncart.domain.lessons.entities import Lesson, LessonId, Order
from lessoncart.errors.custom_errors import FetchFailure
from lessoncart.errors.strategies import (
    IErrorHandlingStrategy,
    fetch_strategy,
    inventory_strategy,
    order_strategy,
)
from lessoncart.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.infrastructure.api")


class LessonsApiClient:
    """
    🌐 Тонкий async-клієнт API уроків поверх `httpx.AsyncClient`.
    """

    LESSONS_PATH = "/lessons"
    SEARCH_PATH = "/search"
    ORDERS_PATH = "/orders"
    IMAGES_PATH = "/images"

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not base_url or not isinstance(base_url, str):
            raise ValueError("Config 'api.base_url' is required and must be str.")
        self._base_url = base_url.rstrip("/")                       # 🌐 Базовий URL без кінцевого слеша
        self._timeout = timeout                                     # ⏱️ Таймаут кожного запиту
        self._transport = transport                                 # 🔌 Кастомний транспорт (тести/проксі)
        self._client: Optional[httpx.AsyncClient] = None            # 🌐 Ледачо створений клієнт
        logger.debug("⚙️ LessonsApiClient config: url=%s timeout=%s", self._base_url, self._timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    # ================================
    # ♻️ ЖИТТЄВИЙ ЦИКЛ
    # ================================
    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Закриває HTTP-клієнт (graceful shutdown)."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.info("🔌 HTTP-клієнт API уроків закрито.")

    async def __aenter__(self) -> "LessonsApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # ================================
    # 📥 GET
    # ================================
    async def fetch_lessons(self) -> List[Lesson]:
        """GET /lessons → повний список уроків."""
        data = await self._request("GET", self.LESSONS_PATH, strategy=fetch_strategy())
        return self._parse_lessons(data, self.LESSONS_PATH)

    async def search_lessons(self, query: str) -> List[Lesson]:
        """GET /search?q=<query> → відфільтрований на сервері список."""
        data = await self._request(
            "GET",
            self.SEARCH_PATH,
            strategy=fetch_strategy(),
            params={"q": query},
        )
        return self._parse_lessons(data, self.SEARCH_PATH)

    # ================================
    # 📤 POST / PUT
    # ================================
    async def create_order(self, order: Order) -> Any:
        """POST /orders. Повертає тіло підтвердження (або None)."""
        payload = order.to_payload()
        logger.debug("📤 POST %s payload=%s", self.ORDERS_PATH, payload)
        return await self._request("POST", self.ORDERS_PATH, strategy=order_strategy(), json=payload)

    async def update_space(self, lesson_id: LessonId, space: int) -> Any:
        """PUT /lessons/{id} з `{space}`."""
        path = f"{self.LESSONS_PATH}/{quote(str(lesson_id), safe='')}"
        logger.debug("📤 PUT %s space=%s", path, space)
        return await self._request(
            "PUT",
            path,
            strategy=inventory_strategy(lesson_id),
            json={"space": int(space)},
        )

    def image_url(self, image_name: str) -> str:
        """URL статичного зображення уроку (без запиту)."""
        return f"{self._base_url}{self.IMAGES_PATH}/{quote(image_name or '')}"

    # ================================
    # 🔒 ВНУТРІШНЯ ЛОГІКА
    # ================================
    async def _request(
        self,
        method: str,
        path: str,
        *,
        strategy: IErrorHandlingStrategy,
        **kwargs: Any,
    ) -> Any:
        """
        Виконує запит і повертає розпарсений JSON (None для порожнього тіла).

        Будь-який мережевий збій або не-2xx статус стає доменним винятком.
        """
        client = self._get_client()
        try:
            response = await client.request(method, path, **kwargs)
            response.raise_for_status()                             # ❗ Підіймає виключення при не-2xx статусах
        except httpx.HTTPError as exc:
            error = strategy.handle(exc)
            if error is None:
                raise
            logger.debug("🌐 %s %s → %s", method, path, type(error).__name__, extra=error.to_log_extra())
            raise error from exc

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            if method == "GET":
                raise FetchFailure(
                    "Response body is not valid JSON.",
                    url=str(response.request.url),
                    status_code=response.status_code,
                    details=str(exc),
                ) from exc
            logger.debug("ℹ️ %s %s повернув не-JSON тіло, ігноруємо", method, path)
            return None

    @staticmethod
    def _parse_lessons(data: Any, path: str) -> List[Lesson]:
        if not isinstance(data, list):
            raise FetchFailure(
                f"Expected a JSON array from {path}, got {type(data).__name__}.",
                url=path,
            )
        lessons: List[Lesson] = []
        for raw in data:
            if not isinstance(raw, dict):
                logger.warning("⚠️ Пропущено запис не-обʼєкт у %s: %r", path, raw)
                continue
            try:
                lessons.append(Lesson.from_dict(raw))
            except ValueError as exc:
                logger.warning("⚠️ Пропущено некоректний урок у %s: %s", path, exc)
        logger.info("✅ Отримано %d уроків з %s", len(lessons), path)
        return lessons


__all__ = ["LessonsApiClient"]
