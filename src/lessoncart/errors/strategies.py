# 📜 lessoncart/errors/strategies.py
"""
📜 Стратегії конвертації httpx-винятків у доменні `AppError`.

🔹 Кожна стратегія відповідає за одну операцію API (GET каталогу, POST замовлення, PUT місць).
🔹 Клієнт API не знає деталей httpx-ієрархії — лише викликає `handle()`.
🔹 Невідомі винятки стратегія не чіпає (повертає None), їх прокидає вище клієнт.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx															# 🌐 HTTP-клієнт (винятки)

# 🔠 Системні імпорти
import logging															# 🧾 Логування стратегій
from typing import Any, Dict, Optional, Protocol, Type					# 📐 Типи

# 🧩 Внутрішні модулі проєкту
from lessoncart.shared.utils.logger import LOG_NAME
from .custom_errors import (
    AppError,
    FetchFailure,
    InventoryUpdateFailure,
    OrderCreationFailure,
)


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.errors.strategies")


# ================================
# 💬 ТЕКСТИ ПОМИЛОК
# ================================
ERROR_HTTP_TIMEOUT = "Сервер не відповів вчасно."
ERROR_HTTP_CONNECTION = "Немає зʼєднання з сервером."
ERROR_HTTP_STATUS = "Сервер повернув помилку {status_code}."
ERROR_HTTP_GENERAL = "Помилка мережевого запиту."


# ================================
# 🧠 КОНТРАКТ СТРАТЕГІЙ
# ================================
class IErrorHandlingStrategy(Protocol):
    """🧠 Контракт, що визначає єдиний метод `handle`."""

    def handle(self, error: Exception) -> Optional[AppError]:
        """Вертає `AppError`, якщо виняток розпізнано, або None."""


# ================================
# 🌐 HTTPX-СТРАТЕГІЯ
# ================================
class HttpxErrorStrategy(IErrorHandlingStrategy):
    """🌐 Перетворює httpx-помилки на заданий тип `AppError`."""

    def __init__(self, error_cls: Type[AppError], **context: Any) -> None:
        self._error_cls = error_cls									# 🏷️ Який доменний виняток будувати
        self._context: Dict[str, Any] = context						# 🧩 Додаткові kwargs (напр. lesson_id)

    def handle(self, error: Exception) -> Optional[AppError]:
        if isinstance(error, httpx.TimeoutException):					# ⏱️ Будь-який таймаут запиту
            url = _url_of(error)
            logger.debug("⏱️ httpx timeout", extra={"url": url})
            return self._build(ERROR_HTTP_TIMEOUT, url=url, details=str(error))

        if isinstance(error, httpx.ConnectError):						# 🌐 Не вдалося підʼєднатися
            url = _url_of(error)
            logger.debug("🌐 httpx connect error", extra={"url": url})
            return self._build(ERROR_HTTP_CONNECTION, url=url, details=str(error))

        if isinstance(error, httpx.HTTPStatusError):					# 🔢 Неочікуваний статус
            url = _url_of(error)
            status = error.response.status_code
            logger.debug("🔢 httpx status error", extra={"url": url, "status": status})
            return self._build(
                ERROR_HTTP_STATUS.format(status_code=status),
                url=url,
                status_code=status,
                details=str(error),
            )

        if isinstance(error, httpx.HTTPError):							# 🌐 Решта транспортних збоїв
            url = _url_of(error)
            logger.debug("🌐 httpx general error", extra={"url": url})
            return self._build(ERROR_HTTP_GENERAL, url=url, details=str(error))

        return None

    def _build(self, message: str, **kwargs: Any) -> AppError:
        return self._error_cls(message, **kwargs, **self._context)


def _url_of(error: Exception) -> str:
    """Дістає URL запиту з httpx-винятку (або "N/A")."""
    try:
        return str(error.request.url)  # type: ignore[attr-defined]
    except (AttributeError, RuntimeError):							# 🕳️ httpx кидає RuntimeError, якщо request не задано
        return "N/A"


# ================================
# 🏭 ГОТОВІ СТРАТЕГІЇ
# ================================
def fetch_strategy() -> HttpxErrorStrategy:
    """📥 Стратегія для GET /lessons та GET /search."""
    return HttpxErrorStrategy(FetchFailure)


def order_strategy() -> HttpxErrorStrategy:
    """🧾 Стратегія для POST /orders."""
    return HttpxErrorStrategy(OrderCreationFailure)


def inventory_strategy(lesson_id: Any) -> HttpxErrorStrategy:
    """📦 Стратегія для PUT /lessons/{id}."""
    return HttpxErrorStrategy(InventoryUpdateFailure, lesson_id=lesson_id)


__all__ = [
    "IErrorHandlingStrategy",
    "HttpxErrorStrategy",
    "fetch_strategy",
    "order_strategy",
    "inventory_strategy",
    "ERROR_HTTP_TIMEOUT",
    "ERROR_HTTP_CONNECTION",
    "ERROR_HTTP_STATUS",
    "ERROR_HTTP_GENERAL",
]
