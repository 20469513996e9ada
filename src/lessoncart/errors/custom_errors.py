# 🚨 lessoncart/errors/custom_errors.py
"""
🚨 Ієрархія доменних винятків рушія кошика уроків.

🔹 `AppError` — база з `details` та `to_log_extra()` для структурованих логів.
🔹 `UserVisibleError` — текст можна показати користувачу без змін.
🔹 Окремі класи для збоїв GET (каталог), POST (замовлення) і PUT (залишки місць).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging														# 🧾 Логування створення винятків
from typing import Any, Dict, Optional								# 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from lessoncart.shared.utils.logger import LOG_NAME				# 🏷️ Префікс логерів


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.errors.custom_errors")		# 🧾 Локальний логер


# ================================
# ⚠️ КОДИ ПОМИЛОК
# ================================
class ErrorCode:
    """⚠️ Рядкові коди для логів і метрик."""

    FETCH = "fetch_failure"											# 📥 GET каталогу / пошуку
    ORDER_CREATION = "order_creation_failure"						# 🧾 POST замовлення
    INVENTORY_UPDATE = "inventory_update_failure"					# 📦 PUT залишку місць
    CHECKOUT = "checkout_validation"								# 📝 Невалідна форма оформлення
    IN_PROGRESS = "submission_in_progress"							# ⏳ Повторне надсилання
    CART_POSITION = "cart_position"									# 🛒 Некоректна позиція в кошику
    UNKNOWN = "unknown_error"										# ❓ Резервний код


# ================================
# 🧠 БАЗОВІ ВИНЯТКИ
# ================================
class AppError(Exception):
    """🧠 Базовий виняток застосунку."""

    code: str = ErrorCode.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        details: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message										# 💬 Основний текст
        self.details = details										# 🔍 Технічні подробиці
        self.url = url												# 🔗 URL запиту, якщо є
        self.status_code = status_code								# 🔢 HTTP-код, якщо є

    def to_log_extra(self) -> Dict[str, Any]:
        """📦 Формує словник для `logger.*(extra=...)`."""
        extra: Dict[str, Any] = {"error_code": self.code}
        if self.url:
            extra["url"] = self.url
        if self.status_code is not None:
            extra["status_code"] = self.status_code
        if self.details:
            extra["details"] = self.details
        return extra

    def __str__(self) -> str:
        return self.message


class UserVisibleError(AppError):
    """👀 Помилки, текст яких безпечно показувати користувачу."""


# ================================
# 🌐 МЕРЕЖЕВІ ЗБОЇ
# ================================
class FetchFailure(AppError):
    """📥 Збій GET-запиту каталогу (мережа, статус, некоректне тіло)."""

    code = ErrorCode.FETCH


class OrderCreationFailure(UserVisibleError):
    """🧾 Сервер не прийняв замовлення (POST)."""

    code = ErrorCode.ORDER_CREATION


class InventoryUpdateFailure(AppError):
    """📦 Не вдалося оновити залишок місць уроку (PUT)."""

    code = ErrorCode.INVENTORY_UPDATE

    def __init__(self, message: str, *, lesson_id: Any = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.lesson_id = lesson_id									# 🆔 Урок, залишок якого не синхронізовано

    def to_log_extra(self) -> Dict[str, Any]:
        extra = super().to_log_extra()
        extra["lesson_id"] = self.lesson_id
        return extra


# ================================
# 🛒 ЛОКАЛЬНІ ПОРУШЕННЯ
# ================================
class CheckoutValidationError(UserVisibleError):
    """📝 Форма оформлення невалідна або кошик порожній."""

    code = ErrorCode.CHECKOUT


class SubmissionInProgressError(UserVisibleError):
    """⏳ Попереднє замовлення ще надсилається."""

    code = ErrorCode.IN_PROGRESS


class CartPositionError(AppError, IndexError):
    """🛒 Позиція не існує або не відповідає переданому запису кошика."""

    code = ErrorCode.CART_POSITION

    def __init__(self, message: str, *, position: int) -> None:
        super().__init__(message)
        self.position = position
        logger.debug("🛒 CartPositionError created", extra={"position": position})


# ================================
# 📤 ПУБЛІЧНИЙ API
# ================================
__all__ = [
    "ErrorCode",
    "AppError",
    "UserVisibleError",
    "FetchFailure",
    "OrderCreationFailure",
    "InventoryUpdateFailure",
    "CheckoutValidationError",
    "SubmissionInProgressError",
    "CartPositionError",
]
