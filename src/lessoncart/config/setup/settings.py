# ⚙️ lessoncart/config/setup/settings.py
"""
⚙️ Типобезпечні налаштування рушія, зібрані з `ConfigService`.

🔹 Ключі `api.*`, `catalog.*`, `orders.*` мапляться на frozen-dataclass.
🔹 Невалідні числа замінюються дефолтами з попередженням у лог.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                         # 🧾 Логування відкатів до дефолтів
from dataclasses import dataclass, field                               # 🧱 Імутабельні налаштування
from typing import TYPE_CHECKING, Any                                  # 🧮 Допоміжні типи

# 🧩 Внутрішні модулі проєкту
from lessoncart.domain.lessons.sorting import SortDirection, SortField
from lessoncart.infrastructure.orders.order_submission import SubmissionSettings
from lessoncart.shared.utils.logger import LOG_NAME

if TYPE_CHECKING:
    from lessoncart.config.config_service import ConfigService

logger = logging.getLogger(f"{LOG_NAME}.config.settings")

DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_TIMEOUT_SEC = 10.0


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _float_or_default(value: Any, default: float, key: str) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("⚠️ Некоректне значення %s=%r → %s", key, value, default)
        return default


def _int_or_default(value: Any, default: int, key: str) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("⚠️ Некоректне значення %s=%r → %s", key, value, default)
        return default


def _sort_field(value: Any) -> SortField:
    try:
        return SortField(str(value).strip().lower())
    except ValueError:
        logger.warning("⚠️ Невідоме поле сортування %r → topic", value)
        return SortField.TOPIC


# ================================
# 🏛️ НАЛАШТУВАННЯ
# ================================
@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Усі параметри, потрібні контейнеру для побудови рушія."""

    api_base_url: str = DEFAULT_BASE_URL                               # 🌐 Корінь REST-бекенду
    api_timeout_sec: float = DEFAULT_TIMEOUT_SEC                       # ⏱️ Таймаут кожного запиту
    default_sort_by: SortField = SortField.TOPIC                       # 🔀 Початкове поле сортування
    default_sort_order: SortDirection = SortDirection.ASC              # ↕️ Початковий напрямок
    submission: SubmissionSettings = field(default_factory=SubmissionSettings)

    @classmethod
    def from_config(cls, config: "ConfigService") -> "EngineSettings":
        submission = SubmissionSettings(
            message_ttl_sec=_float_or_default(
                config.get("orders.message_ttl_sec"), 3.0, "orders.message_ttl_sec"
            ),
            inventory_retry_attempts=_int_or_default(
                config.get("orders.inventory_retry_attempts"), 1, "orders.inventory_retry_attempts"
            ),
            inventory_retry_delay_sec=_float_or_default(
                config.get("orders.inventory_retry_delay_sec"), 0.5, "orders.inventory_retry_delay_sec"
            ),
            refresh_after_commit=bool(config.get("orders.refresh_after_commit", True)),
        )
        settings = cls(
            api_base_url=str(config.get("api.base_url") or DEFAULT_BASE_URL),
            api_timeout_sec=_float_or_default(
                config.get("api.timeout_sec"), DEFAULT_TIMEOUT_SEC, "api.timeout_sec"
            ),
            default_sort_by=_sort_field(config.get("catalog.default_sort_by", "topic")),
            default_sort_order=SortDirection.from_str(config.get("catalog.default_sort_order", "asc")),
            submission=submission,
        )
        logger.debug("⚙️ EngineSettings зібрано: %s", settings)
        return settings


__all__ = ["EngineSettings"]
