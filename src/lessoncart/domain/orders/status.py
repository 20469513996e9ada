# 🧩 lessoncart/domain/orders/status.py
"""
🧩 Стани надсилання замовлення та повідомлення для UI.

Машина станів:
    IDLE → SUBMITTING → {COMMITTED, FAILED} → (підтвердження) → IDLE
"""

from __future__ import annotations

# 🔠 Стандартні імпорти
from dataclasses import dataclass, field                              # 🧱 DTO результату
from enum import Enum, unique                                         # 🧱 Стани та типи повідомлень
from typing import Optional, Tuple                                    # 📐 Типізація

# 🧩 Внутрішні модулі
from lessoncart.domain.lessons.entities import LessonId, Order


@unique
class SubmissionStatus(str, Enum):
    """Стан координатора замовлень."""
    IDLE = "idle"                    # 💤 Нічого не надсилається, результатів немає
    SUBMITTING = "submitting"        # ⏳ Триває POST або PUT-фаза
    COMMITTED = "committed"          # ✅ Замовлення створено, кошик очищено
    FAILED = "failed"                # ❌ POST не вдався, стан не змінено

    def __str__(self) -> str:
        return self.value

    @property
    def is_terminal(self) -> bool:
        """True для COMMITTED/FAILED — результат очікує підтвердження."""
        return self in (SubmissionStatus.COMMITTED, SubmissionStatus.FAILED)


@unique
class MessageKind(str, Enum):
    """Тип повідомлення (мапиться на стилі alert-* в UI)."""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class OrderMessage:
    """💬 Повідомлення про хід/результат надсилання."""

    kind: MessageKind
    text: str


# ================================
# 💬 ТЕКСТИ
# ================================
MSG_SUBMITTING = OrderMessage(MessageKind.INFO, "Submitting order...")
MSG_SUCCESS = OrderMessage(MessageKind.SUCCESS, "✅ Order submitted successfully!")
MSG_PARTIAL = OrderMessage(
    MessageKind.WARNING,
    "⚠️ Order submitted, but some lesson spaces could not be updated.",
)
MSG_FAILURE = OrderMessage(MessageKind.DANGER, "❌ An error occurred. Please try again.")


@dataclass(frozen=True, slots=True)
class SubmissionResult:
    """📦 Підсумок однієї спроби надсилання."""

    status: SubmissionStatus
    order: Optional[Order] = None
    failed_inventory_ids: Tuple[LessonId, ...] = field(default_factory=tuple)
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status is SubmissionStatus.COMMITTED

    @property
    def inventory_synced(self) -> bool:
        return self.succeeded and not self.failed_inventory_ids

    @property
    def message(self) -> OrderMessage:
        if self.status is SubmissionStatus.FAILED:
            return MSG_FAILURE
        if self.failed_inventory_ids:
            return MSG_PARTIAL
        return MSG_SUCCESS


__all__ = [
    "SubmissionStatus",
    "MessageKind",
    "OrderMessage",
    "SubmissionResult",
    "MSG_SUBMITTING",
    "MSG_SUCCESS",
    "MSG_PARTIAL",
    "MSG_FAILURE",
]
