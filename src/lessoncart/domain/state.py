# 🗂️ lessoncart/domain/state.py
"""
🗂️ Явний знімок стану рушія, який бачить UI-шар.

UI ніколи не мутує поля напряму: читає `EngineState` або підписується на зміни.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass                                     # 🧱 Незмінний знімок
from typing import Callable, Optional, Tuple                          # 📐 Типізація

# 🧩 Внутрішні модулі
from lessoncart.domain.lessons.entities import CartEntry, Checkout, Lesson
from lessoncart.domain.lessons.sorting import SortDirection, SortField
from lessoncart.domain.orders.status import OrderMessage, SubmissionResult, SubmissionStatus


@dataclass(frozen=True, slots=True)
class EngineState:
    """📸 Стан рушія на момент останньої зміни."""

    lessons: Tuple[Lesson, ...]                                       # 📚 Копії уроків каталогу в порядку сервера
    cart: Tuple[CartEntry, ...]                                       # 🛒 Записи кошика
    checkout: Checkout                                                # 📝 Форма оформлення
    sort_by: SortField                                                # 🔀 Поле сортування
    sort_order: SortDirection                                         # ↕️ Напрямок
    search_query: str                                                 # 🔎 Останній пошуковий запит
    show_cart: bool                                                   # 👀 Чи відкритий вигляд кошика
    status: SubmissionStatus                                          # 🧾 Стан оформлення
    message: Optional[OrderMessage]                                   # 💬 Повідомлення для UI
    last_result: Optional[SubmissionResult]                           # 📦 Підсумок останньої спроби


StateListener = Callable[[EngineState], None]


__all__ = ["EngineState", "StateListener"]
