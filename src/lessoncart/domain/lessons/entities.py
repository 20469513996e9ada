# 📚 lessoncart/domain/lessons/entities.py
"""
📚 Доменні сутності каталогу уроків.

🔹 `Lesson` — запис каталогу; `space` змінюється локально при резервуванні.
🔹 `CartEntry` — незмінний знімок уроку на момент резервування однієї одиниці.
🔹 `Checkout` — стан форми оформлення (імʼя + телефон).
🔹 `OrderLine` / `Order` — похідне замовлення для POST /orders.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                        # 🧾 Логування парсингу
from dataclasses import dataclass, field                              # 🧱 DTO
from typing import Any, Dict, List, Mapping, Optional, Union          # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from lessoncart.shared.utils.logger import LOG_NAME


# ================================
# 🧾 ЛОГЕР МОДУЛЯ
# ================================
logger = logging.getLogger(f"{LOG_NAME}.domain.lessons.entities")


# ================================
# 🧾 ПУБЛІЧНІ ТИПИ (АЛІАСИ)
# ================================
LessonId = Union[str, int]                                            # 🆔 `_id` з бекенду (рядок або число)
Price = Union[int, float]                                             # 💰 Ціна в тих одиницях, що дає API


def _to_space(raw: Any, lesson_id: Any) -> int:
    """Приводить `space` до цілого ≥ 0 (невалідне → 0 з попередженням)."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning("⚠️ Невалідне space=%r для уроку %s → 0", raw, lesson_id)
        return 0
    if value < 0:
        logger.warning("⚠️ Відʼємне space=%s для уроку %s → 0", value, lesson_id)
        return 0
    return value


def _to_price(raw: Any, lesson_id: Any) -> Price:
    if isinstance(raw, bool):
        raw = int(raw)
    if isinstance(raw, (int, float)):
        return raw
    try:
        return float(raw)
    except (TypeError, ValueError):
        logger.warning("⚠️ Невалідна ціна=%r для уроку %s → 0", raw, lesson_id)
        return 0


# ================================
# 🏛️ УРОК
# ================================
@dataclass(slots=True)
class Lesson:
    """📚 Урок каталогу з лічильником вільних місць."""

    id: LessonId                                                      # 🆔 Ідентифікатор (`_id` на бекенді)
    topic: str                                                        # 🏷️ Назва/тема уроку
    subject: str = ""                                                 # 📖 Предмет
    location: str = ""                                                # 📍 Місце проведення
    price: Price = 0                                                  # 💰 Ціна за одне місце
    space: int = 0                                                    # 🪑 Скільки місць ще можна забронювати
    image: Optional[str] = None                                       # 🖼️ Імʼя файлу зображення

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Lesson":
        """Будує урок із JSON-запису API (`_id` має пріоритет над `id`)."""
        lesson_id = data.get("_id", data.get("id"))
        if lesson_id is None:
            raise ValueError(f"Lesson without id: {dict(data)!r}")
        return cls(
            id=lesson_id,
            topic=str(data.get("topic") or ""),
            subject=str(data.get("subject") or ""),
            location=str(data.get("location") or ""),
            price=_to_price(data.get("price", 0), lesson_id),
            space=_to_space(data.get("space", 0), lesson_id),
            image=data.get("image") or data.get("imageRef"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "topic": self.topic,
            "subject": self.subject,
            "location": self.location,
            "price": self.price,
            "space": self.space,
            "image": self.image,
        }


# ================================
# 🛒 ЗАПИС КОШИКА
# ================================
@dataclass(frozen=True, slots=True)
class CartEntry:
    """🛒 Одне зарезервоване місце; знімок уроку на момент додавання."""

    lesson_id: LessonId
    topic: str
    subject: str
    location: str
    price: Price
    image: Optional[str] = None

    @classmethod
    def from_lesson(cls, lesson: Lesson) -> "CartEntry":
        return cls(
            lesson_id=lesson.id,
            topic=lesson.topic,
            subject=lesson.subject,
            location=lesson.location,
            price=lesson.price,
            image=lesson.image,
        )


# ================================
# 📝 ФОРМА ОФОРМЛЕННЯ
# ================================
@dataclass(frozen=True, slots=True)
class Checkout:
    """📝 Дані форми оформлення замовлення."""

    name: str = ""
    phone: str = ""


# ================================
# 🧾 ЗАМОВЛЕННЯ
# ================================
@dataclass(frozen=True, slots=True)
class OrderLine:
    """🧾 Рядок замовлення: один урок і кількість зарезервованих місць."""

    lesson_id: LessonId
    topic: str
    price: Price
    quantity: int

    def to_payload(self) -> Dict[str, Any]:
        return {
            "id": self.lesson_id,
            "topic": self.topic,
            "price": self.price,
            "quantity": self.quantity,
        }


@dataclass(frozen=True, slots=True)
class Order:
    """🧾 Замовлення для POST /orders (не зберігається локально)."""

    name: str
    phone: str
    lines: List[OrderLine] = field(default_factory=list)

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.lines)

    def to_payload(self) -> Dict[str, Any]:
        """Тіло запиту у форматі бекенду: `{name, phone, lessons: [...]}`."""
        return {
            "name": self.name,
            "phone": self.phone,
            "lessons": [line.to_payload() for line in self.lines],
        }


__all__ = [
    "LessonId",
    "Price",
    "Lesson",
    "CartEntry",
    "Checkout",
    "OrderLine",
    "Order",
]
