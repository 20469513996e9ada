# 🔀 lessoncart/domain/lessons/sorting.py
"""
🔀 Сортування уроків каталогу за обраним полем і напрямком.

🔹 Ніколи не мутує вхідну колекцію — працює з копією.
🔹 Рядки порівнюються без урахування регістру, решта — природним порядком.
🔹 Відсутні значення й None йдуть у кінець, різні типи групуються (числа, рядки, решта).
🔹 Невідоме поле → усі значення рівні, стабільний вихідний порядок зберігається.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                        # 🧾 Логування сортування
from enum import Enum, unique                                         # 🧱 Поля та напрямки
from functools import cmp_to_key                                      # 🔁 Тристороннє порівняння
from typing import Any, Iterable, List, Optional, Tuple, Union        # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from lessoncart.shared.utils.logger import LOG_NAME
from .entities import Lesson

logger = logging.getLogger(f"{LOG_NAME}.domain.lessons.sorting")


@unique
class SortField(str, Enum):
    """Поля уроку, за якими UI дозволяє сортувати."""
    TOPIC = "topic"
    SUBJECT = "subject"
    LOCATION = "location"
    PRICE = "price"
    SPACE = "space"

    def __str__(self) -> str:
        return self.value


@unique
class SortDirection(str, Enum):
    """Напрямок сортування."""
    ASC = "asc"
    DESC = "desc"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, value: Optional[str]) -> "SortDirection":
        """Безпечний парсинг: "desc"/"descending"/"-" → DESC, решта → ASC."""
        s = (value or "").strip().lower()
        if s in {"desc", "descending", "-"}:
            return cls.DESC
        return cls.ASC

    @property
    def sign(self) -> int:
        return 1 if self is SortDirection.ASC else -1


_MISSING = object()                                                   # 🕳️ Маркер відсутнього атрибута


def _field_value(lesson: Any, field: str) -> Any:
    value = getattr(lesson, field, _MISSING)
    if value is _MISSING and isinstance(lesson, dict):
        value = lesson.get(field, _MISSING)
    if isinstance(value, str):
        return value.lower()                                          # 🔡 Регістронезалежно
    return value


def _rank(value: Any) -> Tuple[int, str]:
    """Група значення: числа → рядки → інші типи (за імʼям типу) → відсутні."""
    if value is _MISSING or value is None:
        return (3, "")
    if isinstance(value, (int, float)):
        return (0, "")
    if isinstance(value, str):
        return (1, "")
    return (2, type(value).__name__)


def compare_values(a: Any, b: Any) -> int:
    """
    Тристороннє порівняння двох значень поля.

    Значення різних груп впорядковуються за групою, тож порядок транзитивний:
    відсутні/None завжди в кінці (при asc), а для невідомого поля всі
    значення рівні й вихідний порядок зберігається.
    """
    rank_a, rank_b = _rank(a), _rank(b)
    if rank_a != rank_b:
        return 1 if rank_a > rank_b else -1
    if rank_a[0] == 3:
        return 0
    try:
        if a > b:
            return 1
        if a < b:
            return -1
    except TypeError:                                                 # 🤷 Однаковий тип без порядку
        return 0
    return 0


def sort_lessons(
    lessons: Iterable[Lesson],
    field: Union[SortField, str] = SortField.TOPIC,
    direction: Union[SortDirection, str] = SortDirection.ASC,
) -> List[Lesson]:
    """Повертає новий список уроків, відсортований стабільно за `field`."""
    field_name = str(field)
    order = direction if isinstance(direction, SortDirection) else SortDirection.from_str(direction)
    sign = order.sign

    def _cmp(x: Lesson, y: Lesson) -> int:
        return sign * compare_values(_field_value(x, field_name), _field_value(y, field_name))

    result = sorted(list(lessons), key=cmp_to_key(_cmp))              # 📋 sorted() завжди створює новий список
    logger.debug("🔀 sort_lessons | field=%s order=%s count=%d", field_name, order, len(result))
    return result


__all__ = ["SortField", "SortDirection", "compare_values", "sort_lessons"]
