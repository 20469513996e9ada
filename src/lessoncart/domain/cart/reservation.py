# 🛒 lessoncart/domain/cart/reservation.py
"""
🛒 CartReservationManager — власник записів кошика та інваріанту збереження місць.

🎯 Інваріант: для кожного уроку `space + кількість записів кошика з його id`
дорівнює значенню `space` на момент останньої синхронізації з сервером.

⚙️ Нотатки:
    • додавання зменшує `space` і додає запис одним кроком, видалення — навпаки;
    • видалення йде за позицією, бо кілька записів можуть посилатися на один урок;
    • урок, якого вже немає в каталозі (після оновлення), не блокує видалення запису.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                        # 🧾 Логи операцій кошика
from typing import Dict, List, Optional, Protocol, runtime_checkable  # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from lessoncart.domain.lessons.entities import CartEntry, Lesson, LessonId, OrderLine, Price
from lessoncart.errors.custom_errors import CartPositionError
from lessoncart.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.domain.cart.reservation")


# ================================
# 🏛️ КОНТРАКТ КАТАЛОГУ
# ================================
@runtime_checkable
class ILessonLookup(Protocol):
    """🔍 Пошук уроку в поточному знімку каталогу за id."""

    def find(self, lesson_id: LessonId) -> Optional[Lesson]:
        ...


# ================================
# 🛒 МЕНЕДЖЕР РЕЗЕРВУВАНЬ
# ================================
class CartReservationManager:
    """
    🛒 Керує записами кошика поверх каталогу уроків.
    """

    def __init__(self, catalog: ILessonLookup) -> None:
        self._catalog = catalog                                       # 📚 Джерело уроків для повернення місць
        self._entries: List[CartEntry] = []                           # 🧾 Записи у порядку додавання

    # ================================
    # 🔓 ЧИТАННЯ
    # ================================
    @property
    def entries(self) -> List[CartEntry]:
        """Копія записів кошика (зовнішній код не мутує стан)."""
        return list(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def count_for(self, lesson_id: LessonId) -> int:
        return sum(1 for entry in self._entries if entry.lesson_id == lesson_id)

    def quantity_by_item(self) -> Dict[LessonId, int]:
        """
        Групує записи за id уроку → кількість.

        Порядок ключів відповідає першій появі уроку в кошику.
        """
        quantities: Dict[LessonId, int] = {}
        for entry in self._entries:
            quantities[entry.lesson_id] = quantities.get(entry.lesson_id, 0) + 1
        return quantities

    def cart_total(self) -> Price:
        """Сума цін усіх записів (кожен запис — одне місце)."""
        return sum((entry.price for entry in self._entries), 0)

    def order_lines(self) -> List[OrderLine]:
        """Рядки замовлення: по одному на урок, quantity = кількість записів."""
        first_seen: Dict[LessonId, CartEntry] = {}
        for entry in self._entries:
            first_seen.setdefault(entry.lesson_id, entry)
        return [
            OrderLine(
                lesson_id=lesson_id,
                topic=first_seen[lesson_id].topic,
                price=first_seen[lesson_id].price,
                quantity=quantity,
            )
            for lesson_id, quantity in self.quantity_by_item().items()
        ]

    # ================================
    # ✍️ МУТАЦІЇ
    # ================================
    def add_to_cart(self, lesson: Lesson) -> bool:
        """
        Резервує одне місце уроку.

        Returns:
            True — запис додано; False — місць немає (стан не змінено).
        """
        if lesson.space <= 0:
            logger.debug("🚫 add_to_cart пропущено: немає місць | lesson=%s", lesson.id)
            return False
        self._entries.append(CartEntry.from_lesson(lesson))
        lesson.space -= 1
        logger.info(
            "➕ Додано в кошик | lesson=%s space=%d cart=%d",
            lesson.id,
            lesson.space,
            len(self._entries),
        )
        return True

    def remove_from_cart(self, position: int, entry: Optional[CartEntry] = None) -> CartEntry:
        """
        Видаляє запис за позицією й повертає місце уроку в каталог.

        Args:
            position: Індекс запису в кошику.
            entry: Очікуваний запис на цій позиції (захист від застарілого індексу).

        Raises:
            CartPositionError: позиції не існує або запис на ній інший.
        """
        if not 0 <= position < len(self._entries):
            raise CartPositionError(
                f"Cart position {position} is out of range (size={len(self._entries)})",
                position=position,
            )
        current = self._entries[position]
        if entry is not None and entry != current:
            raise CartPositionError(
                f"Cart entry at position {position} does not match the given entry",
                position=position,
            )

        lesson = self._catalog.find(current.lesson_id)
        if lesson is not None:
            lesson.space += 1
        else:
            logger.warning(
                "⚠️ Урок %s відсутній у каталозі — місце не повернуто, запис видаляється",
                current.lesson_id,
            )
        del self._entries[position]
        logger.info("➖ Видалено з кошика | lesson=%s cart=%d", current.lesson_id, len(self._entries))
        return current

    def clear(self) -> None:
        """Очищає кошик без повернення місць (після підтвердженого замовлення)."""
        self._entries.clear()
        logger.debug("🧹 Кошик очищено")


__all__ = ["ILessonLookup", "CartReservationManager"]
