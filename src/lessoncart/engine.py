# 🎛️ lessoncart/engine.py
"""
🎛️ LessonCartEngine — єдиний власник стану каталогу, кошика та оформлення.

🔹 UI викликає лише операції рушія; поля стану напряму не мутуються.
🔹 Після кожної мутації підписники отримують новий `EngineState`.
🔹 Похідні значення (сортування, сума, валідація) рахуються при кожному читанні.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логи рушія
from dataclasses import replace                                     # 🧊 Відʼєднані копії уроків для UI
from typing import Any, Callable, Dict, List, Optional, Union        # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from lessoncart.domain.cart.reservation import CartReservationManager
from lessoncart.domain.checkout import validators
from lessoncart.domain.lessons.entities import CartEntry, Checkout, Lesson, LessonId, Price
from lessoncart.domain.lessons.sorting import SortDirection, SortField, sort_lessons
from lessoncart.domain.orders.status import SubmissionResult, SubmissionStatus
from lessoncart.domain.state import EngineState, StateListener
from lessoncart.errors.custom_errors import SubmissionInProgressError
from lessoncart.infrastructure.api.lessons_api_client import LessonsApiClient
from lessoncart.infrastructure.catalog.catalog_store import CatalogStore
from lessoncart.infrastructure.orders.order_submission import (
    OrderSubmissionCoordinator,
    SubmissionSettings,
)
from lessoncart.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.engine")


class LessonCartEngine:
    """
    🎛️ Фасад рушія для UI-шару.
    """

    def __init__(
        self,
        api: LessonsApiClient,
        *,
        submission: Optional[SubmissionSettings] = None,
        sort_by: Union[SortField, str] = SortField.TOPIC,
        sort_order: Union[SortDirection, str] = SortDirection.ASC,
    ) -> None:
        self._api = api
        self._catalog = CatalogStore(api)
        self._cart = CartReservationManager(self._catalog)
        self._coordinator = OrderSubmissionCoordinator(
            api,
            self._catalog,
            self._cart,
            settings=submission,
            on_change=self._emit,
            on_commit=self._reset_after_commit,
        )
        self._checkout = Checkout()
        self._sort_by = SortField(str(sort_by))
        self._sort_order = (
            sort_order if isinstance(sort_order, SortDirection) else SortDirection.from_str(sort_order)
        )
        self._search_query = ""
        self._show_cart = False
        self._listeners: List[StateListener] = []

    # ================================
    # ♻️ ЖИТТЄВИЙ ЦИКЛ
    # ================================
    async def close(self) -> None:
        await self._api.close()

    async def __aenter__(self) -> "LessonCartEngine":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # ================================
    # 📣 ПІДПИСКИ
    # ================================
    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Реєструє слухача змін стану.

        Returns:
            Функцію відписки.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    @property
    def state(self) -> EngineState:
        return EngineState(
            lessons=tuple(self._detached_lessons()),
            cart=tuple(self._cart.entries),
            checkout=self._checkout,
            sort_by=self._sort_by,
            sort_order=self._sort_order,
            search_query=self._search_query,
            show_cart=self._show_cart,
            status=self._coordinator.status,
            message=self._coordinator.message,
            last_result=self._coordinator.last_result,
        )

    def _emit(self) -> None:
        if not self._listeners:
            return
        snapshot = self.state
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:                                       # noqa: BLE001
                logger.exception("🔥 Слухач стану впав: %r", listener)

    # ================================
    # 📚 КАТАЛОГ
    # ================================
    async def load_lessons(self) -> bool:
        """Повне завантаження каталогу; результат оформлення при цьому скидається."""
        self._coordinator.acknowledge()
        ok = await self._catalog.load_all()
        self._emit()
        return ok

    async def search(self, query: str) -> bool:
        """Пошук на сервері (порожній запит → повний каталог)."""
        self._search_query = query or ""
        self._coordinator.acknowledge()
        ok = await self._catalog.search(self._search_query)
        self._emit()
        return ok

    def set_sort(
        self,
        field: Union[SortField, str, None] = None,
        direction: Union[SortDirection, str, None] = None,
    ) -> None:
        if field is not None:
            self._sort_by = SortField(str(field))
        if direction is not None:
            self._sort_order = (
                direction if isinstance(direction, SortDirection) else SortDirection.from_str(direction)
            )
        self._emit()

    @property
    def sorted_lessons(self) -> List[Lesson]:
        """Відсортовані копії уроків; зміни в них не потрапляють у каталог."""
        return sort_lessons(self._detached_lessons(), self._sort_by, self._sort_order)

    def _detached_lessons(self) -> List[Lesson]:
        return [replace(lesson) for lesson in self._catalog.lessons]

    def image_url(self, image_name: str) -> str:
        return self._api.image_url(image_name)

    # ================================
    # 🛒 КОШИК
    # ================================
    def add_to_cart(self, lesson: Union[Lesson, LessonId]) -> bool:
        """
        Резервує місце в уроці з поточного каталогу.

        Урок завжди шукається за id, тож застарілий обʼєкт після оновлення
        каталогу не змінюється. Поки замовлення надсилається, кошик заморожено.
        """
        if self._coordinator.status is SubmissionStatus.SUBMITTING:
            logger.warning("⏳ add_to_cart відхилено: замовлення ще надсилається")
            return False
        lesson_id = lesson.id if isinstance(lesson, Lesson) else lesson
        target = self._catalog.find(lesson_id)
        if target is None:
            logger.warning("⚠️ add_to_cart: урок %r не знайдено в каталозі", lesson_id)
            return False
        added = self._cart.add_to_cart(target)
        if added:
            self._emit()
        return added

    def remove_from_cart(self, position: int, entry: Optional[CartEntry] = None) -> CartEntry:
        """
        Видаляє запис кошика за позицією й повертає місце уроку.

        Raises:
            SubmissionInProgressError: замовлення ще надсилається.
            CartPositionError: позиції не існує або запис на ній інший.
        """
        if self._coordinator.status is SubmissionStatus.SUBMITTING:
            raise SubmissionInProgressError("The cart is locked while an order is being submitted.")
        removed = self._cart.remove_from_cart(position, entry)
        if self._cart.is_empty:
            self._show_cart = False                                 # 🙈 Порожній кошик закриваємо
        self._emit()
        return removed

    def toggle_cart(self, show: Optional[bool] = None) -> bool:
        """Перемикає вигляд кошика; відкрити можна лише непорожній кошик."""
        wanted = (not self._show_cart) if show is None else bool(show)
        self._show_cart = wanted and not self._cart.is_empty
        self._emit()
        return self._show_cart

    @property
    def cart_total(self) -> Price:
        return self._cart.cart_total()

    def quantity_by_item(self) -> Dict[LessonId, int]:
        return self._cart.quantity_by_item()

    @property
    def is_cart_enabled(self) -> bool:
        return not self._cart.is_empty

    # ================================
    # 📝 ОФОРМЛЕННЯ
    # ================================
    def update_checkout(self, *, name: Optional[str] = None, phone: Optional[str] = None) -> Checkout:
        self._checkout = Checkout(
            name=self._checkout.name if name is None else name,
            phone=self._checkout.phone if phone is None else phone,
        )
        self._emit()
        return self._checkout

    @property
    def is_name_valid(self) -> bool:
        return validators.is_name_valid(self._checkout.name)

    @property
    def is_phone_valid(self) -> bool:
        return validators.is_phone_valid(self._checkout.phone)

    @property
    def is_checkout_enabled(self) -> bool:
        return validators.is_checkout_enabled(self._checkout, self._cart)

    async def submit_order(self) -> SubmissionResult:
        """Запускає протокол оформлення; при успіху очищає форму й закриває кошик."""
        return await self._coordinator.submit(self._checkout)

    def _reset_after_commit(self) -> None:
        self._checkout = Checkout()
        self._show_cart = False                                     # 🔙 Повертаємось до списку уроків

    def acknowledge_result(self) -> bool:
        return self._coordinator.acknowledge()


__all__ = ["LessonCartEngine"]
