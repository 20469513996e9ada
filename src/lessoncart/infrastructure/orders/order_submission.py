# 🧾 lessoncart/infrastructure/orders/order_submission.py
"""
🧾 OrderSubmissionCoordinator — двофазне оформлення замовлення.

🔁 Протокол:
    1. POST /orders з рядками, агрегованими з кошика (quantity = кількість записів).
       Збій → стан FAILED, кошик і залишки не змінюються, PUT-фаза не стартує.
    2. Для кожного окремого уроку в кошику — PUT /lessons/{id} з поточним
       локальним `space` (вже зменшеним при додаванні). Запити йдуть паралельно,
       результат кожного збирається окремо; невдалі повторюються.
    3. Фіналізація: очищення кошика, стан COMMITTED, повідомлення, оновлення каталогу.

⚙️ Нотатки:
    • замовлення вже існує після кроку 1, тому збій PUT не відкочує оформлення —
      результат містить список уроків, чиї залишки не синхронізовано (warning);
    • конфліктів з іншими покупцями не виявляємо: PUT перезаписує значення (last-write-wins);
    • успішне повідомлення зникає саме через `message_ttl_sec`, помилка — ні.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio                                                      # 🔁 gather/sleep/таймери
import logging                                                      # 🧾 Логи координатора
import time                                                         # ⏱️ Латентність протоколу
from dataclasses import dataclass                                   # 🧱 Налаштування
from typing import Callable, List, Optional, Tuple                  # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from lessoncart.domain.cart.reservation import CartReservationManager
from lessoncart.domain.checkout.validators import is_checkout_enabled
from lessoncart.domain.lessons.entities import Checkout, LessonId, Order
from lessoncart.domain.orders.status import (
    MSG_SUBMITTING,
    OrderMessage,
    SubmissionResult,
    SubmissionStatus,
)
from lessoncart.errors.custom_errors import (
    CheckoutValidationError,
    InventoryUpdateFailure,
    OrderCreationFailure,
    SubmissionInProgressError,
)
from lessoncart.infrastructure.api.lessons_api_client import LessonsApiClient
from lessoncart.infrastructure.catalog.catalog_store import CatalogStore
from lessoncart.shared.metrics import INVENTORY_UPDATES, ORDER_SUBMISSIONS, ORDER_SUBMIT_LATENCY
from lessoncart.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.infrastructure.orders")


@dataclass(frozen=True, slots=True)
class SubmissionSettings:
    """⚙️ Параметри координатора (з розділу `orders` конфігу)."""

    message_ttl_sec: float = 3.0                                    # ⏳ Через скільки ховати успіх
    inventory_retry_attempts: int = 1                               # 🔁 Додаткові спроби PUT
    inventory_retry_delay_sec: float = 0.5                          # 💤 Пауза між спробами
    refresh_after_commit: bool = True                               # 🔄 Перечитати каталог після успіху


class OrderSubmissionCoordinator:
    """
    🧾 Виконує протокол оформлення та тримає стан IDLE/SUBMITTING/COMMITTED/FAILED.
    """

    def __init__(
        self,
        api: LessonsApiClient,
        catalog: CatalogStore,
        cart: CartReservationManager,
        settings: Optional[SubmissionSettings] = None,
        on_change: Optional[Callable[[], None]] = None,
        on_commit: Optional[Callable[[], None]] = None,
    ) -> None:
        self._api = api                                             # 🌐 REST-бекенд
        self._catalog = catalog                                     # 📚 Джерело поточних `space`
        self._cart = cart                                           # 🛒 Що саме замовляємо
        self._settings = settings or SubmissionSettings()
        self._on_change = on_change                                 # 📣 Сповіщення власника стану
        self._on_commit = on_commit                                 # ✅ Хук власника форми (очищення checkout)
        self._status = SubmissionStatus.IDLE
        self._message: Optional[OrderMessage] = None
        self._last_result: Optional[SubmissionResult] = None
        self._clear_handle: Optional[asyncio.TimerHandle] = None     # ⏲️ Автоочищення успіху

    # ================================
    # 🔓 СТАН
    # ================================
    @property
    def status(self) -> SubmissionStatus:
        return self._status

    @property
    def message(self) -> Optional[OrderMessage]:
        return self._message

    @property
    def last_result(self) -> Optional[SubmissionResult]:
        return self._last_result

    def acknowledge(self) -> bool:
        """
        Підтверджує результат: COMMITTED/FAILED → IDLE, повідомлення зникає.

        Returns:
            True, якщо стан змінився.
        """
        if not self._status.is_terminal:
            return False
        self._cancel_auto_clear()
        self._status = SubmissionStatus.IDLE
        self._message = None
        logger.debug("👌 Результат оформлення підтверджено → IDLE")
        self._notify()
        return True

    # ================================
    # 🚀 ОФОРМЛЕННЯ
    # ================================
    async def submit(self, checkout: Checkout) -> SubmissionResult:
        """
        Надсилає замовлення з поточного кошика.

        Raises:
            SubmissionInProgressError: попереднє оформлення ще триває.
            CheckoutValidationError: форма невалідна або кошик порожній.
        """
        if self._status is SubmissionStatus.SUBMITTING:
            raise SubmissionInProgressError("An order is already being submitted.")
        if not is_checkout_enabled(checkout, self._cart):
            raise CheckoutValidationError(
                "Checkout requires a valid name, a numeric phone and a non-empty cart."
            )

        self._cancel_auto_clear()
        order = Order(name=checkout.name, phone=checkout.phone, lines=self._cart.order_lines())
        self._set_state(SubmissionStatus.SUBMITTING, MSG_SUBMITTING)
        started = time.perf_counter()
        logger.info(
            "🧾 Оформлення замовлення | lines=%d units=%d",
            len(order.lines),
            order.total_quantity,
        )

        # --- 1. POST /orders ---
        try:
            await self._api.create_order(order)
        except OrderCreationFailure as exc:
            logger.error("❌ Error submitting order: %s", exc, extra=exc.to_log_extra())
            return self._finish(
                SubmissionResult(SubmissionStatus.FAILED, order=order, error=exc.message),
                started,
            )
        except Exception as exc:
            logger.exception("🔥 Неочікуваний збій під час POST замовлення")
            self._finish(SubmissionResult(SubmissionStatus.FAILED, order=order, error=str(exc)), started)
            raise

        # --- 2. PUT /lessons/{id} ---
        failed_ids = await self._reconcile_inventory(order)

        # --- 3. Фіналізація ---
        self._cart.clear()
        if self._on_commit is not None:
            self._on_commit()
        result = self._finish(
            SubmissionResult(
                SubmissionStatus.COMMITTED,
                order=order,
                failed_inventory_ids=tuple(failed_ids),
            ),
            started,
        )
        if self._settings.refresh_after_commit:
            await self._catalog.load_all()                          # 🔄 Звіряємося з сервером
            self._notify()
        return result

    # ================================
    # 🔒 ВНУТРІШНЯ ЛОГІКА
    # ================================
    async def _reconcile_inventory(self, order: Order) -> List[LessonId]:
        """
        Паралельно оновлює `space` кожного уроку з замовлення.

        Returns:
            id уроків, залишок яких не вдалося записати (у порядку рядків замовлення).
        """
        targets: List[Tuple[LessonId, int]] = []
        missing: List[LessonId] = []
        for line in order.lines:
            lesson = self._catalog.find(line.lesson_id)
            if lesson is None:
                logger.warning("⚠️ Урок %s зник з каталогу — space не оновлено", line.lesson_id)
                missing.append(line.lesson_id)
                continue
            targets.append((lesson.id, lesson.space))

        outcomes = await asyncio.gather(
            *(self._update_with_retry(lesson_id, space) for lesson_id, space in targets),
            return_exceptions=True,
        )

        failed = set(missing)
        for (lesson_id, space), outcome in zip(targets, outcomes):
            if isinstance(outcome, BaseException):
                failed.add(lesson_id)
                logger.error(
                    "❌ Space для уроку %s (=%s) не синхронізовано: %s",
                    lesson_id,
                    space,
                    outcome,
                )
        return [line.lesson_id for line in order.lines if line.lesson_id in failed]

    async def _update_with_retry(self, lesson_id: LessonId, space: int) -> None:
        attempts = max(0, int(self._settings.inventory_retry_attempts)) + 1
        for attempt in range(attempts):
            try:
                await self._api.update_space(lesson_id, space)
            except InventoryUpdateFailure as exc:
                INVENTORY_UPDATES.labels(outcome="failure").inc()
                logger.warning(
                    "⚠️ Спроба %s/%s PUT space не вдалась | lesson=%s",
                    attempt + 1,
                    attempts,
                    lesson_id,
                    extra=exc.to_log_extra(),
                )
                if attempt >= attempts - 1:
                    raise
                await asyncio.sleep(max(0.0, float(self._settings.inventory_retry_delay_sec)))
            else:
                INVENTORY_UPDATES.labels(outcome="success").inc()
                return

    def _finish(self, result: SubmissionResult, started: float) -> SubmissionResult:
        ORDER_SUBMIT_LATENCY.observe(time.perf_counter() - started)
        if result.status is SubmissionStatus.FAILED:
            outcome = "failed"
        elif result.failed_inventory_ids:
            outcome = "partial"
            logger.error(
                "❌ Замовлення створено, але залишки не синхронізовано: %s",
                list(result.failed_inventory_ids),
            )
        else:
            outcome = "committed"
            logger.info("✅ Order submitted successfully")
        ORDER_SUBMISSIONS.labels(outcome=outcome).inc()

        self._last_result = result
        self._set_state(result.status, result.message)
        if outcome == "committed":
            self._schedule_auto_clear()
        return result

    def _set_state(self, status: SubmissionStatus, message: Optional[OrderMessage]) -> None:
        self._status = status
        self._message = message
        self._notify()

    def _schedule_auto_clear(self) -> None:
        ttl = float(self._settings.message_ttl_sec or 0)
        if ttl <= 0:
            return
        loop = asyncio.get_running_loop()
        self._clear_handle = loop.call_later(ttl, self._auto_clear)

    def _auto_clear(self) -> None:
        self._clear_handle = None
        if self._status is SubmissionStatus.COMMITTED:
            logger.debug("⏲️ Успішне повідомлення приховано за TTL")
            self.acknowledge()

    def _cancel_auto_clear(self) -> None:
        if self._clear_handle is not None:
            self._clear_handle.cancel()
            self._clear_handle = None

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()


__all__ = ["SubmissionSettings", "OrderSubmissionCoordinator"]
