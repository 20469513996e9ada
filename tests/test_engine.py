# 🧪 tests/test_engine.py
"""
🧪 Сценарії рушія кошика уроків від завантаження до оформлення.
"""

from __future__ import annotations

import asyncio
from typing import List

import pytest

from lessoncart import LessonCartEngine, build_engine
from lessoncart.config.setup.settings import EngineSettings
from lessoncart.domain.orders.status import MSG_SUCCESS, SubmissionStatus
from lessoncart.domain.state import EngineState
from lessoncart.errors.custom_errors import CheckoutValidationError, SubmissionInProgressError
from lessoncart.infrastructure.orders.order_submission import SubmissionSettings

BASE_URL = "http://lessons.test"


@pytest.fixture
def engine(api) -> LessonCartEngine:
    return LessonCartEngine(
        api,
        submission=SubmissionSettings(message_ttl_sec=0, inventory_retry_delay_sec=0),
    )


@pytest.mark.asyncio
async def test_full_purchase_flow(engine, backend) -> None:
    assert await engine.load_lessons() is True
    assert engine.add_to_cart(1) is True
    assert engine.add_to_cart(1) is True
    assert engine.state.lessons[0].space == 3
    assert len(engine.state.cart) == 2
    assert engine.toggle_cart() is True

    engine.update_checkout(name="Jane Doe", phone="07123456789")
    assert engine.is_checkout_enabled
    result = await engine.submit_order()

    assert result.succeeded
    assert backend.orders[0]["lessons"] == [{"id": 1, "topic": "Math", "price": 100, "quantity": 2}]
    assert backend.put_bodies() == {"1": {"space": 3}}
    state = engine.state
    assert state.cart == ()
    assert state.show_cart is False
    assert state.checkout.name == "" and state.checkout.phone == ""
    assert state.status is SubmissionStatus.COMMITTED
    assert state.message == MSG_SUCCESS
    await engine.close()


@pytest.mark.asyncio
async def test_subscribers_receive_snapshots_until_unsubscribed(engine) -> None:
    seen: List[EngineState] = []
    unsubscribe = engine.subscribe(seen.append)

    await engine.load_lessons()
    engine.add_to_cart(2)
    assert len(seen) == 2
    assert seen[-1].cart[0].lesson_id == 2

    unsubscribe()
    engine.add_to_cart(2)
    assert len(seen) == 2
    await engine.close()


@pytest.mark.asyncio
async def test_failing_listener_does_not_break_others(engine) -> None:
    seen: List[EngineState] = []

    def broken(_state: EngineState) -> None:
        raise RuntimeError("listener bug")

    engine.subscribe(broken)
    engine.subscribe(seen.append)
    await engine.load_lessons()

    assert len(seen) == 1
    await engine.close()


@pytest.mark.asyncio
async def test_full_lesson_cannot_be_added(engine) -> None:
    await engine.load_lessons()

    assert engine.add_to_cart(3) is False
    assert engine.add_to_cart("unknown") is False
    assert engine.is_cart_enabled is False
    await engine.close()


@pytest.mark.asyncio
async def test_cart_view_closes_when_last_entry_removed(engine) -> None:
    await engine.load_lessons()
    assert engine.toggle_cart(True) is False                        # порожній кошик не відкривається

    engine.add_to_cart(1)
    engine.add_to_cart(2)
    assert engine.toggle_cart(True) is True
    assert engine.cart_total == 180
    assert engine.quantity_by_item() == {1: 1, 2: 1}

    engine.remove_from_cart(0)
    assert engine.state.show_cart is True
    engine.remove_from_cart(0)
    assert engine.state.show_cart is False
    assert [lesson.space for lesson in engine.state.lessons] == [5, 3, 0]
    await engine.close()


@pytest.mark.asyncio
async def test_sorting_is_derived_and_does_not_touch_catalog(engine) -> None:
    await engine.load_lessons()

    engine.set_sort("price", "desc")
    assert [lesson.id for lesson in engine.sorted_lessons] == [1, 3, 2]
    engine.set_sort("topic", "asc")
    assert [lesson.topic for lesson in engine.sorted_lessons] == ["Art", "english", "Math"]
    assert [lesson.id for lesson in engine.state.lessons] == [1, 2, 3]
    await engine.close()


@pytest.mark.asyncio
async def test_search_clears_previous_result_message(engine, backend) -> None:
    await engine.load_lessons()
    engine.add_to_cart(1)
    engine.update_checkout(name="Jane Doe", phone="0712")
    backend.order_status = 500
    await engine.submit_order()
    assert engine.state.status is SubmissionStatus.FAILED

    await engine.search("art")

    state = engine.state
    assert state.status is SubmissionStatus.IDLE
    assert state.message is None
    assert state.search_query == "art"
    assert [lesson.topic for lesson in state.lessons] == ["Art"]
    await engine.close()


@pytest.mark.asyncio
async def test_submit_with_invalid_form_is_rejected(engine) -> None:
    await engine.load_lessons()
    engine.add_to_cart(1)
    engine.update_checkout(name="Jane Doe", phone="phone")

    assert engine.is_name_valid is True
    assert engine.is_phone_valid is False
    with pytest.raises(CheckoutValidationError):
        await engine.submit_order()
    await engine.close()


def test_image_url_uses_api_base(engine) -> None:
    assert engine.image_url("math.png") == f"{BASE_URL}/images/math.png"


@pytest.mark.asyncio
async def test_build_engine_from_settings(backend) -> None:
    settings = EngineSettings(api_base_url=BASE_URL, submission=SubmissionSettings(message_ttl_sec=0))

    engine = build_engine(settings=settings, transport=backend.transport(), init_logging=False)

    assert await engine.load_lessons() is True
    assert len(engine.state.lessons) == 3
    await engine.close()


class HeldOrderApi:
    """Обгортка над API, що тримає POST /orders до відкриття `gate`."""

    def __init__(self, api) -> None:
        self._api = api
        self.gate = asyncio.Event()

    async def create_order(self, order):
        await self.gate.wait()
        return await self._api.create_order(order)

    def __getattr__(self, name):
        return getattr(self._api, name)


@pytest.mark.asyncio
async def test_cart_is_locked_while_order_is_in_flight(api, backend) -> None:
    held = HeldOrderApi(api)
    engine = LessonCartEngine(held, submission=SubmissionSettings(message_ttl_sec=0))
    await engine.load_lessons()
    engine.add_to_cart(1)
    engine.update_checkout(name="Jane Doe", phone="0712")

    task = asyncio.create_task(engine.submit_order())
    await asyncio.sleep(0)
    assert engine.state.status is SubmissionStatus.SUBMITTING

    assert engine.add_to_cart(1) is False
    with pytest.raises(SubmissionInProgressError):
        engine.remove_from_cart(0)

    held.gate.set()
    result = await task

    assert result.succeeded
    assert [line["quantity"] for line in backend.orders[0]["lessons"]] == [1]
    assert backend.put_bodies() == {"1": {"space": 4}}
    assert backend.lessons["1"]["space"] == 4
    assert engine.state.lessons[0].space == 4
    await engine.close()


@pytest.mark.asyncio
async def test_stale_lesson_object_reserves_on_current_catalog(engine, backend) -> None:
    await engine.load_lessons()
    stale = next(lesson for lesson in engine.sorted_lessons if lesson.id == 2)
    await engine.load_lessons()

    assert engine.add_to_cart(stale) is True
    assert stale.space == 3
    assert engine.state.lessons[1].space == 2

    engine.remove_from_cart(0)
    assert engine.state.lessons[1].space == 3
    await engine.close()


@pytest.mark.asyncio
async def test_exposed_lessons_are_detached_copies(engine) -> None:
    await engine.load_lessons()

    engine.state.lessons[0].space = 99
    engine.sorted_lessons[0].space = 99

    assert [lesson.space for lesson in engine.state.lessons] == [5, 3, 0]
    assert engine.add_to_cart(3) is False
    await engine.close()
