# 🧪 tests/domain/test_cart_reservation.py
"""
🧪 Тести для `CartReservationManager`.

Перевіряємо:
- інваріант збереження місць після кожної операції;
- блокування додавання при space == 0;
- видалення за позицією (у т.ч. коли уроку вже немає в каталозі);
- агрегацію кількостей і суму кошика.
"""

from __future__ import annotations

import random
from typing import Dict, List, Optional

import pytest

from lessoncart.domain.cart.reservation import CartReservationManager
from lessoncart.domain.lessons.entities import Lesson, LessonId
from lessoncart.errors.custom_errors import CartPositionError


class ListCatalog:
    """Простий каталог у памʼяті для доменних тестів."""

    def __init__(self, lessons: List[Lesson]) -> None:
        self.lessons = lessons

    def find(self, lesson_id: LessonId) -> Optional[Lesson]:
        return next((lesson for lesson in self.lessons if lesson.id == lesson_id), None)


def _catalog() -> ListCatalog:
    return ListCatalog(
        [
            Lesson(id="A", topic="Math", price=100, space=5),
            Lesson(id="B", topic="Art", price=90, space=3),
            Lesson(id="C", topic="Music", price=70, space=0),
        ]
    )


def _assert_conserved(catalog: ListCatalog, cart: CartReservationManager, initial: Dict[str, int]) -> None:
    for lesson in catalog.lessons:
        assert lesson.space >= 0
        assert lesson.space + cart.count_for(lesson.id) == initial[lesson.id]


def test_add_decrements_space_and_appends_entry() -> None:
    catalog = _catalog()
    cart = CartReservationManager(catalog)
    math = catalog.find("A")

    assert cart.add_to_cart(math) is True
    assert cart.add_to_cart(math) is True

    assert math.space == 3
    assert len(cart) == 2
    assert [entry.lesson_id for entry in cart.entries] == ["A", "A"]


def test_add_is_blocked_when_no_space() -> None:
    catalog = _catalog()
    cart = CartReservationManager(catalog)
    music = catalog.find("C")

    assert cart.add_to_cart(music) is False
    assert len(cart) == 0
    assert music.space == 0


def test_conservation_holds_for_random_sequences() -> None:
    rng = random.Random(42)
    catalog = _catalog()
    cart = CartReservationManager(catalog)
    initial = {lesson.id: lesson.space for lesson in catalog.lessons}

    for _ in range(200):
        if cart.is_empty or rng.random() < 0.6:
            cart.add_to_cart(rng.choice(catalog.lessons))
        else:
            cart.remove_from_cart(rng.randrange(len(cart)))
        _assert_conserved(catalog, cart, initial)


def test_remove_by_position_restores_space() -> None:
    catalog = _catalog()
    cart = CartReservationManager(catalog)
    a, b = catalog.find("A"), catalog.find("B")
    cart.add_to_cart(a)
    cart.add_to_cart(b)
    cart.add_to_cart(a)

    removed = cart.remove_from_cart(1, cart.entries[1])

    assert removed.lesson_id == "B"
    assert b.space == 3
    assert [entry.lesson_id for entry in cart.entries] == ["A", "A"]


def test_remove_when_lesson_left_catalog_still_removes_entry() -> None:
    catalog = _catalog()
    cart = CartReservationManager(catalog)
    cart.add_to_cart(catalog.find("A"))
    catalog.lessons = [lesson for lesson in catalog.lessons if lesson.id != "A"]

    cart.remove_from_cart(0)

    assert cart.is_empty


def test_remove_rejects_bad_position_or_mismatched_entry() -> None:
    catalog = _catalog()
    cart = CartReservationManager(catalog)
    cart.add_to_cart(catalog.find("A"))
    cart.add_to_cart(catalog.find("B"))

    with pytest.raises(CartPositionError):
        cart.remove_from_cart(5)
    with pytest.raises(CartPositionError):
        cart.remove_from_cart(-1)
    with pytest.raises(CartPositionError):
        cart.remove_from_cart(0, cart.entries[1])
    assert len(cart) == 2


def test_quantity_aggregation_and_order_lines() -> None:
    catalog = _catalog()
    cart = CartReservationManager(catalog)
    a, b = catalog.find("A"), catalog.find("B")
    for lesson in (a, b, a):
        cart.add_to_cart(lesson)

    assert cart.quantity_by_item() == {"A": 2, "B": 1}
    lines = cart.order_lines()
    assert [(line.lesson_id, line.quantity) for line in lines] == [("A", 2), ("B", 1)]
    assert lines[0].topic == "Math"
    assert lines[0].price == 100


def test_cart_total_counts_every_unit() -> None:
    catalog = _catalog()
    cart = CartReservationManager(catalog)
    a, b = catalog.find("A"), catalog.find("B")
    for lesson in (a, b, a):
        cart.add_to_cart(lesson)

    assert cart.cart_total() == 290


def test_clear_does_not_restore_space() -> None:
    catalog = _catalog()
    cart = CartReservationManager(catalog)
    a = catalog.find("A")
    cart.add_to_cart(a)

    cart.clear()

    assert cart.is_empty
    assert a.space == 4
