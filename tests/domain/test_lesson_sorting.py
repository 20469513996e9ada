# 🧪 tests/domain/test_lesson_sorting.py
"""
🧪 Тести для `sort_lessons`.

Перевіряємо:
- регістронезалежне сортування рядків і природний порядок чисел;
- відсутність мутації вхідного списку;
- стабільність та дзеркальність asc/desc;
- поведінку для невідомого поля.
"""

from __future__ import annotations

from lessoncart.domain.lessons.entities import Lesson
from lessoncart.domain.lessons.sorting import SortDirection, SortField, compare_values, sort_lessons


def _lessons() -> list:
    return [
        Lesson(id="a", topic="math", location="London", price=100, space=5),
        Lesson(id="b", topic="Art", location="bristol", price=90, space=0),
        Lesson(id="c", topic="english", location="Oxford", price=80, space=3),
    ]


def _ids(lessons) -> list:
    return [lesson.id for lesson in lessons]


def test_sort_by_topic_is_case_insensitive() -> None:
    result = sort_lessons(_lessons(), SortField.TOPIC, SortDirection.ASC)
    assert _ids(result) == ["b", "c", "a"]


def test_sort_by_price_descending() -> None:
    result = sort_lessons(_lessons(), "price", "desc")
    assert _ids(result) == ["a", "b", "c"]


def test_sort_does_not_mutate_source() -> None:
    source = _lessons()
    before = _ids(source)
    sort_lessons(source, SortField.SPACE, SortDirection.DESC)
    assert _ids(source) == before


def test_sort_twice_gives_same_order() -> None:
    once = sort_lessons(_lessons(), SortField.LOCATION, SortDirection.ASC)
    twice = sort_lessons(once, SortField.LOCATION, SortDirection.ASC)
    assert _ids(once) == _ids(twice)


def test_descending_is_exact_reverse_of_ascending() -> None:
    asc = sort_lessons(_lessons(), SortField.PRICE, SortDirection.ASC)
    desc = sort_lessons(asc, SortField.PRICE, SortDirection.DESC)
    assert _ids(desc) == list(reversed(_ids(asc)))


def test_ties_keep_original_relative_order() -> None:
    lessons = [
        Lesson(id=1, topic="x", price=10),
        Lesson(id=2, topic="y", price=10),
        Lesson(id=3, topic="z", price=5),
    ]
    assert _ids(sort_lessons(lessons, SortField.PRICE)) == [3, 1, 2]


def test_unknown_field_keeps_original_order() -> None:
    lessons = _lessons()
    assert _ids(sort_lessons(lessons, "rating", "asc")) == _ids(lessons)
    assert _ids(sort_lessons(lessons, "rating", "desc")) == _ids(lessons)


def test_compare_values_orders_mixed_and_missing_values() -> None:
    assert compare_values(None, 3) == 1
    assert compare_values(3, None) == -1
    assert compare_values(None, None) == 0
    assert compare_values("a", 3) == 1
    assert compare_values(2, 1) == 1
    assert compare_values(1, 2) == -1


def test_none_values_go_last_and_rest_is_sorted() -> None:
    rows = [{"price": 3}, {"price": None}, {"price": 1}, {"price": 2}, {}]

    asc = sort_lessons(rows, "price", "asc")
    desc = sort_lessons(rows, "price", "desc")

    assert [row.get("price") for row in asc] == [1, 2, 3, None, None]
    assert [row.get("price") for row in desc][:3] == [3, 2, 1]


def test_mixed_types_are_grouped_consistently() -> None:
    rows = [{"space": "x"}, {"space": 4}, {"space": None}, {"space": 1}, {"space": "a"}]

    result = sort_lessons(rows, "space", "asc")

    assert [row["space"] for row in result] == [1, 4, "a", "x", None]


def test_direction_parsing_is_lenient() -> None:
    assert SortDirection.from_str("DESC") is SortDirection.DESC
    assert SortDirection.from_str(None) is SortDirection.ASC
    assert SortDirection.from_str("whatever") is SortDirection.ASC
