# 📚 lessoncart/domain/lessons/__init__.py
"""
📚 Пакет `domain.lessons` — сутності каталогу та сортування.
"""

from .entities import CartEntry, Checkout, Lesson, LessonId, Order, OrderLine, Price
from .sorting import SortDirection, SortField, compare_values, sort_lessons

__all__ = [
    "CartEntry",
    "Checkout",
    "Lesson",
    "LessonId",
    "Order",
    "OrderLine",
    "Price",
    "SortDirection",
    "SortField",
    "compare_values",
    "sort_lessons",
]
