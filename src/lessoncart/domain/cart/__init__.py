# 🛒 lessoncart/domain/cart/__init__.py
from .reservation import CartReservationManager, ILessonLookup

__all__ = ["CartReservationManager", "ILessonLookup"]
