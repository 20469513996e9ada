# 🎛️ lessoncart/__init__.py
"""
🎛️ lessoncart — клієнтський рушій кошика уроків.

🔹 Синхронізує локальний кошик із віддаленим каталогом уроків.
🔹 Валідує форму оформлення та надсилає замовлення двофазним протоколом.
"""

from .engine import LessonCartEngine

__version__ = "0.1.0"

__all__ = ["LessonCartEngine", "build_engine", "__version__"]


def __getattr__(name: str):
    if name == "build_engine":
        from .config.setup.container import build_engine  # локальний імпорт → немає циклу

        return build_engine
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
