# ⚙️ lessoncart/config/__init__.py
"""
⚙️ Пакет Config — централізована конфігурація та збирання рушія.

Цей пакет відповідає за:
- Завантаження налаштувань (.env, config.yaml, config.json).
- Типізовані `EngineSettings`.
- Створення та зв'язування сервісів через контейнер.
"""

from typing import TYPE_CHECKING

from .config_service import ConfigService

if TYPE_CHECKING:  # лише для підказок типів, без виконання імпорту під час рантайму
    from .setup.container import Container
    from .setup.settings import EngineSettings

__all__ = [
    "ConfigService",
    "Container",
    "EngineSettings",
]


def __getattr__(name: str):
    if name == "Container":
        from .setup.container import Container  # локальний імпорт → немає циклу

        return Container
    if name == "EngineSettings":
        from .setup.settings import EngineSettings

        return EngineSettings
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
