# 🌐 lessoncart/infrastructure/api/__init__.py
from .lessons_api_client import LessonsApiClient

__all__ = ["LessonsApiClient"]
