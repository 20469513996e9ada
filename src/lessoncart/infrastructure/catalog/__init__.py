# 📚 lessoncart/infrastructure/catalog/__init__.py
from .catalog_store import CatalogStore

__all__ = ["CatalogStore"]
