# 📝 lessoncart/domain/checkout/__init__.py
from .validators import is_checkout_enabled, is_name_valid, is_phone_valid

__all__ = ["is_checkout_enabled", "is_name_valid", "is_phone_valid"]
