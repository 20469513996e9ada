# 📝 lessoncart/domain/checkout/validators.py
"""
📝 Чисті предикати валідації форми оформлення замовлення.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import re                                                             # 🔍 Регулярні вирази
from typing import Optional, Sized                                    # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from lessoncart.domain.lessons.entities import Checkout

NAME_PATTERN = re.compile(r"[a-zA-Z\s]+")                             # 🔤 Лише латинські літери та пробіли
PHONE_PATTERN = re.compile(r"[0-9]+")                                 # ☎️ Лише цифри ASCII


def is_name_valid(name: Optional[str]) -> bool:
    """True, якщо імʼя непорожнє і складається лише з літер та пробілів."""
    return bool(name) and NAME_PATTERN.fullmatch(name) is not None


def is_phone_valid(phone: Optional[str]) -> bool:
    """True, якщо телефон непорожній і складається лише з цифр."""
    return bool(phone) and PHONE_PATTERN.fullmatch(phone) is not None


def is_checkout_enabled(checkout: Checkout, cart: Sized) -> bool:
    """Оформлення дозволене: валідні імʼя й телефон та непорожній кошик."""
    return is_name_valid(checkout.name) and is_phone_valid(checkout.phone) and len(cart) > 0


__all__ = ["is_name_valid", "is_phone_valid", "is_checkout_enabled"]
