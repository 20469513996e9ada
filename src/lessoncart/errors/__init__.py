# 🚨 lessoncart/errors/__init__.py
"""
🚨 Пакет помилок: доменні винятки та стратегії конвертації httpx-винятків.
"""

from .custom_errors import (
    AppError,
    CartPositionError,
    CheckoutValidationError,
    ErrorCode,
    FetchFailure,
    InventoryUpdateFailure,
    OrderCreationFailure,
    SubmissionInProgressError,
    UserVisibleError,
)
from .strategies import HttpxErrorStrategy, IErrorHandlingStrategy

__all__ = [
    "AppError",
    "CartPositionError",
    "CheckoutValidationError",
    "ErrorCode",
    "FetchFailure",
    "HttpxErrorStrategy",
    "IErrorHandlingStrategy",
    "InventoryUpdateFailure",
    "OrderCreationFailure",
    "SubmissionInProgressError",
    "UserVisibleError",
]
