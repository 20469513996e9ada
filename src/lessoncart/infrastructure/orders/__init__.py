# 🧾 lessoncart/infrastructure/orders/__init__.py
from .order_submission import OrderSubmissionCoordinator, SubmissionSettings

__all__ = ["OrderSubmissionCoordinator", "SubmissionSettings"]
