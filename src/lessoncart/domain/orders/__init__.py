# 🧾 lessoncart/domain/orders/__init__.py
from .status import (
    MSG_FAILURE,
    MSG_PARTIAL,
    MSG_SUBMITTING,
    MSG_SUCCESS,
    MessageKind,
    OrderMessage,
    SubmissionResult,
    SubmissionStatus,
)

__all__ = [
    "MSG_FAILURE",
    "MSG_PARTIAL",
    "MSG_SUBMITTING",
    "MSG_SUCCESS",
    "MessageKind",
    "OrderMessage",
    "SubmissionResult",
    "SubmissionStatus",
]
