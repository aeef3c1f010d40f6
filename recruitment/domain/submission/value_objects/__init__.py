"""
Submission Value Objects
"""

from .delivery_outcome import (
    DeliveryFailed,
    DeliveryOutcome,
    DeliverySent,
    DispatchResult,
    FailureReason,
)

__all__ = [
    "DeliverySent",
    "DeliveryFailed",
    "DeliveryOutcome",
    "DispatchResult",
    "FailureReason",
]
