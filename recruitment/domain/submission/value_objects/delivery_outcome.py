"""
DeliveryOutcome Value Objects

Result of the single delivery attempt made for a submission.

Responsibility:
    - DeliverySent: transport accepted the message (carries provider message id)
    - DeliveryFailed: transport rejected the message or the time budget ran out
    - DispatchResult: derived filename + outcome, handed to the API Layer

Architecture Notes:
    - Immutable value objects (frozen dataclasses)
    - Tagged by `kind` so callers can branch without isinstance chains
    - Created once per submission and discarded after the response
"""

from dataclasses import dataclass
from typing import Literal, Union

FailureReason = Literal["transport", "timeout"]


@dataclass(frozen=True)
class DeliverySent:
    """Mail transport accepted the message."""

    message_id: str
    kind: Literal["sent"] = "sent"

    @property
    def is_sent(self) -> bool:
        return True


@dataclass(frozen=True)
class DeliveryFailed:
    """
    Mail transport did not deliver the message.

    Attributes:
        error_detail: Human-readable reason (provider text when available)
        reason: "transport" when the transport reported an error,
                "timeout" when the send budget elapsed first
    """

    error_detail: str
    reason: FailureReason = "transport"
    kind: Literal["failed"] = "failed"

    def __post_init__(self) -> None:
        if not self.error_detail:
            raise ValueError("DeliveryFailed requires a non-empty error_detail")

    @property
    def is_sent(self) -> bool:
        return False

    @property
    def timed_out(self) -> bool:
        return self.reason == "timeout"


DeliveryOutcome = Union[DeliverySent, DeliveryFailed]


@dataclass(frozen=True)
class DispatchResult:
    """
    Outcome of dispatching one submission.

    The filename is derived before the transport call, so it is present for
    both sent and failed outcomes.
    """

    filename: str
    outcome: DeliveryOutcome

    @property
    def email_sent(self) -> bool:
        return self.outcome.is_sent
