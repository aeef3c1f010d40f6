"""
Domain Layer - Submission Model and Business Rules

Framework-independent core of the service: what a résumé submission is,
how its destination filename is derived, and what a delivery attempt can
result in.

Exports:
    - Submission, UploadedFile: validated submission model
    - DeliverySent, DeliveryFailed, DeliveryOutcome: result of a send attempt
    - derive_filename, sanitize_job_title: filename rules
    - DomainException: base exception class
"""

from .shared import DomainException
from .submission import (
    DeliveryFailed,
    DeliveryOutcome,
    DeliverySent,
    Submission,
    UploadedFile,
    derive_filename,
    sanitize_job_title,
)

__all__ = [
    "DomainException",
    "Submission",
    "UploadedFile",
    "DeliverySent",
    "DeliveryFailed",
    "DeliveryOutcome",
    "derive_filename",
    "sanitize_job_title",
]
