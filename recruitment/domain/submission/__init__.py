"""
Submission Subdomain

Résumé submissions, derived destination filenames and delivery outcomes.
"""

from .constants import (
    ALLOWED_MIME_TYPE,
    MAX_FILE_SIZE_BYTES,
    PLACEHOLDER_JOB_TITLE,
)
from .entities import Submission, UploadedFile
from .filename import derive_filename, sanitize_job_title
from .value_objects import (
    DeliveryFailed,
    DeliveryOutcome,
    DeliverySent,
    DispatchResult,
)

__all__ = [
    "ALLOWED_MIME_TYPE",
    "MAX_FILE_SIZE_BYTES",
    "PLACEHOLDER_JOB_TITLE",
    "Submission",
    "UploadedFile",
    "derive_filename",
    "sanitize_job_title",
    "DeliverySent",
    "DeliveryFailed",
    "DeliveryOutcome",
    "DispatchResult",
]
