"""
Destination Filename Rules

Derives the name under which a submitted résumé is attached to the
notification email and reported back to the client:

    {sanitized_job_title}_{YYYYMMDD}_{original_name}

The derivation is pure and deterministic. Two submissions with the same
title, the same UTC day and the same original filename get the same name;
no deduplication is attempted.
"""

import re
from datetime import datetime, timezone
from typing import Optional

from .constants import (
    FALLBACK_ORIGINAL_NAME,
    FILENAME_DATE_FORMAT,
    PATH_UNSAFE_CHARACTERS,
    PLACEHOLDER_JOB_TITLE,
)

_UNSAFE_PATTERN = re.compile("[" + re.escape(PATH_UNSAFE_CHARACTERS) + "]")
_PATH_SEPARATORS = re.compile(r"[\\/]")
# CR, LF, tabs and every other C0/DEL control character
_CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f]+")


def single_line(text: str) -> str:
    """
    Collapse each run of control characters to one space and trim.

    Examples:
        >>> single_line("Data\\r\\nEngineer ")
        'Data Engineer'
    """
    return _CONTROL_CHARACTERS.sub(" ", text).strip()


def normalize_job_title(job_title: Optional[str]) -> str:
    """
    Return the job title as a single trimmed line, or the placeholder.

    Examples:
        >>> normalize_job_title("Data\\nEngineer")
        'Data Engineer'
        >>> normalize_job_title(None)
        'Unspecified Position'
    """
    return single_line(job_title or "") or PLACEHOLDER_JOB_TITLE


def sanitize_job_title(job_title: Optional[str]) -> str:
    """
    Strip path-unsafe characters from a job title.

    Removes every character of / \\ : * ? " < > |, collapses line breaks and
    other control characters to a space and trims surrounding whitespace.
    Falls back to the placeholder title when nothing is left.

    Examples:
        >>> sanitize_job_title("Data Engineer")
        'Data Engineer'
        >>> sanitize_job_title("R&D / QA: Lead")
        'R&D  QA Lead'
        >>> sanitize_job_title("  ")
        'Unspecified Position'
    """
    if not job_title:
        return PLACEHOLDER_JOB_TITLE
    cleaned = single_line(_UNSAFE_PATTERN.sub("", job_title))
    return cleaned or PLACEHOLDER_JOB_TITLE


def original_basename(original_name: str) -> str:
    """
    Reduce a client-supplied filename to its last non-empty path component.

    Some browsers send the full local path (C:\\Users\\me\\cv.pdf); only the
    final component is kept. A plain basename is returned unchanged, and a
    name with no usable component ("cv/", "/") becomes "resume.pdf".
    """
    components = [
        single_line(part) for part in _PATH_SEPARATORS.split(original_name or "")
    ]
    components = [part for part in components if part]
    return components[-1] if components else FALLBACK_ORIGINAL_NAME


def format_submission_date(submitted_at: datetime) -> str:
    """Return YYYYMMDD of the timestamp in UTC (naive datetimes are taken as UTC)."""
    if submitted_at.tzinfo is None:
        submitted_at = submitted_at.replace(tzinfo=timezone.utc)
    return submitted_at.astimezone(timezone.utc).strftime(FILENAME_DATE_FORMAT)


def derive_filename(
    job_title: Optional[str], original_name: str, submitted_at: datetime
) -> str:
    """
    Build the destination filename for a submission.

    Args:
        job_title: Free-text job title from the form (may be empty)
        original_name: Filename as sent by the client
        submitted_at: Submission timestamp

    Returns:
        "{sanitized_job_title}_{YYYYMMDD}_{original_name}"

    Examples:
        >>> derive_filename("Data Engineer", "resume.pdf", datetime(2024, 1, 15, tzinfo=timezone.utc))
        'Data Engineer_20240115_resume.pdf'
    """
    return (
        f"{sanitize_job_title(job_title)}_"
        f"{format_submission_date(submitted_at)}_"
        f"{original_basename(original_name)}"
    )
