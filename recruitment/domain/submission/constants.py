"""
Submission Constants

Business rules shared by intake validation, the submission model and the
filename derivation.
"""

from typing import Final

# Only PDF résumés are accepted
ALLOWED_MIME_TYPE: Final[str] = "application/pdf"

# 5 MiB upper bound per file
MAX_FILE_SIZE_BYTES: Final[int] = 5 * 1024 * 1024

# Used when the form carries no job title (or only unsafe characters)
PLACEHOLDER_JOB_TITLE: Final[str] = "Unspecified Position"

# Characters stripped from the job title before it becomes part of a filename
PATH_UNSAFE_CHARACTERS: Final[str] = '/\\:*?"<>|'

# Date stamp embedded in derived filenames (UTC)
FILENAME_DATE_FORMAT: Final[str] = "%Y%m%d"

# Used when the client-supplied filename has no usable last path component
FALLBACK_ORIGINAL_NAME: Final[str] = "resume.pdf"
