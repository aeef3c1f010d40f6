"""
Shared Domain

Cross-cutting domain concepts (exception hierarchy).
"""

from .exceptions import (
    ClientInputError,
    DomainException,
    MissingFileError,
    PayloadTooLargeError,
    TooManyFilesError,
    UnsupportedTypeError,
)

__all__ = [
    "DomainException",
    "ClientInputError",
    "MissingFileError",
    "TooManyFilesError",
    "UnsupportedTypeError",
    "PayloadTooLargeError",
]
