"""
Tests for domain exceptions.
"""

import pytest

from recruitment.domain.shared.exceptions import (
    ClientInputError,
    DomainException,
    MissingFileError,
    PayloadTooLargeError,
    TooManyFilesError,
    UnsupportedTypeError,
)


@pytest.mark.parametrize(
    "exc_class, code, status_code",
    [
        (MissingFileError, "MISSING_FILE", 400),
        (TooManyFilesError, "TOO_MANY_FILES", 400),
        (UnsupportedTypeError, "UNSUPPORTED_TYPE", 415),
        (PayloadTooLargeError, "PAYLOAD_TOO_LARGE", 413),
    ],
)
def test_client_input_errors_carry_code_and_status(exc_class, code, status_code):
    exc = exc_class("rejected")

    assert isinstance(exc, ClientInputError)
    assert isinstance(exc, DomainException)
    assert exc.code == code
    assert exc.status_code == status_code
    assert exc.message == "rejected"


def test_domain_exception_str_includes_class_name():
    assert str(MissingFileError("No file received")) == "MissingFileError: No file received"


def test_payload_too_large_message_includes_sizes():
    exc = PayloadTooLargeError(
        "File is too large",
        file_size_bytes=6 * 1024 * 1024,
        max_size_bytes=5 * 1024 * 1024,
    )

    assert exc.message == "File is too large (File: 6.00MB, Max: 5.00MB)"
    assert exc.file_size_bytes == 6 * 1024 * 1024


def test_unsupported_type_keeps_declared_type():
    exc = UnsupportedTypeError(
        "unsupported type: only PDF files are accepted",
        mime_type="image/png",
        allowed_mime_type="application/pdf",
    )

    assert exc.mime_type == "image/png"
    assert exc.allowed_mime_type == "application/pdf"
