"""
Tests for the upload router (recruitment/api/routers/upload.py).

Covers:
- POST /api/upload and POST /upload (same handler)
- Success, transport failure (502) and timeout (504) responses
- Client-input rejections (400/413/415) with no transport call
- OPTIONS pre-flight and 405 for other methods
"""

import asyncio
import logging
from unittest.mock import ANY

import pytest
from fastapi import status

from recruitment.api.routers.upload import get_settings
from recruitment.application.ports.mail_sender import MailDeliveryError
from recruitment.domain.submission.constants import MAX_FILE_SIZE_BYTES
from recruitment.shared.settings import AppSettings

SEND_ATTEMPT_LOG = "Sending résumé email"


# ============================================================================
# SUCCESS
# ============================================================================


@pytest.mark.parametrize("path", ["/api/upload", "/upload"])
def test_upload_success(client, mock_mail_sender, pdf_upload, pdf_bytes, path):
    """Valid PDF with title: email sent, derived filename returned."""
    # Act
    response = client.post(path, files=pdf_upload, data={"jobTitle": "Data Engineer"})

    # Assert
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "success": True,
        "message": "Résumé submitted successfully",
        "filename": "Data Engineer_20240115_resume.pdf",
        "emailSent": True,
    }
    mock_mail_sender.send.assert_awaited_once_with(
        attachment=pdf_bytes,
        filename="Data Engineer_20240115_resume.pdf",
        subject="New résumé submission: Data Engineer",
        body=ANY,
    )


def test_upload_without_job_title_uses_placeholder(client, pdf_upload):
    response = client.post("/api/upload", files=pdf_upload)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["filename"] == "Unspecified Position_20240115_resume.pdf"


def test_upload_sanitizes_job_title(client, mock_mail_sender, pdf_upload):
    """Path-unsafe characters are removed from the title part of the filename."""
    response = client.post(
        "/api/upload", files=pdf_upload, data={"jobTitle": 'Sales/Marketing: "Lead"?'}
    )

    assert response.json()["filename"] == "SalesMarketing Lead_20240115_resume.pdf"
    assert mock_mail_sender.send.await_args.kwargs["filename"] == (
        "SalesMarketing Lead_20240115_resume.pdf"
    )


def test_upload_with_multi_line_job_title(client, mock_mail_sender, pdf_upload):
    response = client.post(
        "/api/upload", files=pdf_upload, data={"jobTitle": "Data\nEngineer"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["filename"] == "Data Engineer_20240115_resume.pdf"
    kwargs = mock_mail_sender.send.await_args.kwargs
    assert kwargs["subject"] == "New résumé submission: Data Engineer"


def test_upload_accepts_pdf_content_type_with_parameters(client, pdf_bytes):
    response = client.post(
        "/api/upload",
        files={"file": ("resume.pdf", pdf_bytes, "application/pdf; charset=binary")},
    )

    assert response.status_code == status.HTTP_200_OK


def test_upload_accepts_file_of_exactly_max_size(client, mock_mail_sender):
    content = b"%PDF" + b"0" * (MAX_FILE_SIZE_BYTES - 4)

    response = client.post(
        "/api/upload", files={"file": ("big.pdf", content, "application/pdf")}
    )

    assert response.status_code == status.HTTP_200_OK
    mock_mail_sender.send.assert_awaited_once()


def test_resubmission_sends_again_with_same_filename(client, mock_mail_sender, pdf_upload):
    """Identical inputs on the same day give the same name and a new send."""
    first = client.post("/api/upload", files=pdf_upload, data={"jobTitle": "QA"})
    second = client.post("/api/upload", files=pdf_upload, data={"jobTitle": "QA"})

    assert first.json()["filename"] == second.json()["filename"]
    assert mock_mail_sender.send.await_count == 2


# ============================================================================
# PARTIAL FAILURE
# ============================================================================


def test_upload_transport_error_returns_502(client, mock_mail_sender, pdf_upload):
    """Authentication failure: file accepted, email not sent, provider detail returned."""
    # Arrange
    mock_mail_sender.send.side_effect = MailDeliveryError(
        "SMTP authentication failed, check the account and password",
        provider="smtp",
        detail="535 5.7.8 Authentication credentials invalid",
        status_code=535,
    )

    # Act
    response = client.post(
        "/api/upload", files=pdf_upload, data={"jobTitle": "Data Engineer"}
    )

    # Assert
    assert response.status_code == status.HTTP_502_BAD_GATEWAY
    data = response.json()
    assert data["success"] is False
    assert data["emailSent"] is False
    assert data["filename"] == "Data Engineer_20240115_resume.pdf"
    assert data["emailErrorType"] == "transport"
    assert "535 5.7.8 Authentication credentials invalid" in data["emailError"]


def test_upload_timeout_returns_504(client, mock_mail_sender, pdf_upload):
    """Timeout is reported distinctly from a transport error."""
    # Arrange
    client.app.dependency_overrides[get_settings] = lambda: AppSettings.for_testing(
        send_timeout_seconds=0.05
    )

    async def never_answers(**kwargs):
        await asyncio.sleep(5)

    mock_mail_sender.send.side_effect = never_answers

    # Act
    response = client.post("/api/upload", files=pdf_upload, data={"jobTitle": "SRE"})

    # Assert
    assert response.status_code == status.HTTP_504_GATEWAY_TIMEOUT
    data = response.json()
    assert data["success"] is False
    assert data["emailSent"] is False
    assert data["filename"] == "SRE_20240115_resume.pdf"
    assert data["emailErrorType"] == "timeout"
    assert "timed out" in data["emailError"]


# ============================================================================
# CLIENT INPUT ERRORS
# ============================================================================


def test_upload_rejects_non_pdf(client, mock_mail_sender, word_upload, caplog):
    """application/msword: 415, no transport call, no send-attempt log line."""
    caplog.set_level(logging.INFO)

    response = client.post("/api/upload", files=word_upload, data={"jobTitle": "QA"})

    assert response.status_code == status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "UNSUPPORTED_TYPE"
    assert "unsupported type" in data["message"]
    assert data["details"]["mime_type"] == "application/msword"
    assert "filename" not in data
    mock_mail_sender.send.assert_not_awaited()
    assert not [r for r in caplog.records if SEND_ATTEMPT_LOG in r.getMessage()]


def test_upload_rejects_oversized_pdf(client, mock_mail_sender, caplog):
    """6 MB PDF: 413 before any transport call."""
    caplog.set_level(logging.INFO)
    content = b"%PDF" + b"0" * (6 * 1024 * 1024)

    response = client.post(
        "/api/upload", files={"file": ("cv.pdf", content, "application/pdf")}
    )

    assert response.status_code == 413
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "PAYLOAD_TOO_LARGE"
    assert data["details"]["max_size_bytes"] == MAX_FILE_SIZE_BYTES
    mock_mail_sender.send.assert_not_awaited()
    assert not [r for r in caplog.records if SEND_ATTEMPT_LOG in r.getMessage()]


def test_upload_without_file_returns_400(client, mock_mail_sender):
    response = client.post("/api/upload", data={"jobTitle": "QA"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "MISSING_FILE"
    mock_mail_sender.send.assert_not_awaited()


def test_upload_with_two_files_returns_400(client, mock_mail_sender, pdf_bytes):
    response = client.post(
        "/api/upload",
        files=[
            ("file", ("a.pdf", pdf_bytes, "application/pdf")),
            ("file", ("b.pdf", pdf_bytes, "application/pdf")),
        ],
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["code"] == "TOO_MANY_FILES"
    assert data["details"]["file_count"] == 2
    mock_mail_sender.send.assert_not_awaited()


def test_upload_with_text_in_file_field_returns_400(client, mock_mail_sender):
    """A plain form value under `file` is a malformed request, not a crash."""
    response = client.post("/api/upload", data={"file": "not-a-file"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["success"] is False
    mock_mail_sender.send.assert_not_awaited()


# ============================================================================
# OTHER METHODS
# ============================================================================


@pytest.mark.parametrize("path", ["/api/upload", "/upload"])
def test_options_returns_empty_success(client, path):
    response = client.options(path)

    assert response.status_code == status.HTTP_200_OK
    assert response.content == b""


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
def test_other_methods_are_not_allowed(client, mock_mail_sender, method):
    response = client.request(method, "/api/upload")

    assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
    assert response.json() == {"success": False, "message": "Method not allowed"}
    assert response.headers["allow"] == "POST, OPTIONS"
    mock_mail_sender.send.assert_not_awaited()
