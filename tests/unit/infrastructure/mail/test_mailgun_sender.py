"""
Tests for MailgunMailSender.

HTTP calls go to httpx.MockTransport; no request leaves the process.
"""

import base64

import httpx
import pytest

from recruitment.application.ports.mail_sender import MailDeliveryError
from recruitment.infrastructure.mail.mailgun_sender import MailgunMailSender


def make_sender(handler, **overrides) -> MailgunMailSender:
    values = {
        "api_key": "key-123",
        "domain": "mg.example.com",
        "sender": None,
        "recipient": "hr@example.com",
        "transport": httpx.MockTransport(handler),
    }
    values.update(overrides)
    return MailgunMailSender(**values)


@pytest.mark.asyncio
async def test_send_posts_multipart_message(pdf_bytes):
    # Arrange
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(
            200, json={"id": "<20240115.1@mg.example.com>", "message": "Queued. Thank you."}
        )

    sender = make_sender(handler)

    # Act
    message_id = await sender.send(
        pdf_bytes, "Data Engineer_20240115_resume.pdf", "New résumé", "Body"
    )

    # Assert
    assert message_id == "<20240115.1@mg.example.com>"
    request = captured["request"]
    assert request.method == "POST"
    assert request.url == "https://api.mailgun.net/v3/mg.example.com/messages"
    expected_auth = base64.b64encode(b"api:key-123").decode()
    assert request.headers["authorization"] == f"Basic {expected_auth}"
    assert request.headers["content-type"].startswith("multipart/form-data")
    assert b'filename="Data Engineer_20240115_resume.pdf"' in request.content
    assert b"Recruitment <recruitment@mg.example.com>" in request.content
    assert b"hr@example.com" in request.content
    assert pdf_bytes in request.content


@pytest.mark.asyncio
async def test_send_uses_configured_base_url(pdf_bytes):
    captured = {}

    def handler(request):
        captured["url"] = str(request.url)
        return httpx.Response(200, json={"id": "<1@mg.example.com>"})

    sender = make_sender(handler, base_url="https://api.eu.mailgun.net/")
    await sender.send(pdf_bytes, "cv.pdf", "Subject", "Body")

    assert captured["url"] == "https://api.eu.mailgun.net/v3/mg.example.com/messages"


@pytest.mark.asyncio
async def test_send_provider_rejection(pdf_bytes):
    def handler(request):
        return httpx.Response(400, json={"message": "'to' parameter is not a valid address"})

    sender = make_sender(handler)

    with pytest.raises(MailDeliveryError) as exc_info:
        await sender.send(pdf_bytes, "cv.pdf", "Subject", "Body")

    error = exc_info.value
    assert error.status_code == 400
    assert error.detail == "'to' parameter is not a valid address"
    assert error.provider == "mailgun"


@pytest.mark.asyncio
async def test_send_unauthorized_plain_text(pdf_bytes):
    def handler(request):
        return httpx.Response(401, text="Forbidden")

    sender = make_sender(handler)

    with pytest.raises(MailDeliveryError) as exc_info:
        await sender.send(pdf_bytes, "cv.pdf", "Subject", "Body")

    assert exc_info.value.detail == "Forbidden"


@pytest.mark.asyncio
async def test_send_connection_error(pdf_bytes):
    def handler(request):
        raise httpx.ConnectError("Name or service not known", request=request)

    sender = make_sender(handler)

    with pytest.raises(MailDeliveryError) as exc_info:
        await sender.send(pdf_bytes, "cv.pdf", "Subject", "Body")

    assert "Name or service not known" in str(exc_info.value)


@pytest.mark.asyncio
async def test_send_timeout_propagates_as_timeout(pdf_bytes):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    sender = make_sender(handler)

    with pytest.raises(TimeoutError):
        await sender.send(pdf_bytes, "cv.pdf", "Subject", "Body")


@pytest.mark.asyncio
async def test_send_response_without_id(pdf_bytes):
    sender = make_sender(lambda request: httpx.Response(200, json={"message": "Queued"}))

    with pytest.raises(MailDeliveryError):
        await sender.send(pdf_bytes, "cv.pdf", "Subject", "Body")


@pytest.mark.asyncio
async def test_send_not_configured(pdf_bytes):
    def handler(request):
        raise AssertionError("no request expected")

    sender = make_sender(handler, api_key=None, domain=None)

    with pytest.raises(MailDeliveryError) as exc_info:
        await sender.send(pdf_bytes, "cv.pdf", "Subject", "Body")

    assert "MAILGUN_API_KEY" in str(exc_info.value)
    assert "MAILGUN_DOMAIN" in str(exc_info.value)


@pytest.mark.asyncio
async def test_send_keeps_subject_on_one_line(pdf_bytes):
    captured = {}

    def handler(request):
        captured["content"] = request.content
        return httpx.Response(200, json={"id": "<1@mg.example.com>"})

    sender = make_sender(handler)
    await sender.send(pdf_bytes, "cv.pdf", "New résumé: Data\r\nEngineer", "Body")

    assert "New résumé: Data Engineer".encode() in captured["content"]
    assert b"Data\r\nEngineer" not in captured["content"]
