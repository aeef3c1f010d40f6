"""
Pytest Configuration and Shared Fixtures

This module contains pytest configuration and shared fixtures used across
all test suites (unit, e2e).

Fixtures:
    - pdf_bytes: Small well-formed PDF payload
    - fixed_now: Fixed submission timestamp (2024-01-15 UTC)
    - test_settings: AppSettings without any real mail credentials
    - mock_mail_sender: AsyncMock implementing MailSenderProtocol
    - test_client: FastAPI TestClient wired to mock_mail_sender and fixed_now

Architecture Notes:
    - No test talks to a real mail provider
    - Dependencies are replaced through app.dependency_overrides
    - TestClient doesn't require running server

Usage:
    def test_something(test_client, pdf_bytes):
        response = test_client.post(
            "/api/upload",
            files={"file": ("resume.pdf", pdf_bytes, "application/pdf")},
        )
        assert response.status_code == 200
"""

import logging
from datetime import datetime, timezone
from typing import Generator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from recruitment.api.main import create_app
from recruitment.api.routers.upload import get_intake_validator, get_mail_sender
from recruitment.application.services.intake_validator import IntakeValidator
from recruitment.shared.settings import AppSettings

# Configure logger for tests
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ============================================================================
# DATA FIXTURES
# ============================================================================


@pytest.fixture
def pdf_bytes() -> bytes:
    """Minimal one-page PDF."""
    return (
        b"%PDF-1.4\n"
        b"1 0 obj<</Type/Catalog/Pages 2 0 R>>endobj\n"
        b"2 0 obj<</Type/Pages/Kids[3 0 R]/Count 1>>endobj\n"
        b"3 0 obj<</Type/Page/Parent 2 0 R/MediaBox[0 0 612 792]>>endobj\n"
        b"trailer<</Root 1 0 R>>\n"
        b"%%EOF\n"
    )


@pytest.fixture
def fixed_now() -> datetime:
    """Submission timestamp used wherever a deterministic filename is asserted."""
    return datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


# ============================================================================
# APPLICATION FIXTURES
# ============================================================================


@pytest.fixture
def test_settings() -> AppSettings:
    """Default settings: SMTP transport, nothing configured, memory storage."""
    return AppSettings.for_testing(target_email="hr@example.com")


@pytest.fixture
def mock_mail_sender() -> AsyncMock:
    """
    Mail sender that accepts every message.

    Tests change `send.side_effect` to simulate failures.
    """
    sender = AsyncMock()
    sender.name = "mock"
    sender.send.return_value = "<message-1@example.com>"
    return sender


@pytest.fixture
def test_client(
    test_settings, mock_mail_sender, fixed_now
) -> Generator[TestClient, None, None]:
    """
    Provide FastAPI TestClient for API testing.

    The mail transport is replaced by mock_mail_sender and the validator
    clock by fixed_now. Server exceptions are turned into responses so the
    500 handler can be asserted.

    Examples:
        >>> def test_health_endpoint(test_client):
        ...     response = test_client.get("/health")
        ...     assert response.status_code == 200
    """
    app = create_app(test_settings)
    app.dependency_overrides[get_mail_sender] = lambda: mock_mail_sender
    app.dependency_overrides[get_intake_validator] = lambda: IntakeValidator(
        clock=lambda: fixed_now
    )

    with TestClient(app, raise_server_exceptions=False) as client:
        yield client

    app.dependency_overrides.clear()


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """
    Pytest configuration hook.

    Registers custom markers for test categorization.

    Markers:
        - e2e: End-to-end tests (full HTTP flow through create_app)
        - unit: Unit tests (no external dependencies)
        - slow: Slow tests (>1s execution time)

    Usage:
        # Run only E2E tests:
        # pytest -m e2e

        # Run all except E2E:
        # pytest -m "not e2e"
    """
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests (full HTTP flow through create_app)"
    )
    config.addinivalue_line(
        "markers", "unit: Unit tests (no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "slow: Slow tests (>1s execution time)"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically adds 'slow' marker to E2E tests."""
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(pytest.mark.slow)
