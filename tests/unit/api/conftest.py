"""
Common fixtures for API unit tests.

Provides shared test utilities:
- TestClient alias with the mock transport installed
- Multipart payload helpers
"""

import pytest


@pytest.fixture
def client(test_client):
    """FastAPI TestClient with mock mail sender (see tests/conftest.py)."""
    return test_client


@pytest.fixture
def pdf_upload(pdf_bytes):
    """Multipart `files` argument carrying one valid PDF named resume.pdf."""
    return {"file": ("resume.pdf", pdf_bytes, "application/pdf")}


@pytest.fixture
def word_upload():
    """Multipart `files` argument carrying a Word document."""
    return {"file": ("resume.doc", b"\xd0\xcf\x11\xe0" + b"\x00" * 64, "application/msword")}
