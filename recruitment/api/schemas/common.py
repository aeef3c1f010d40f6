"""
Common API Schemas

Shared Pydantic models used across all API routers.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error response model for rejected and failed requests.

    Keeps the `success` flag of the upload contract so a browser client can
    branch on one field for every response.

    Attributes:
        success: Always False
        code: Machine-readable error code (e.g., "UNSUPPORTED_TYPE", "MISSING_FILE")
        message: Human-readable error message
        details: Optional additional error details (limits, declared type, debug info)
    """

    success: bool = Field(default=False, description="Always false for errors")
    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        default=None, description="Additional error context"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "code": "UNSUPPORTED_TYPE",
                "message": "unsupported type: only PDF files are accepted",
                "details": {
                    "exception_type": "UnsupportedTypeError",
                    "mime_type": "application/msword",
                    "allowed_mime_type": "application/pdf",
                },
            }
        }


class MessageResponse(BaseModel):
    """Minimal `{success, message}` body (405 Method Not Allowed)."""

    success: bool = False
    message: str
