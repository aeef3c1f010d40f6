"""
API Router for Résumé Upload

Responsibility:
    HTTP interface for submitting one PDF résumé with a job title.
    Thin layer that delegates to Application Layer services via dependency injection.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Depends on Application Layer (IntakeValidator, ResumeDispatchUseCase)
    - Mounted twice by create_app(): under /api and at the root
    - ClientInputError raised by the validator is converted to 4xx by the
      global exception handler in main.py
    - Services are assembled from app.state (settings, mail sender, storage)

Contains:
    - POST /upload - Validate the upload and forward it by email
    - OPTIONS /upload - Pre-flight no-op (200, empty body)
    - GET/PUT/PATCH/DELETE /upload - 405 Method Not Allowed

Does NOT contain:
    - Validation rules (IntakeValidator)
    - Filename derivation (Domain Layer)
    - Mail delivery (Infrastructure Layer)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from recruitment.api.schemas.common import ErrorResponse, MessageResponse
from recruitment.application.ports.file_storage import UploadStagingProtocol
from recruitment.application.ports.mail_sender import MailSenderProtocol
from recruitment.application.services.intake_validator import IncomingFile, IntakeValidator
from recruitment.application.services.resume_dispatch_use_case import (
    ResumeDispatchUseCase,
)
from recruitment.domain.submission.constants import MAX_FILE_SIZE_BYTES
from recruitment.domain.submission.value_objects import DispatchResult
from recruitment.shared.settings import AppSettings

# Configure logger
logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Résumé submitted successfully"
TRANSPORT_FAILURE_MESSAGE = "Résumé received, but the notification email could not be sent"
TIMEOUT_FAILURE_MESSAGE = "Résumé received, but the notification email timed out"
METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed"


# ============================================================================
# RESPONSE MODELS
# ============================================================================


class UploadResponse(BaseModel):
    """
    Response model for a processed upload (sent or partially failed).

    Serialized with camelCase aliases and without unset fields.

    Attributes:
        success: True only when the email was sent
        message: Human-readable summary
        filename: Derived attachment filename ({title}_{YYYYMMDD}_{original})
        email_sent: Whether the transport accepted the message
        email_error: Provider detail when the send failed
        email_error_type: "transport" or "timeout" when the send failed
    """

    success: bool = Field(description="True only when the email was sent")
    message: str = Field(description="Human-readable summary")
    filename: Optional[str] = Field(
        default=None, description="Derived attachment filename"
    )
    email_sent: Optional[bool] = Field(default=None, alias="emailSent")
    email_error: Optional[str] = Field(default=None, alias="emailError")
    email_error_type: Optional[str] = Field(default=None, alias="emailErrorType")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "success": True,
                "message": "Résumé submitted successfully",
                "filename": "Data Engineer_20240115_resume.pdf",
                "emailSent": True,
            }
        }


# ============================================================================
# ROUTER CONFIGURATION
# ============================================================================


router = APIRouter(
    tags=["upload"],
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request - No file or more than one file"},
        405: {"model": MessageResponse, "description": "Method Not Allowed"},
        413: {"model": ErrorResponse, "description": "Payload Too Large - File exceeds 5 MiB"},
        415: {"model": ErrorResponse, "description": "Unsupported Media Type - File is not a PDF"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    },
)


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================


def get_settings(request: Request) -> AppSettings:
    """Settings built once by create_app()."""
    return request.app.state.settings


def get_mail_sender(request: Request) -> MailSenderProtocol:
    """Mail transport selected at startup (MAIL_TRANSPORT)."""
    return request.app.state.mail_sender


def get_file_storage(request: Request) -> Optional[UploadStagingProtocol]:
    """Upload staging service, or None when uploads stay in memory."""
    return request.app.state.file_storage


def get_intake_validator() -> IntakeValidator:
    return IntakeValidator()


def get_dispatch_use_case(
    settings: AppSettings = Depends(get_settings),
    mail_sender: MailSenderProtocol = Depends(get_mail_sender),
    file_storage: Optional[UploadStagingProtocol] = Depends(get_file_storage),
) -> ResumeDispatchUseCase:
    """
    Dependency injection for ResumeDispatchUseCase.

    Returns:
        ResumeDispatchUseCase bound to the configured transport and send budget
    """
    return ResumeDispatchUseCase(
        mail_sender=mail_sender,
        send_timeout_seconds=settings.send_timeout_seconds,
        file_storage=file_storage,
    )


# ============================================================================
# HELPERS
# ============================================================================


async def _read_part(part: UploadFile) -> IncomingFile:
    # One byte past the limit is enough to reject an oversized file
    content = await part.read(MAX_FILE_SIZE_BYTES + 1)
    return IncomingFile(
        filename=part.filename,
        content_type=part.content_type,
        content=content,
        size_bytes=part.size,
    )


def build_upload_response(result: DispatchResult) -> JSONResponse:
    """
    Map a DispatchResult to status code and body.

    Mapping:
        - DeliverySent                     -> 200
        - DeliveryFailed(reason=transport) -> 502
        - DeliveryFailed(reason=timeout)   -> 504
    """
    outcome = result.outcome

    if outcome.is_sent:
        status_code = status.HTTP_200_OK
        body = UploadResponse(
            success=True,
            message=SUCCESS_MESSAGE,
            filename=result.filename,
            email_sent=True,
        )
    else:
        if outcome.timed_out:
            status_code = status.HTTP_504_GATEWAY_TIMEOUT
            message = TIMEOUT_FAILURE_MESSAGE
        else:
            status_code = status.HTTP_502_BAD_GATEWAY
            message = TRANSPORT_FAILURE_MESSAGE
        body = UploadResponse(
            success=False,
            message=message,
            filename=result.filename,
            email_sent=False,
            email_error=outcome.error_detail,
            email_error_type=outcome.reason,
        )

    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


# ============================================================================
# ENDPOINTS
# ============================================================================


@router.post(
    "/upload",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    summary="Submit a PDF résumé",
    description=(
        "Upload exactly one PDF (max 5 MiB) in the `file` field with an optional "
        "`jobTitle`. The file is forwarded by email as "
        "`{jobTitle}_{YYYYMMDD}_{originalName}`. Returns 502/504 with the derived "
        "filename when the file was accepted but the email could not be sent."
    ),
    responses={
        200: {"description": "Success - Email sent", "model": UploadResponse},
        502: {"description": "Partial failure - Mail transport error", "model": UploadResponse},
        504: {"description": "Partial failure - Mail transport timed out", "model": UploadResponse},
    },
)
async def upload_resume(
    file: Optional[List[UploadFile]] = File(
        default=None, description="PDF résumé (exactly one, max 5 MiB)"
    ),
    job_title: Optional[str] = Form(
        default=None, alias="jobTitle", description="Position applied for"
    ),
    validator: IntakeValidator = Depends(get_intake_validator),
    use_case: ResumeDispatchUseCase = Depends(get_dispatch_use_case),
) -> JSONResponse:
    """
    Validate the upload and forward it to the recruiting mailbox.

    Process Flow:
        1. Read each `file` part (bounded to the size limit + 1 byte)
        2. IntakeValidator builds a Submission or raises ClientInputError
        3. ResumeDispatchUseCase derives the filename and sends once
        4. Outcome mapped to 200 / 502 / 504

    Raises:
        ClientInputError: Converted to 400/413/415 by the global handler

    Examples:
        >>> curl -X POST "http://localhost:8000/api/upload" \\
        ...      -F "file=@resume.pdf;type=application/pdf" \\
        ...      -F "jobTitle=Data Engineer"
        {
            "success": true,
            "message": "Résumé submitted successfully",
            "filename": "Data Engineer_20240115_resume.pdf",
            "emailSent": true
        }
    """
    incoming = [await _read_part(part) for part in file or []]

    submission = validator.validate(incoming, job_title=job_title)
    result = await use_case.execute(submission)

    return build_upload_response(result)


@router.options("/upload", include_in_schema=False)
async def upload_preflight() -> Response:
    """Pre-flight without CORS headers: success, no body."""
    return Response(status_code=status.HTTP_200_OK)


@router.api_route(
    "/upload",
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def upload_method_not_allowed(request: Request) -> JSONResponse:
    logger.info(f"Rejected {request.method} {request.url.path}: method not allowed")
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content=MessageResponse(message=METHOD_NOT_ALLOWED_MESSAGE).model_dump(),
        headers={"Allow": "POST, OPTIONS"},
    )
