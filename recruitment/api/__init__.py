"""
API Layer - FastAPI Presentation Layer

Responsibility:
    HTTP interface for the résumé upload service. Parses multipart requests,
    wires the Application Layer services through dependency injection and
    maps their results to status codes. No business logic.

Contains:
    - FastAPI app factory (main.create_app)
    - Upload router (POST /api/upload, POST /upload)
    - Request/Response models (Pydantic)
    - Middleware configuration (CORS, request logging)

Does NOT contain:
    - Validation rules (belong to Domain/Application layers)
    - Mail delivery (belongs to Infrastructure layer)
"""
