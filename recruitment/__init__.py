"""
Recruitment Résumé Intake Service

Accepts PDF résumés submitted for a job posting and forwards them to the
recruiting mailbox through a configurable mail transport.

Layers:
    - api: FastAPI presentation layer (routers, schemas, app factory)
    - application: use cases and ports (intake validation, dispatch)
    - domain: submission model, filename rules, delivery outcomes
    - infrastructure: mail transports and temporary file storage
    - shared: settings
"""

__version__ = "0.1.0"
