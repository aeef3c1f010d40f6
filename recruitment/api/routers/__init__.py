"""
API Routers Package

Contains all FastAPI routers grouped by functionality.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Routers are thin wrappers around Application Layer services
    - All routers follow dependency injection pattern

Available Routers:
    - upload_router: Résumé upload endpoint (POST /upload, OPTIONS, 405 for the rest)
"""

from .upload import router as upload_router

__all__ = ["upload_router"]
