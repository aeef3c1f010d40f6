"""
File Storage Infrastructure Module

Temporary staging of uploads on the local file system.

Exports:
    - FileStorageService: scoped staging + age-based cleanup (implements Protocol)
"""

from .file_storage_service import FileStorageService

__all__ = ["FileStorageService"]
