"""
Shared

Cross-cutting configuration used by the API factory and the CLI scripts.
"""

from .settings import AppSettings

__all__ = ["AppSettings"]
