"""Service layer for Fusion Agent."""

from .config_service import ConfigService

__all__ = ["ConfigService"]
