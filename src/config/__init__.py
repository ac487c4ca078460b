"""
Configuration package for the media hygiene inspector.
"""

from .settings import AppConfig, AuditSettings, ensure_directories

__all__ = ["AppConfig", "AuditSettings", "ensure_directories"]
