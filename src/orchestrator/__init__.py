"""
Audit orchestration and command line entry point.
"""

from .main import AuditOutcome, AuditRunner, main

__all__ = ["AuditOutcome", "AuditRunner", "main"]
