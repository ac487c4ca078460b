"""
Reconciliation engine and its report.
"""

from .engine import ReconciliationEngine
from .report import ReconciliationReport

__all__ = ["ReconciliationEngine", "ReconciliationReport"]
