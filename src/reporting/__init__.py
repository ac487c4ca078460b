"""
Report output: JSON, CSV and console summaries.
"""

from .formatting import format_bytes
from .writer import AuditReportWriter, summary_lines

__all__ = ["AuditReportWriter", "format_bytes", "summary_lines"]
