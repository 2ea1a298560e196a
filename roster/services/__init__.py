"""
Services module containing the reporting sinks.
"""

from .reporting import ConsoleReportSink, MemoryReportSink, LoggingReportSink, create_report_sink

__all__ = [
    "ConsoleReportSink",
    "MemoryReportSink",
    "LoggingReportSink",
    "create_report_sink",
]
