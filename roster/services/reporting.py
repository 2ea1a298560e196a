"""
Report sinks: destinations for entity dumps and school reports.
"""

import logging
from typing import List, Optional

from ..core.interfaces import ReportSink, ConsoleReportSink


class MemoryReportSink(ReportSink):
    """Keeps emitted lines in memory, in order."""
    
    def __init__(self):
        self._lines: List[str] = []
    
    @property
    def lines(self) -> List[str]:
        return self._lines.copy()
    
    def emit(self, line: str) -> None:
        self._lines.append(line)
    
    def clear(self) -> None:
        self._lines.clear()


class LoggingReportSink(ReportSink):
    """Forwards lines to a logger at INFO level."""
    
    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("roster.report")
    
    def emit(self, line: str) -> None:
        self._logger.info(line)


_SINKS = {
    'console': ConsoleReportSink,
    'logging': LoggingReportSink,
    'memory': MemoryReportSink,
}


def create_report_sink(sink_type: str) -> ReportSink:
    """Build a sink by name: 'console', 'logging' or 'memory'."""
    try:
        return _SINKS[sink_type]()
    except KeyError:
        raise ValueError(f"Unsupported report sink type: {sink_type}") from None
