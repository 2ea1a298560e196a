"""
Core interfaces and abstract base classes for the Roster package.
"""

from abc import ABC, abstractmethod
from typing import List


class ReportSink(ABC):
    """Consumer of human-readable status and report lines."""
    
    @abstractmethod
    def emit(self, line: str) -> None:
        """Write a single report line."""
        pass


class Reportable(ABC):
    """Interface for entities that can describe themselves to a report sink."""
    
    @abstractmethod
    def report_lines(self) -> List[str]:
        """Return the human-readable lines describing this entity."""
        pass
    
    def report(self, sink: ReportSink) -> None:
        """Emit this entity's description line by line."""
        for line in self.report_lines():
            sink.emit(line)


class ConsoleReportSink(ReportSink):
    """Prints every line to standard output."""
    
    def emit(self, line: str) -> None:
        print(line)
