"""
Core module containing the roster object model and its rules.
"""

from .entities import *
from .interfaces import *
from .exceptions import *
from .enums import *
from .schemas import *

__all__ = [
    # Entities
    "AbstractEntity",
    "Student",
    "SchoolClass",
    "School",
    "calculate_age",
    
    # Interfaces
    "Reportable",
    "ReportSink",
    "ConsoleReportSink",
    
    # Schemas
    "StudentUpdate",
    "SchoolReport",
    
    # Enums
    "Modality",
    "AcademicStanding",
    
    # Exceptions
    "RosterException",
    "ValidationError",
    "CapacityError",
    "ConflictError",
    "NotFoundError",
    "ConfigurationError",
]
