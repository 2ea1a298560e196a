"""
Pydantic models for partial student updates and school reports.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import Modality, AVERAGE_THRESHOLD, MAX_GRADES


class StudentUpdate(BaseModel):
    """Fields of a student that may be edited after enrollment.

    Identity fields (``class_code``) are deliberately absent. Only the
    fields that were explicitly set are applied, see
    :meth:`roster.core.entities.SchoolClass.update_student`.
    """
    model_config = ConfigDict(extra="forbid")

    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=1)
    modality: Optional[Modality] = None
    birth_date: Optional[date] = None
    grades: Optional[List[float]] = Field(None, max_length=MAX_GRADES)
    active: Optional[bool] = None

    @field_validator("birth_date", mode="before")
    @classmethod
    def trim_datetime(cls, value):
        if isinstance(value, datetime):
            return value.date()
        return value


class SchoolReport(BaseModel):
    """Aggregate figures produced by ``School.generate_report``."""
    model_config = ConfigDict(frozen=True)

    school_name: str
    class_count: int
    total_students: int
    above_threshold: int
    below_threshold: int

    def lines(self) -> List[str]:
        return [
            f"School: {self.school_name}",
            f"Classes: {self.class_count}",
            f"Total students: {self.total_students}",
            f"Students with average >= {AVERAGE_THRESHOLD}: {self.above_threshold}",
            f"Students with average < {AVERAGE_THRESHOLD}: {self.below_threshold}",
        ]
