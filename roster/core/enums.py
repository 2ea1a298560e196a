"""
Enumerations and constants for the Roster package.
"""

from enum import Enum


class Modality(Enum):
    """Enrollment mode shared by a student and its class."""
    IN_PERSON = "in-person"
    REMOTE = "remote"


class AcademicStanding(Enum):
    """Position of a student's average relative to the passing threshold."""
    ABOVE_AVERAGE = "above average"
    AT_AVERAGE = "at average"
    BELOW_AVERAGE = "below average"


AVERAGE_THRESHOLD = 6
MINIMUM_AGE = 16
MAX_GRADES = 5

MIN_CLASS_CODE = 1
MAX_CLASS_CODE = 10
MIN_CLASS_CAPACITY = 5
MAX_CLASS_CAPACITY = 10

MAX_CLASSES_PER_SCHOOL = 10
