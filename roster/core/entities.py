"""
Core entities for the Roster package: students, classes and the school.
"""

import logging
import uuid
from abc import ABC
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from .enums import (
    Modality, AcademicStanding, AVERAGE_THRESHOLD, MINIMUM_AGE, MAX_GRADES,
    MIN_CLASS_CODE, MAX_CLASS_CODE, MIN_CLASS_CAPACITY, MAX_CLASS_CAPACITY,
    MAX_CLASSES_PER_SCHOOL
)
from .interfaces import Reportable, ReportSink, ConsoleReportSink
from .schemas import StudentUpdate, SchoolReport
from .exceptions import ValidationError, CapacityError, ConflictError, NotFoundError


logger = logging.getLogger(__name__)


def calculate_age(birth_date: date, today: Optional[date] = None) -> int:
    """Age in full years at ``today`` (defaults to the current date)."""
    today = today or date.today()
    had_birthday = (today.month, today.day) >= (birth_date.month, birth_date.day)
    return today.year - birth_date.year - (0 if had_birthday else 1)


def _coerce_modality(value: Union[Modality, str]) -> Modality:
    try:
        return Modality(value)
    except ValueError:
        raise ValidationError(
            f"Modality must be one of {[m.value for m in Modality]}",
            error_code="INVALID_MODALITY",
            details={'modality': value}
        ) from None


def _coerce_birth_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationError(
        "Birth date must be a date",
        error_code="INVALID_BIRTH_DATE",
        details={'birth_date': value}
    )


def _check_minimum_age(birth_date: date) -> None:
    age = calculate_age(birth_date)
    if age < MINIMUM_AGE:
        raise ValidationError(
            f"Student must be at least {MINIMUM_AGE} years old",
            error_code="UNDERAGE_STUDENT",
            details={'birth_date': birth_date.isoformat(), 'age': age}
        )


class AbstractEntity(ABC):
    """Base abstract entity with universal ID, timestamps and versioning."""

    def __init__(self, entity_id: Optional[str] = None):
        self._id = entity_id or str(uuid.uuid4())
        self._created_at = datetime.now(timezone.utc)
        self._updated_at = self._created_at
        self._version = 1

    @property
    def id(self) -> str:
        """Get the entity ID."""
        return self._id

    @property
    def created_at(self) -> datetime:
        """Get creation timestamp."""
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        """Get last update timestamp."""
        return self._updated_at

    @property
    def version(self) -> int:
        """Get current version."""
        return self._version

    def _touch(self) -> None:
        """Record a mutation: bump the version and the update timestamp."""
        self._updated_at = datetime.now(timezone.utc)
        self._version += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary."""
        return {
            'id': self._id,
            'created_at': self._created_at.isoformat(),
            'updated_at': self._updated_at.isoformat(),
            'version': self._version,
        }

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id})"


class Student(AbstractEntity, Reportable):
    """A student enrolled (or about to be enrolled) in one class."""

    def __init__(self, first_name: str, last_name: str, email: str,
                 modality: Union[Modality, str], class_code: int,
                 birth_date: Union[date, datetime],
                 grades: Optional[Sequence[float]] = None, **kwargs):
        super().__init__(**kwargs)
        birth_date = _coerce_birth_date(birth_date)
        _check_minimum_age(birth_date)

        self._first_name = first_name
        self._last_name = last_name
        self._email = email
        self._modality = _coerce_modality(modality)
        self._class_code = class_code
        self._birth_date = birth_date
        self._grades: List[float] = []
        self._active = True

        if grades is not None:
            if len(grades) <= MAX_GRADES:
                self._grades = list(grades)
            else:
                logger.warning(
                    "Discarding %d grades for %s: at most %d are kept",
                    len(grades), email, MAX_GRADES
                )

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    @property
    def email(self) -> str:
        return self._email

    @property
    def modality(self) -> Modality:
        return self._modality

    @property
    def class_code(self) -> int:
        return self._class_code

    @property
    def birth_date(self) -> date:
        return self._birth_date

    @property
    def age(self) -> int:
        return calculate_age(self._birth_date)

    @property
    def grades(self) -> List[float]:
        return self._grades.copy()

    @property
    def active(self) -> bool:
        return self._active

    def activate(self) -> None:
        """Mark the student as active."""
        self._active = True
        self._touch()

    def deactivate(self) -> None:
        """Mark the student as inactive."""
        self._active = False
        self._touch()

    def set_grades(self, grades: Sequence[float]) -> None:
        """Replace the grade list."""
        if len(grades) > MAX_GRADES:
            raise ValidationError(
                f"A student can have at most {MAX_GRADES} grades",
                error_code="TOO_MANY_GRADES",
                details={'email': self._email, 'count': len(grades)}
            )
        self._grades = list(grades)
        self._touch()

    def _apply_update(self, values: Dict[str, Any]) -> None:
        """Write already-validated StudentUpdate fields."""
        for key in ("first_name", "last_name", "email", "birth_date", "active"):
            if key in values:
                setattr(self, f"_{key}", values[key])
        if "modality" in values:
            self._modality = _coerce_modality(values["modality"])
        if "grades" in values:
            self._grades = list(values["grades"])
        self._touch()

    def compute_average(self) -> float:
        """Arithmetic mean of the grades, 0 when there are none."""
        if not self._grades:
            return 0
        return sum(self._grades) / len(self._grades)

    @property
    def standing(self) -> AcademicStanding:
        average = self.compute_average()
        if average > AVERAGE_THRESHOLD:
            return AcademicStanding.ABOVE_AVERAGE
        if average < AVERAGE_THRESHOLD:
            return AcademicStanding.BELOW_AVERAGE
        return AcademicStanding.AT_AVERAGE

    def classify(self) -> str:
        """Human-readable standing of the student against the threshold."""
        return f"{self.full_name} is {self.standing.value}."

    def report_lines(self) -> List[str]:
        status = "active" if self._active else "inactive"
        return [
            f"{self.full_name} <{self._email}> | class {self._class_code} | "
            f"{self._modality.value} | age {self.age} | grades {self._grades} | "
            f"average {self.compute_average():.2f} | {status}"
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert student to dictionary."""
        base_dict = super().to_dict()
        base_dict.update({
            'first_name': self._first_name,
            'last_name': self._last_name,
            'email': self._email,
            'modality': self._modality.value,
            'class_code': self._class_code,
            'birth_date': self._birth_date.isoformat(),
            'grades': list(self._grades),
            'active': self._active,
            'average': self.compute_average(),
        })
        return base_dict

    def __repr__(self) -> str:
        return f"Student(email={self._email!r}, class_code={self._class_code})"


class SchoolClass(AbstractEntity, Reportable):
    """A class with a bounded, ordered roster of students."""

    def __init__(self, code: int, maximum: int, description: str,
                 modality: Union[Modality, str], **kwargs):
        if not isinstance(code, int) or isinstance(code, bool):
            raise ValidationError(
                "Class code must be an integer",
                error_code="INVALID_CLASS_CODE",
                details={'code': code}
            )
        if not isinstance(maximum, int) or isinstance(maximum, bool):
            raise ValidationError(
                "Class capacity must be an integer",
                error_code="INVALID_CLASS_CAPACITY",
                details={'maximum': maximum}
            )
        if not MIN_CLASS_CODE <= code <= MAX_CLASS_CODE:
            raise ValidationError(
                f"Class code must be between {MIN_CLASS_CODE} and {MAX_CLASS_CODE}",
                error_code="INVALID_CLASS_CODE",
                details={'code': code}
            )
        if not MIN_CLASS_CAPACITY <= maximum <= MAX_CLASS_CAPACITY:
            raise ValidationError(
                f"Class capacity must be between {MIN_CLASS_CAPACITY} and {MAX_CLASS_CAPACITY}",
                error_code="INVALID_CLASS_CAPACITY",
                details={'maximum': maximum}
            )
        modality = _coerce_modality(modality)
        super().__init__(**kwargs)
        self._code = code
        self._maximum = maximum
        self._description = description
        self._modality = modality
        self._students: List[Student] = []

    @property
    def code(self) -> int:
        return self._code

    @property
    def maximum(self) -> int:
        return self._maximum

    @property
    def description(self) -> str:
        return self._description

    @property
    def modality(self) -> Modality:
        return self._modality

    @property
    def enrolled_count(self) -> int:
        return len(self._students)

    @property
    def is_full(self) -> bool:
        return len(self._students) >= self._maximum

    def enroll(self, student: Student) -> None:
        """Append a student to the roster.

        Every precondition is checked before the roster is touched, so a
        rejected enrollment leaves the class unchanged.
        """
        if self.is_full:
            raise CapacityError(
                f"Class {self._code} is full ({self._maximum} students)",
                error_code="CLASS_FULL",
                details={'code': self._code, 'maximum': self._maximum}
            )
        if student.class_code != self._code:
            raise ConflictError(
                f"Student belongs to class {student.class_code}, not {self._code}",
                error_code="CLASS_CODE_MISMATCH",
                details={'email': student.email, 'class_code': student.class_code, 'code': self._code}
            )
        if self.find(student.email) is not None:
            raise ConflictError(
                f"A student with email {student.email} is already enrolled",
                error_code="DUPLICATE_EMAIL",
                details={'email': student.email, 'code': self._code}
            )
        if student.modality != self._modality:
            raise ConflictError(
                f"Student modality {student.modality.value} does not match class modality {self._modality.value}",
                error_code="MODALITY_MISMATCH",
                details={'email': student.email, 'modality': student.modality.value}
            )

        self._students.append(student)
        self._touch()
        logger.debug("Enrolled %s in class %d", student.email, self._code)

    def unenroll(self, email: str) -> Student:
        """Remove the student with the given email and return it."""
        for index, student in enumerate(self._students):
            if student.email == email:
                del self._students[index]
                self._touch()
                logger.debug("Removed %s from class %d", email, self._code)
                return student
        raise NotFoundError(
            f"No student with email {email} in class {self._code}",
            error_code="STUDENT_NOT_FOUND",
            details={'email': email, 'code': self._code}
        )

    def update_student(self, email: str,
                       changes: Union[StudentUpdate, Mapping[str, Any], None] = None,
                       /, **fields) -> Student:
        """Apply a partial update to an enrolled student.

        ``changes`` is a :class:`StudentUpdate` or a mapping of its fields;
        keyword arguments are accepted as well. Only supplied fields are
        written. The merged values are checked against the roster
        invariants first: age, grade count, modality and email uniqueness.
        """
        student = self.get_student(email)

        if changes is None:
            changes = fields
        if not isinstance(changes, StudentUpdate):
            try:
                changes = StudentUpdate.model_validate(dict(changes))
            except PydanticValidationError as e:
                raise ValidationError(
                    f"Invalid student update: {e.error_count()} error(s)",
                    error_code="INVALID_UPDATE",
                    details={'email': email, 'errors': e.errors(include_url=False)}
                ) from e
        values = changes.model_dump(exclude_unset=True, exclude_none=True)

        if 'birth_date' in values:
            _check_minimum_age(values['birth_date'])
        if 'grades' in values and len(values['grades']) > MAX_GRADES:
            raise ValidationError(
                f"A student can have at most {MAX_GRADES} grades",
                error_code="TOO_MANY_GRADES",
                details={'email': email, 'count': len(values['grades'])}
            )
        if 'modality' in values and values['modality'] != self._modality:
            raise ConflictError(
                f"Student modality must stay {self._modality.value} in class {self._code}",
                error_code="MODALITY_MISMATCH",
                details={'email': email, 'modality': values['modality'].value}
            )
        new_email = values.get('email', email)
        if new_email != email and self.find(new_email) is not None:
            raise ConflictError(
                f"A student with email {new_email} is already enrolled",
                error_code="DUPLICATE_EMAIL",
                details={'email': new_email, 'code': self._code}
            )

        student._apply_update(values)
        logger.debug("Updated %s in class %d: %s", email, self._code, sorted(values))
        return student

    def find(self, email: str) -> Optional[Student]:
        """Return the enrolled student with this email, or None."""
        for student in self._students:
            if student.email == email:
                return student
        return None

    def get_student(self, email: str) -> Student:
        """Like :meth:`find`, but raise when the student is absent."""
        student = self.find(email)
        if student is None:
            raise NotFoundError(
                f"No student with email {email} in class {self._code}",
                error_code="STUDENT_NOT_FOUND",
                details={'email': email, 'code': self._code}
            )
        return student

    def list_students(self) -> List[Student]:
        """Snapshot of the roster in enrollment order."""
        return self._students.copy()

    def count(self) -> int:
        return len(self._students)

    def report_lines(self) -> List[str]:
        lines = [
            f"Class {self._code} - {self._description} ({self._modality.value}): "
            f"{len(self._students)}/{self._maximum} students"
        ]
        for student in self._students:
            lines.extend(f"  {line}" for line in student.report_lines())
        return lines

    def to_dict(self) -> Dict[str, Any]:
        """Convert class to dictionary."""
        base_dict = super().to_dict()
        base_dict.update({
            'code': self._code,
            'maximum': self._maximum,
            'description': self._description,
            'modality': self._modality.value,
            'students': [student.to_dict() for student in self._students],
        })
        return base_dict

    def __repr__(self) -> str:
        return f"SchoolClass(code={self._code}, students={len(self._students)}/{self._maximum})"


class School(AbstractEntity, Reportable):
    """A school holding up to ten classes with distinct codes."""

    def __init__(self, name: str, **kwargs):
        super().__init__(**kwargs)
        self._name = name
        self._classes: List[SchoolClass] = []

    @property
    def name(self) -> str:
        return self._name

    def add_class(self, school_class: SchoolClass) -> None:
        """Register a class with the school."""
        if len(self._classes) >= MAX_CLASSES_PER_SCHOOL:
            raise CapacityError(
                f"A school can hold at most {MAX_CLASSES_PER_SCHOOL} classes",
                error_code="SCHOOL_FULL",
                details={'school': self._name}
            )
        if self.find_class(school_class.code) is not None:
            raise ConflictError(
                f"Class code {school_class.code} is already registered",
                error_code="DUPLICATE_CLASS_CODE",
                details={'school': self._name, 'code': school_class.code}
            )
        self._classes.append(school_class)
        self._touch()
        logger.debug("Registered class %d with %s", school_class.code, self._name)

    def remove_class(self, code: int) -> SchoolClass:
        """Remove the class with the given code and return it."""
        school_class = self.get_class(code)
        self._classes.remove(school_class)
        self._touch()
        logger.debug("Removed class %d from %s", code, self._name)
        return school_class

    def find_class(self, code: int) -> Optional[SchoolClass]:
        for school_class in self._classes:
            if school_class.code == code:
                return school_class
        return None

    def get_class(self, code: int) -> SchoolClass:
        school_class = self.find_class(code)
        if school_class is None:
            raise NotFoundError(
                f"No class with code {code} in {self._name}",
                error_code="CLASS_NOT_FOUND",
                details={'school': self._name, 'code': code}
            )
        return school_class

    def find_student(self, email: str) -> Optional[Student]:
        """Search every class for a student with this email."""
        for school_class in self._classes:
            student = school_class.find(email)
            if student is not None:
                return student
        return None

    def list_classes(self) -> List[SchoolClass]:
        """Snapshot of the registered classes in insertion order."""
        return self._classes.copy()

    def count_classes(self) -> int:
        return len(self._classes)

    def generate_report(self, sink: Optional[ReportSink] = None) -> SchoolReport:
        """Aggregate student figures across all classes and emit them.

        Students are split on ``average >= 6`` versus ``average < 6``.
        Without a sink the report is printed to the console.
        """
        if sink is None:
            sink = ConsoleReportSink()

        total = 0
        above = 0
        for school_class in self._classes:
            total += school_class.count()
            for student in school_class.list_students():
                if student.compute_average() >= AVERAGE_THRESHOLD:
                    above += 1

        report = SchoolReport(
            school_name=self._name,
            class_count=len(self._classes),
            total_students=total,
            above_threshold=above,
            below_threshold=total - above,
        )
        for line in report.lines():
            sink.emit(line)
        return report

    def report_lines(self) -> List[str]:
        lines = [f"School {self._name}: {len(self._classes)} classes"]
        for school_class in self._classes:
            lines.extend(f"  {line}" for line in school_class.report_lines())
        return lines

    def to_dict(self) -> Dict[str, Any]:
        """Convert school to dictionary."""
        base_dict = super().to_dict()
        base_dict.update({
            'name': self._name,
            'classes': [school_class.to_dict() for school_class in self._classes],
        })
        return base_dict
