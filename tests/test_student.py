from datetime import date, datetime

import pytest

from roster.core.entities import Student, calculate_age
from roster.core.enums import Modality, AcademicStanding
from roster.core.exceptions import ValidationError
from tests.conftest import make_student, years_ago


def test_average_of_empty_grades_is_zero() -> None:
    student = make_student()
    assert student.grades == []
    assert student.compute_average() == 0


def test_average_is_arithmetic_mean() -> None:
    student = make_student(grades=[8, 9, 10])
    assert student.compute_average() == 9


def test_average_of_five_grades() -> None:
    student = make_student(grades=[1, 2, 3, 4, 5])
    assert student.grades == [1, 2, 3, 4, 5]
    assert student.compute_average() == 3


def test_more_than_five_grades_are_discarded_at_construction() -> None:
    student = make_student(grades=[10, 10, 10, 10, 10, 10])
    assert student.grades == []
    assert student.compute_average() == 0


def test_student_aged_exactly_sixteen_is_accepted() -> None:
    student = make_student(birth_date=years_ago(16))
    assert student.age == 16


def test_student_under_sixteen_is_rejected(tomorrow) -> None:
    with pytest.raises(ValidationError) as exc_info:
        make_student(birth_date=years_ago(16, tomorrow))
    assert exc_info.value.error_code == "UNDERAGE_STUDENT"


def test_calculate_age_counts_full_years() -> None:
    assert calculate_age(date(2005, 6, 15), today=date(2021, 6, 14)) == 15
    assert calculate_age(date(2005, 6, 15), today=date(2021, 6, 15)) == 16


def test_datetime_birth_date_is_accepted() -> None:
    student = make_student(birth_date=datetime(2005, 6, 15, 12, 30))
    assert student.birth_date == date(2005, 6, 15)


def test_modality_accepts_string_value() -> None:
    student = make_student(modality="remote")
    assert student.modality is Modality.REMOTE


def test_unknown_modality_is_rejected() -> None:
    with pytest.raises(ValidationError):
        make_student(modality="hybrid")


def test_deactivate_and_activate() -> None:
    student = make_student()
    assert student.active is True
    student.deactivate()
    assert student.active is False
    student.deactivate()
    assert student.active is False
    student.activate()
    assert student.active is True


@pytest.mark.parametrize(
    "grades, standing, phrase",
    [
        ([8, 9, 10], AcademicStanding.ABOVE_AVERAGE, "above average"),
        ([6, 6], AcademicStanding.AT_AVERAGE, "at average"),
        ([2, 5], AcademicStanding.BELOW_AVERAGE, "below average"),
        (None, AcademicStanding.BELOW_AVERAGE, "below average"),
    ],
)
def test_classify(grades, standing, phrase) -> None:
    student = make_student(grades=grades)
    assert student.standing is standing
    message = student.classify()
    assert phrase in message
    assert "Joao Silva" in message


def test_set_grades_replaces_list_and_bumps_version() -> None:
    student = make_student(grades=[1, 2])
    version = student.version
    student.set_grades([7, 8])
    assert student.grades == [7, 8]
    assert student.version == version + 1


def test_set_grades_rejects_more_than_five() -> None:
    student = make_student(grades=[1, 2])
    with pytest.raises(ValidationError):
        student.set_grades([1, 2, 3, 4, 5, 6])
    assert student.grades == [1, 2]


def test_grades_property_is_a_copy() -> None:
    student = make_student(grades=[8])
    student.grades.append(0)
    assert student.grades == [8]


def test_to_dict() -> None:
    student = make_student(grades=[8, 9, 10])
    data = student.to_dict()
    assert data['email'] == "joao.silva@email.com"
    assert data['modality'] == "in-person"
    assert data['class_code'] == 1
    assert data['birth_date'] == "2005-06-15"
    assert data['average'] == 9
    assert data['active'] is True


def test_report_lines_describe_student(sink) -> None:
    student = make_student(grades=[8, 9, 10])
    student.report(sink)
    assert len(sink.lines) == 1
    assert "Joao Silva <joao.silva@email.com>" in sink.lines[0]
    assert "average 9.00" in sink.lines[0]


def test_student_fields_cannot_be_overwritten_without_checks() -> None:
    student = make_student(grades=[8])
    assert not hasattr(student, "update")
    version = student.version
    student.deactivate()
    student.activate()
    assert student.version == version + 2
    assert student.class_code == 1
    assert student.grades == [8]
