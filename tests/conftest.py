"""Shared fixtures for the roster tests."""

from datetime import date, timedelta

import pytest

from roster.core.entities import Student, SchoolClass, School
from roster.core.enums import Modality
from roster.services.reporting import MemoryReportSink


def years_ago(years: int, today: date = None) -> date:
    """The date exactly ``years`` years before ``today``."""
    today = today or date.today()
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        # February 29th
        return today.replace(year=today.year - years, day=28)


def make_student(email="joao.silva@email.com", class_code=1, modality=Modality.IN_PERSON,
                 grades=None, birth_date=None, first_name="Joao", last_name="Silva"):
    return Student(
        first_name, last_name, email, modality, class_code,
        birth_date or date(2005, 6, 15), grades
    )


@pytest.fixture
def sink():
    return MemoryReportSink()


@pytest.fixture
def math_class():
    return SchoolClass(1, 10, "Mathematics", Modality.IN_PERSON)


@pytest.fixture
def small_class():
    return SchoolClass(2, 5, "Portuguese", Modality.REMOTE)


@pytest.fixture
def school():
    return School("Escola Sempre Logica")


@pytest.fixture
def tomorrow():
    return date.today() + timedelta(days=1)
