"""
Main entry point for the Roster application.
"""

import logging
import sys
from datetime import date
from typing import List, Optional

from .config import RosterSettings, load_settings
from .core.entities import Student, SchoolClass, School
from .core.enums import Modality
from .core.exceptions import RosterException
from .core.interfaces import ReportSink
from .core.schemas import SchoolReport, StudentUpdate
from .services.reporting import create_report_sink


logger = logging.getLogger(__name__)


class RosterApplication:
    """Wires a school to a report sink and runs the demonstration scenario."""

    def __init__(self, settings: Optional[RosterSettings] = None,
                 sink: Optional[ReportSink] = None):
        self._settings = settings or RosterSettings()
        self._sink = sink or create_report_sink(self._settings.report_sink)
        self._school = School(self._settings.school_name)
        logger.info("Roster initialized for %s", self._school.name)

    @property
    def school(self) -> School:
        return self._school

    @property
    def sink(self) -> ReportSink:
        return self._sink

    def show_report(self) -> SchoolReport:
        return self._school.generate_report(self._sink)

    def _attempt(self, description: str, action) -> bool:
        """Run ``action`` and report a rejection instead of propagating it."""
        try:
            action()
        except RosterException as e:
            self._sink.emit(f"{description} rejected: {e.message} [{e.error_code}]")
            return False
        self._sink.emit(f"{description} succeeded")
        return True

    def run_demo(self) -> SchoolReport:
        """Enroll, search, update and remove students, then report."""
        mathematics = SchoolClass(1, 10, "Mathematics", Modality.IN_PERSON)
        self._school.add_class(mathematics)

        remote = SchoolClass(2, 5, "Portuguese", Modality.REMOTE)
        self._school.add_class(remote)

        students: List[Student] = [
            Student("Joao", "Silva", "joao.silva@email.com", Modality.IN_PERSON, 1,
                    date(2005, 6, 15), [8, 9, 10]),
            Student("Maria", "Souza", "maria.souza@email.com", Modality.IN_PERSON, 1,
                    date(2004, 2, 3), [4, 5, 6]),
            Student("Ana", "Costa", "ana.costa@email.com", Modality.REMOTE, 2,
                    date(2003, 11, 20), [6, 6]),
        ]
        for student in students:
            target = self._school.get_class(student.class_code)
            self._attempt(f"Enrolling {student.email} in class {target.code}",
                          lambda: target.enroll(student))

        duplicate = Student("Joao", "Silva", "joao.silva@email.com", Modality.IN_PERSON, 1,
                            date(2005, 6, 15))
        self._attempt("Enrolling a duplicate email in class 1",
                      lambda: mathematics.enroll(duplicate))

        wrong_modality = Student("Pedro", "Lima", "pedro.lima@email.com", Modality.REMOTE, 1,
                                 date(2002, 1, 9))
        self._attempt("Enrolling a remote student in class 1",
                      lambda: mathematics.enroll(wrong_modality))

        mathematics.report(self._sink)
        for student in mathematics.list_students():
            self._sink.emit(student.classify())

        found = self._school.find_student("maria.souza@email.com")
        if found is not None:
            self._sink.emit(f"Found: {found.full_name} in class {found.class_code}")
        else:
            self._sink.emit("Student not found")

        self._attempt("Updating grades of maria.souza@email.com",
                      lambda: mathematics.update_student(
                          "maria.souza@email.com", StudentUpdate(grades=[7, 8, 6])))
        self._attempt("Removing missing@email.com from class 1",
                      lambda: mathematics.unenroll("missing@email.com"))
        self._attempt("Removing class 9",
                      lambda: self._school.remove_class(9))

        return self.show_report()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="In-memory school roster manager")
    parser.add_argument("--demo", action="store_true", help="Run demo mode")
    parser.add_argument("--config", type=str, help="Configuration file path")

    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except RosterException as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    app = RosterApplication(settings)
    if args.demo:
        app.run_demo()
    else:
        app.show_report()
    return 0


if __name__ == "__main__":
    sys.exit(main())
