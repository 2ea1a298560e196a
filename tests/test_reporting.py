import logging

import pytest

from roster.services.reporting import (
    ConsoleReportSink, LoggingReportSink, MemoryReportSink, create_report_sink
)


def test_memory_sink_keeps_order() -> None:
    sink = MemoryReportSink()
    sink.emit("first")
    sink.emit("second")
    assert sink.lines == ["first", "second"]
    sink.clear()
    assert sink.lines == []


def test_console_sink_prints(capsys) -> None:
    ConsoleReportSink().emit("hello")
    assert capsys.readouterr().out == "hello\n"


def test_logging_sink_logs_at_info(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="roster.report"):
        LoggingReportSink().emit("hello")
    assert [r.getMessage() for r in caplog.records] == ["hello"]


@pytest.mark.parametrize(
    "name, sink_class",
    [("console", ConsoleReportSink), ("logging", LoggingReportSink), ("memory", MemoryReportSink)],
)
def test_create_report_sink(name, sink_class) -> None:
    assert isinstance(create_report_sink(name), sink_class)


def test_create_report_sink_unknown() -> None:
    with pytest.raises(ValueError):
        create_report_sink("fax")


def test_console_sink_is_shared_with_core() -> None:
    from roster.core import ConsoleReportSink as CoreConsoleReportSink
    assert CoreConsoleReportSink is ConsoleReportSink
