"""Tests for logging helpers."""

import logging
import sys

from backoffice.observability.log_utils import log_with_context, safe_log_value
from backoffice.observability.logger import configure_logging, get_logger

from sample_models import Book


class TestSafeLogValue:
    """Tests for safe_log_value."""

    def test_none(self) -> None:
        assert safe_log_value(None) == "None"

    def test_containers_are_summarised(self) -> None:
        assert safe_log_value([1, 2, 3]) == "list(3 items)"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"

    def test_domain_objects_log_their_type(self) -> None:
        assert safe_log_value(Book(1, "Dune")) == "<Book>"

    def test_long_strings_are_truncated(self) -> None:
        value = safe_log_value("x" * 50, max_length=10)

        assert value == "x" * 10 + "... (truncated, 50 total)"


def test_log_with_context_converts_values(caplog) -> None:
    logger = logging.getLogger("tests.log_utils")

    with caplog.at_level(logging.INFO, logger="tests.log_utils"):
        log_with_context(logger, logging.INFO, "Rendered", row=[1, 2])

    assert caplog.records[-1].row == "list(2 items)"


def test_configure_logging_installs_single_stdout_handler() -> None:
    root = logging.getLogger()
    previous_handlers = root.handlers[:]
    previous_level = root.level
    try:
        configure_logging("debug")
        configure_logging("warning")

        stream_handlers = [h for h in root.handlers if isinstance(h, logging.StreamHandler)]
        assert len(stream_handlers) == 1
        assert stream_handlers[0].stream is sys.stdout
        assert root.level == logging.WARNING
        assert get_logger("backoffice").name == "backoffice"
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
        for handler in previous_handlers:
            root.addHandler(handler)
        root.setLevel(previous_level)
