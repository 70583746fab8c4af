"""Tests for the back-office exception hierarchy."""

import pytest

from backoffice.core.exceptions import (
    AdminConfigurationError,
    AdminNotFoundError,
    BackofficeException,
    FieldDescriptionNotFoundError,
    NoValueException,
    ObjectNotFoundError,
    PropertyAccessError,
)


def test_str_includes_details() -> None:
    error = BackofficeException("Broken", {"field": "title"})

    assert str(error) == "Broken | Details: {'field': 'title'}"


def test_str_without_details() -> None:
    assert str(BackofficeException("Broken")) == "Broken"


@pytest.mark.parametrize(
    "error, expected",
    [
        (NoValueException("missing", field="title"), {"field": "title"}),
        (
            AdminConfigurationError("bad", field="author", admin_code="book"),
            {"field": "author", "admin_code": "book"},
        ),
        (AdminNotFoundError("magazine"), {"lookup": "magazine"}),
        (ObjectNotFoundError("7", admin_code="book"), {"identifier": "7", "admin_code": "book"}),
        (PropertyAccessError("bad path", property_path="a.b"), {"property_path": "a.b"}),
        (FieldDescriptionNotFoundError("isbn", admin_code="book"), {"field": "isbn", "admin_code": "book"}),
    ],
)
def test_context_is_collected_in_details(error: BackofficeException, expected: dict) -> None:
    assert error.details == expected
    assert isinstance(error, BackofficeException)


@pytest.mark.parametrize(
    "build",
    [
        lambda details: BackofficeException("Broken", details),
        lambda details: NoValueException("missing", field="title", details=details),
        lambda details: AdminConfigurationError("bad", field="author", admin_code="book", details=details),
        lambda details: AdminNotFoundError("magazine", details=details),
        lambda details: ObjectNotFoundError("7", admin_code="book", details=details),
        lambda details: PropertyAccessError("bad path", property_path="a.b", details=details),
        lambda details: FieldDescriptionNotFoundError("isbn", admin_code="book", details=details),
    ],
)
def test_caller_details_are_not_modified(build) -> None:
    details = {"reason": "test"}

    error = build(details)

    assert details == {"reason": "test"}
    assert error.details["reason"] == "test"
    assert error.details is not details
