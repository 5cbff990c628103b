"""
Tests for inbound request validation.
"""

import pytest

from common.exceptions import MalformedInputException
from common.models import FullResultQuery, ResultQuery
from common.validators import (
    DETAILS_FORMAT_MESSAGE,
    FULL_RESULT_FORMAT_MESSAGE,
    is_valid_roll,
    is_valid_serial,
    validate_details_request,
    validate_full_result_request,
)


@pytest.fixture
def details_body():
    return {"roll": "123456", "no": "1234", "registration": "  REG1  "}


def test_validate_details_request_returns_trimmed_query(details_body):
    query = validate_details_request(details_body)

    assert query == ResultQuery(roll="123456", serial="1234", registration="REG1")
    assert query.full_roll == "1234561234"


@pytest.mark.parametrize(
    "roll", ["12345", "1234567", "12345a", "", None, 123456, "123456\n", "١٢٣٤٥٦"]
)
def test_invalid_roll_rejected(details_body, roll):
    assert not is_valid_roll(roll)
    details_body["roll"] = roll

    with pytest.raises(MalformedInputException) as exc_info:
        validate_details_request(details_body)
    assert exc_info.value.message == DETAILS_FORMAT_MESSAGE
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("serial", ["123", "12345", "12a4", None, 1234])
def test_invalid_serial_rejected(details_body, serial):
    assert not is_valid_serial(serial)
    details_body["no"] = serial

    with pytest.raises(MalformedInputException):
        validate_details_request(details_body)


@pytest.mark.parametrize("registration", ["", "   ", None, 42])
def test_invalid_registration_rejected(details_body, registration):
    details_body["registration"] = registration

    with pytest.raises(MalformedInputException):
        validate_details_request(details_body)


@pytest.mark.parametrize("body", [[], "roll", None, 5])
def test_non_object_body_rejected(body):
    with pytest.raises(MalformedInputException):
        validate_details_request(body)


def test_validate_full_result_request_keeps_identifier_as_sent(details_body):
    details_body["identifier"] = "Test@X.com"

    query = validate_full_result_request(details_body)

    assert isinstance(query, FullResultQuery)
    assert query.identifier == "Test@X.com"
    assert query.registration == "REG1"


@pytest.mark.parametrize("identifier", [None, "", 9876543210])
def test_full_result_requires_identifier(details_body, identifier):
    details_body["identifier"] = identifier

    with pytest.raises(MalformedInputException) as exc_info:
        validate_full_result_request(details_body)
    assert exc_info.value.message == FULL_RESULT_FORMAT_MESSAGE


def test_full_result_accepts_whitespace_identifier(details_body):
    details_body["identifier"] = "   "

    query = validate_full_result_request(details_body)

    assert query.identifier == "   "


def test_full_result_rejects_bad_roll_even_with_identifier(details_body):
    details_body["identifier"] = "pay_123"
    details_body["roll"] = "12"

    with pytest.raises(MalformedInputException):
        validate_full_result_request(details_body)
