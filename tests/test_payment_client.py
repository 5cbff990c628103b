"""
Tests for payment verification against the payment store.
"""

import pytest
import requests
import responses

from common.models import PaymentRecord
from common.outcome import ErrorKind
from common.payment_client import (
    DB_ERROR_MESSAGE,
    FORMAT_ERROR_MESSAGE,
    VERIFICATION_ERROR_MESSAGE,
    VERIFICATION_FAILED_MESSAGE,
    PaymentClient,
    find_matching_record,
)

PAYMENT_URL = "https://payments.example.test/payments"


@pytest.fixture
def payment_client():
    return PaymentClient(url=PAYMENT_URL)


@pytest.fixture
def payments():
    return [
        {"roll": "111111", "no": "1111", "email": "other@x.com"},
        {
            "roll": "123456",
            "no": "1234",
            "payment_id": "pay_ABC123",
            "email": "Test@X.com",
            "phone": "9876543210",
            "amount": 49,
        },
    ]


@responses.activate
def test_verify_matches_email_case_insensitively(payment_client, payments):
    responses.add(responses.GET, PAYMENT_URL, json=payments, status=200)

    outcome = payment_client.verify("123456", "1234", "test@x.com")

    assert outcome.ok
    assert isinstance(outcome.value, PaymentRecord)
    assert outcome.value.payment_id == "pay_ABC123"


@responses.activate
def test_verify_sends_no_cache_headers(payment_client, payments):
    responses.add(responses.GET, PAYMENT_URL, json=payments, status=200)

    payment_client.verify("123456", "1234", "pay_abc123")

    headers = responses.calls[0].request.headers
    assert headers["Cache-Control"] == "no-cache, no-store, must-revalidate"
    assert headers["Pragma"] == "no-cache"
    assert headers["Expires"] == "0"


@pytest.mark.parametrize("identifier", ["pay_abc123", "PAY_ABC123", "TEST@x.COM", "9876543210"])
def test_find_matching_record_identifier_kinds(payments, identifier):
    assert find_matching_record(payments, "123456", "1234", identifier) is not None


def test_find_matching_record_requires_roll_and_serial(payments):
    assert find_matching_record(payments, "123456", "9999", "test@x.com") is None
    assert find_matching_record(payments, "999999", "1234", "test@x.com") is None


def test_phone_match_is_exact():
    records = [{"roll": "123456", "no": "1234", "phone": "+91abc"}]

    assert find_matching_record(records, "123456", "1234", "+91abc") is not None
    assert find_matching_record(records, "123456", "1234", "+91ABC") is None


def test_numeric_fields_never_match():
    records = [
        {"roll": 123456, "no": "1234", "email": "a@x.com"},
        {"roll": "123456", "no": "1234", "phone": 9876543210},
        "not a record",
    ]

    assert find_matching_record(records, "123456", "1234", "a@x.com") is None
    assert find_matching_record(records, "123456", "1234", "9876543210") is None


def test_first_match_wins():
    records = [
        {"roll": "123456", "no": "1234", "email": "a@x.com", "payment_id": "first"},
        {"roll": "123456", "no": "1234", "email": "a@x.com", "payment_id": "second"},
    ]

    record = find_matching_record(records, "123456", "1234", "a@x.com")

    assert record.payment_id == "first"


@responses.activate
def test_verify_no_match_is_forbidden(payment_client, payments):
    responses.add(responses.GET, PAYMENT_URL, json=payments, status=200)

    outcome = payment_client.verify("123456", "1234", "someone@else.com")

    assert not outcome.ok
    assert outcome.status_code == 403
    assert outcome.kind == ErrorKind.VERIFICATION_FAILURE
    assert outcome.message == VERIFICATION_FAILED_MESSAGE


@responses.activate
def test_verify_store_error_status(payment_client):
    responses.add(responses.GET, PAYMENT_URL, body="down", status=500)

    outcome = payment_client.verify("123456", "1234", "test@x.com")

    assert outcome.status_code == 503
    assert outcome.message == DB_ERROR_MESSAGE


@responses.activate
def test_verify_non_list_payload(payment_client):
    responses.add(responses.GET, PAYMENT_URL, json={"payments": []}, status=200)

    outcome = payment_client.verify("123456", "1234", "test@x.com")

    assert outcome.status_code == 500
    assert outcome.kind == ErrorKind.UPSTREAM_DATA_ERROR
    assert outcome.message == FORMAT_ERROR_MESSAGE


@pytest.mark.parametrize("body", [requests.ConnectionError("refused"), "not json"])
@responses.activate
def test_verify_transport_or_decode_error(payment_client, body):
    responses.add(responses.GET, PAYMENT_URL, body=body, status=200)

    outcome = payment_client.verify("123456", "1234", "test@x.com")

    assert outcome.status_code == 500
    assert outcome.message == VERIFICATION_ERROR_MESSAGE
