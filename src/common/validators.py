"""
Input validation for inbound result requests.

Each validator returns a typed query or raises MalformedInputException
with the message the client sees.
"""

import re
import logging
from typing import Any

from common.exceptions import MalformedInputException
from common.models import FullResultQuery, ResultQuery

logger = logging.getLogger(__name__)

# [0-9] rather than \d so non-ASCII digits are rejected
ROLL_PATTERN = re.compile(r"[0-9]{6}")
SERIAL_PATTERN = re.compile(r"[0-9]{4}")

DETAILS_FORMAT_MESSAGE = (
    "Invalid Roll, No, or Registration Number format. All fields are required."
)
FULL_RESULT_FORMAT_MESSAGE = (
    "Invalid Identifier (Payment ID/Email/Phone), Roll, No, or Registration Number format. "
    "All fields are required."
)


def is_valid_roll(value: Any) -> bool:
    return isinstance(value, str) and ROLL_PATTERN.fullmatch(value) is not None


def is_valid_serial(value: Any) -> bool:
    return isinstance(value, str) and SERIAL_PATTERN.fullmatch(value) is not None


def is_non_blank(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def is_non_empty(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _has_valid_result_fields(body: Any) -> bool:
    if not isinstance(body, dict):
        return False
    return (
        is_valid_roll(body.get("roll"))
        and is_valid_serial(body.get("no"))
        and is_non_blank(body.get("registration"))
    )


def validate_details_request(body: Any) -> ResultQuery:
    """
    Validate a /api/details body.

    Raises:
        MalformedInputException: If roll, no or registration is missing or malformed
    """
    if not _has_valid_result_fields(body):
        logger.info("Rejected details request with invalid fields")
        raise MalformedInputException(DETAILS_FORMAT_MESSAGE)

    return ResultQuery(
        roll=body["roll"],
        serial=body["no"],
        registration=body["registration"].strip(),
    )


def validate_full_result_request(body: Any) -> FullResultQuery:
    """
    Validate a /api/full-result body.

    The identifier is kept as sent so phone numbers compare exactly.

    Raises:
        MalformedInputException: If any field, including identifier, is invalid
    """
    if not _has_valid_result_fields(body) or not is_non_empty(body.get("identifier")):
        logger.info("Rejected full-result request with invalid fields")
        raise MalformedInputException(FULL_RESULT_FORMAT_MESSAGE)

    return FullResultQuery(
        roll=body["roll"],
        serial=body["no"],
        registration=body["registration"].strip(),
        identifier=body["identifier"],
    )
