"""
Payment store client used to verify that a result was paid for.

The whole payment list is fetched on every verification; nothing is cached.
"""

import logging
from typing import Optional

import requests
from pydantic import ValidationError

from common.config import PAYMENT_DB_URL, get_http_timeout
from common.models import PaymentRecord
from common.outcome import ErrorKind, Failure, Outcome, Success

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

DB_ERROR_MESSAGE = "Could not verify details at this time (DB Error)."
FORMAT_ERROR_MESSAGE = "Payment data format error."
VERIFICATION_FAILED_MESSAGE = "Verification failed. Payment not found or details mismatch."
VERIFICATION_ERROR_MESSAGE = "Error during payment verification."


class PaymentClient:
    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None):
        self.url = url or PAYMENT_DB_URL
        self.timeout = timeout if timeout is not None else get_http_timeout()
        self.session = requests.Session()
        self.session.headers.update(NO_CACHE_HEADERS)

    def verify(self, roll: str, serial: str, identifier: str) -> Outcome:
        """
        Check that a payment record exists for roll/serial and identifier.

        The first matching record is accepted; duplicates are not checked.

        Returns:
            Success with the matching PaymentRecord, or a Failure:
            503 store unreachable status, 500 bad shape or transport error,
            403 no matching record
        """
        try:
            response = self.session.get(self.url, timeout=self.timeout)

            if not response.ok:
                logger.error(
                    "Failed to fetch payment DB: %s %s",
                    response.status_code,
                    response.reason,
                )
                return Failure(
                    kind=ErrorKind.UPSTREAM_UNAVAILABLE,
                    status_code=503,
                    message=DB_ERROR_MESSAGE,
                )

            payments = response.json()

        except (requests.RequestException, ValueError) as e:
            logger.error("Error verifying payment: %s", e, exc_info=True)
            return Failure(
                kind=ErrorKind.UPSTREAM_UNAVAILABLE,
                status_code=500,
                message=VERIFICATION_ERROR_MESSAGE,
            )

        if not isinstance(payments, list):
            logger.error("Payment data is not a list: %s", type(payments).__name__)
            return Failure(
                kind=ErrorKind.UPSTREAM_DATA_ERROR,
                status_code=500,
                message=FORMAT_ERROR_MESSAGE,
            )

        logger.info("Checking %d payment records", len(payments))
        record = find_matching_record(payments, roll, serial, identifier)
        if record is None:
            logger.info("No payment record matched roll %s%s", roll, serial)
            return Failure(
                kind=ErrorKind.VERIFICATION_FAILURE,
                status_code=403,
                message=VERIFICATION_FAILED_MESSAGE,
            )

        logger.info("Payment verified for roll %s%s", roll, serial)
        return Success(value=record)


def find_matching_record(
    payments: list, roll: str, serial: str, identifier: str
) -> Optional[PaymentRecord]:
    """Return the first record matching roll, serial and identifier."""
    for raw in payments:
        try:
            record = PaymentRecord.model_validate(raw)
        except ValidationError:
            continue

        if record.matches(roll, serial, identifier):
            return record
    return None
