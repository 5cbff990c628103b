"""
Result Proxy Handler

Serves the board result site behind API Gateway:

- POST /api/details      free preview (name, roll, registration) plus the
                         payment button to show, chosen by referral key
- POST /api/full-result  full result, released only after the caller's
                         payment ID, email or phone matches a payment record
"""

from typing import Any

from pydantic import ValidationError

from common.base_handler import BaseLambdaHandler
from common.exceptions import RouteException
from common.models import DetailsResponse, ExternalResultRecord
from common.outcome import ErrorKind, Failure
from common.referrals import resolve_payment_button
from common.validators import validate_details_request, validate_full_result_request

DETAILS_PATH = "/api/details"
FULL_RESULT_PATH = "/api/full-result"

FULL_RESULT_UNAVAILABLE_MESSAGE = (
    "Failed to connect to the results service for full details."
)
VERIFIED_BUT_NOT_FOUND_MESSAGE = (
    "Result found (payment verified), but could not retrieve full details with the "
    "provided Roll, No, and Registration Number. Please check these details or contact support."
)
UNEXPECTED_RESULT_MESSAGE = "Unexpected response from the results service."


class ResultProxyHandler(BaseLambdaHandler):
    """Routes result requests to the details or full-result flow"""

    def _execute(self, event: dict, context: Any) -> dict:
        method, path = self._request_line(event)

        if method == "OPTIONS":
            return self._empty_response()

        if method != "POST":
            raise RouteException("Method Not Allowed", 405)

        if path == DETAILS_PATH:
            return self._handle_details(event)
        if path == FULL_RESULT_PATH:
            return self._handle_full_result(event)

        raise RouteException("Not Found", 404)

    def _handle_details(self, event: dict) -> dict:
        """Validate, pick the payment button, then fetch and reshape the result."""
        body = self._parse_json_body(event)
        query = validate_details_request(body)
        button_id = resolve_payment_button(body.get("referralKey"))

        outcome = self.result_client.fetch_result(query)
        if not outcome.ok:
            return self._failure_response(outcome)

        try:
            record = ExternalResultRecord.model_validate(outcome.value)
        except ValidationError as e:
            self.logger.error(f"Unexpected result payload for {query.full_roll}: {e}")
            return self._failure_response(
                Failure(
                    kind=ErrorKind.UPSTREAM_DATA_ERROR,
                    status_code=500,
                    message=UNEXPECTED_RESULT_MESSAGE,
                )
            )

        if record.name is None or record.roll_no is None or record.reg_no is None:
            self.logger.warning(f"Result for {query.full_roll} is missing preview fields")

        details = DetailsResponse.from_result(record, button_id)
        return self._success_response(details.to_payload())

    def _handle_full_result(self, event: dict) -> dict:
        """Verify payment, then forward the upstream result unmodified."""
        query = validate_full_result_request(self._parse_json_body(event))

        verification = self.payment_client.verify(query.roll, query.serial, query.identifier)
        if not verification.ok:
            return self._failure_response(verification)

        outcome = self.result_client.fetch_result(
            query, unavailable_message=FULL_RESULT_UNAVAILABLE_MESSAGE
        )
        if not outcome.ok:
            return self._failure_response(remap_verified_not_found(outcome))

        return self._success_response(outcome.value)

    def _failure_response(self, failure: Failure) -> dict:
        self.logger.info(f"Request failed ({failure.kind.value}): {failure.status_code}")
        return self._error_response(failure.message, failure.status_code)


def remap_verified_not_found(failure: Failure) -> Failure:
    """
    A 404 after payment verification means the paid-for result could not be
    found with the registration supplied; report it as a server-side 500.
    """
    if failure.kind != ErrorKind.UPSTREAM_NOT_FOUND:
        return failure
    return Failure(
        kind=ErrorKind.UPSTREAM_NOT_FOUND,
        status_code=500,
        message=VERIFIED_BUT_NOT_FOUND_MESSAGE,
    )


def lambda_handler(event: dict, context: Any) -> dict:
    """Lambda entry point"""
    return ResultProxyHandler().handle(event, context)
