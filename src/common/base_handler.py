"""
Base handler class implementing Template Method pattern for Lambda functions.
Provides consistent error handling, client initialization, and logging.
"""

from abc import ABC, abstractmethod
import base64
import binascii
import json
import logging
import os
from typing import Any

from common.config import CORS_HEADERS
from common.exceptions import MalformedInputException, ResultProxyException

INVALID_JSON_MESSAGE = "Invalid JSON body"
GENERIC_ERROR_MESSAGE = "Internal Server Error"


class BaseLambdaHandler(ABC):
    """
    Abstract base class for API Gateway Lambda handlers.

    Subclasses must implement _execute() method with their specific logic.
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.logger.setLevel(os.getenv("LOG_LEVEL", "INFO"))
        self._result_client = None
        self._payment_client = None

    @property
    def result_client(self):
        """Lazy initialization of the board result client"""
        if self._result_client is None:
            from common.result_client import ResultClient

            self._result_client = ResultClient()
        return self._result_client

    @property
    def payment_client(self):
        """Lazy initialization of the payment store client"""
        if self._payment_client is None:
            from common.payment_client import PaymentClient

            self._payment_client = PaymentClient()
        return self._payment_client

    def handle(self, event: dict, context: Any) -> dict:
        """
        Main entry point for Lambda handler (Template Method).

        Args:
            event: API Gateway proxy event
            context: Lambda context

        Returns:
            HTTP response dict with statusCode, headers and body
        """
        method, path = "", ""
        try:
            method, path = self._request_line(event)
            self.logger.info(f"Received {method} {path}")
            result = self._execute(event, context)
            self.logger.info(f"Responded {result['statusCode']} to {method} {path}")
            return result
        except ResultProxyException as e:
            self.logger.info(f"Rejected {method} {path} ({e.kind.value}): {e.status_code} {e.message}")
            return self._error_response(e.message, e.status_code)
        except Exception as e:
            self.logger.error(f"Handler error on {path}: {e}", exc_info=True)
            return self._error_response(str(e) or GENERIC_ERROR_MESSAGE, 500)

    @abstractmethod
    def _execute(self, event: dict, context: Any) -> dict:
        """
        Subclasses implement their specific business logic here.

        Args:
            event: API Gateway proxy event
            context: Lambda context

        Returns:
            HTTP response dict
        """
        pass

    def _headers(self) -> dict:
        return {**CORS_HEADERS, "Content-Type": "application/json"}

    def _success_response(self, data: Any, status_code: int = 200) -> dict:
        """Standard success response format"""
        return {
            "statusCode": status_code,
            "headers": self._headers(),
            "body": json.dumps(data, default=str),
        }

    def _error_response(self, message: str, status_code: int) -> dict:
        """Standard error response format"""
        return {
            "statusCode": status_code,
            "headers": self._headers(),
            "body": json.dumps({"message": message}),
        }

    def _empty_response(self, status_code: int = 200) -> dict:
        """CORS preflight response"""
        return {"statusCode": status_code, "headers": self._headers(), "body": ""}

    @staticmethod
    def _request_line(event: dict) -> tuple[str, str]:
        """Method and path for both REST (v1) and HTTP API (v2) events"""
        http = (event.get("requestContext") or {}).get("http") or {}
        method = event.get("httpMethod") or http.get("method") or ""
        path = event.get("rawPath") or event.get("path") or http.get("path") or ""
        return method.upper(), path

    def _parse_json_body(self, event: dict) -> Any:
        """
        Parse the request body, handling base64 encoding.

        Raises:
            MalformedInputException: If the body is empty or not valid JSON
        """
        body = event.get("body")

        if body is None:
            raise MalformedInputException(INVALID_JSON_MESSAGE)

        if not isinstance(body, str):
            return body

        try:
            if event.get("isBase64Encoded"):
                body = base64.b64decode(body, validate=True).decode("utf-8")
            return json.loads(body)
        except (binascii.Error, UnicodeDecodeError, ValueError) as e:
            self.logger.info(f"Could not parse request body: {e}")
            raise MalformedInputException(INVALID_JSON_MESSAGE)
