"""
Custom exception classes for inbound request problems.
The base handler maps each of these to a JSON error response.
"""

from common.outcome import ErrorKind


class ResultProxyException(Exception):
    """Base exception for all result proxy errors"""

    status_code = 500
    kind = ErrorKind.UNHANDLED

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MalformedInputException(ResultProxyException):
    """Raised when the request body is not valid JSON or fails field checks"""

    status_code = 400
    kind = ErrorKind.MALFORMED_INPUT


class RouteException(ResultProxyException):
    """Raised when the method or path does not map to a flow"""

    kind = ErrorKind.METHOD_OR_ROUTE

    def __init__(self, message: str, status_code: int, details: dict = None):
        super().__init__(message, details)
        self.status_code = status_code
