"""
Explicit success/failure results returned by the downstream-call helpers.

Clients never raise for expected upstream problems. They return a Failure
carrying the status code and message the caller should surface.
"""

from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel


class ErrorKind(str, Enum):
    """Categories of failure a request can end in."""

    MALFORMED_INPUT = "malformed_input"
    VERIFICATION_FAILURE = "verification_failure"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    UPSTREAM_DATA_ERROR = "upstream_data_error"
    UPSTREAM_NOT_FOUND = "upstream_not_found"
    UPSTREAM_REJECTED = "upstream_rejected"
    METHOD_OR_ROUTE = "method_or_route"
    UNHANDLED = "unhandled"


class Success(BaseModel):
    ok: Literal[True] = True
    value: Any = None


class Failure(BaseModel):
    ok: Literal[False] = False
    kind: ErrorKind
    status_code: int
    message: str


Outcome = Union[Success, Failure]
