"""
Exceptions raised by the MoveNow application.

Classes:
    MoveNowError: Base class for MoveNow errors
    UpstreamCallError: A call to Fitbit or SNS failed
"""

from typing import Optional


class MoveNowError(Exception):
    """Base class for all MoveNow errors."""


class UpstreamCallError(MoveNowError):
    """
    Raised when a call to an external collaborator fails.

    Wraps transport errors, non-success HTTP statuses and unparseable
    payloads from the Fitbit API as well as AWS client errors from SNS.
    The original exception is kept as ``__cause__``.

    Attributes:
        service: Name of the failing collaborator ("fitbit" or "sns")
        status_code: HTTP status code when one was received
    """

    def __init__(
        self, service: str, message: str, status_code: Optional[int] = None
    ):
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service} call failed: {message}")
