"""
Error types raised by the link service.

Every failure that leaves the service layer is one of the classes
below.  Each carries the HTTP status code the API layer answers with
and a message that is safe to show to clients.
"""


class LinkServiceError(Exception):
    """Base class for errors reported to API clients."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(LinkServiceError):
    """Missing or malformed input; the caller has to fix the request."""

    status_code = 400


class NotFoundError(LinkServiceError):
    """Unknown subject key or link id."""

    status_code = 404


class InternalServiceError(LinkServiceError):
    """Storage failure.  The message never contains storage details."""

    status_code = 500
