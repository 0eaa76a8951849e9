"""Exceptions raised by the BRI Direct Debit SDK."""


class BRIError(Exception):
    """Base exception for all SDK errors.

    Errors raised after a response was received carry its ``status_code`` and
    raw ``body``; both are None for errors raised before that point.
    """

    def __init__(self, message: str, status_code: int = None, body: bytes = None):
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class RequestBuildError(BRIError):
    """The HTTP request could not be constructed (bad URL or method)."""


class TransportError(BRIError):
    """Network failure after all retry attempts. ``__cause__`` is the last error."""

    def __init__(self, message: str, attempts: int):
        self.attempts = attempts
        super().__init__(message)


class RequestCancelled(BRIError):
    """The caller's cancel event was set before the call completed."""


class ReadError(BRIError):
    """Reading the response body failed mid-stream."""


class InvalidURL(BRIError):
    """HTTP 404: the request was routed to a path the bank does not serve."""

    def __init__(self, body: bytes = None):
        super().__init__("invalid url", 404, body)


class EmptyResponse(BRIError):
    """HTTP 204: nothing to decode."""

    def __init__(self, body: bytes = None):
        super().__init__("204: empty response", 204, body)


class DecodeError(BRIError):
    """Body could not be decoded into the expected record."""


class PendingTransaction(BRIError):
    """HTTP 200 with a body that is not the expected success shape.

    BRI answers some not-yet-final transactions this way. Treat it as
    "pending", not as a failure; inquire again with ``charge_detail``.
    ``payload`` holds the decoded error record when one could be read.
    """

    def __init__(self, body: bytes = None, payload=None):
        self.payload = payload
        super().__init__("transaction is pending", 200, body)


class RemoteError(BRIError):
    """The bank answered with its error shape; inspect ``payload``."""

    def __init__(self, status_code: int, body: bytes, payload):
        self.payload = payload
        code = getattr(payload, "error_code", None)
        desc = getattr(payload, "error_desc", None)
        status = getattr(payload, "status", None)
        if not (code or desc) and isinstance(status, dict):
            code, desc = status.get("code"), status.get("desc")
        detail = " ".join(str(part) for part in (code, desc) if part)
        message = f"BRI API error {status_code}"
        if detail:
            message += f": {detail}"
        super().__init__(message, status_code, body)
