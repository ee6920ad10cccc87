"""Exceptions raised by the OKX REST client.

Every exception raised by this package derives from BaseError, so a single
``except BaseError`` covers the whole client.

Exception Hierarchy
-------------------
BaseError
├── ExchangeError - OKX (or a gateway in front of it) answered with a failure
│   ├── DomainError - envelope ``code`` other than "0"
│   └── BadHttpStatus - non-2XX status without an OKX envelope
├── TransportError - the request or its response never made it intact
├── DecodeError - JSON arrived but does not have the expected shape
└── ValidationError - rejected locally, nothing was sent
"""

from typing import Any


class BaseError(Exception):
    """Root of the okx_rest exception tree. Not raised directly.

    ``completed`` is filled in by composite operations that stop part way:
    it maps each step that had already succeeded to its result. Nothing is
    rolled back, so after a transport failure the step that was in flight
    may also have been executed by the exchange.
    """

    completed: dict[str, Any]

    def __init__(self, *args: object):
        super().__init__(*args)
        self.completed = {}


# ============================================================================
# EXCHANGE ERROR
# ============================================================================


class ExchangeError(BaseError):
    """The request reached a server, which answered with a failure."""

    pass


class DomainError(ExchangeError):
    """Raised when an OKX envelope carries a code other than "0".

    OKX answers most rejections with HTTP 200 and a non-zero ``code``
    (e.g. "58350" for an insufficient balance). The code, message and raw
    ``data`` list are kept so callers can branch on them.

    Composite operations that stop part way set ``completed``, see BaseError.
    """

    code: str
    msg: str
    data: list[Any]

    def __init__(
        self,
        code: str,
        msg: str = "",
        data: list[Any] | None = None,
        completed: dict[str, Any] | None = None,
    ):
        super().__init__(f"[{code}] {msg or 'request rejected by exchange'}")
        self.code = code
        self.msg = msg
        self.data = data if data is not None else []
        if completed is not None:
            self.completed = completed


class BadHttpStatus(ExchangeError):
    """Non-2XX response whose body is not an OKX envelope.

    Typically produced by a load balancer, CDN or proxy rather than by the
    OKX API itself. Subclasses name the common statuses.
    """

    status_code: int
    message: str

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class BadRequest(BadHttpStatus):
    """400"""


class Unauthorized(BadHttpStatus):
    """401"""


class Forbidden(BadHttpStatus):
    """403"""


class NotFound(BadHttpStatus):
    """404"""


class RateLimited(BadHttpStatus):
    """429"""


class InternalServerError(BadHttpStatus):
    """500, and any 5XX without a more specific class."""


class BadGateway(BadHttpStatus):
    """502"""


class ServiceUnavailable(BadHttpStatus):
    """503"""


class GatewayTimeout(BadHttpStatus):
    """504"""


_STATUS_ERRORS: dict[int, tuple[type[BadHttpStatus], str]] = {
    400: (BadRequest, "Bad request"),
    401: (Unauthorized, "Unauthorized"),
    403: (Forbidden, "Forbidden"),
    404: (NotFound, "Not found"),
    429: (RateLimited, "Rate limit exceeded"),
    500: (InternalServerError, "Internal server error"),
    502: (BadGateway, "Bad gateway"),
    503: (ServiceUnavailable, "Service unavailable"),
    504: (GatewayTimeout, "Gateway timeout"),
}


def http_status_error(status: int, detail: str) -> BadHttpStatus:
    """Build the BadHttpStatus subclass matching ``status``.

    Args:
        status: The non-2XX HTTP status.
        detail: Whatever the response body said, already stringified.

    """
    if status in _STATUS_ERRORS:
        error_type, label = _STATUS_ERRORS[status]
        return error_type(status, f"{label}: {detail}")
    if 500 <= status < 600:
        return InternalServerError(status, f"Server error ({status}): {detail}")
    if 400 <= status < 500:
        return BadHttpStatus(status, f"Client error ({status}): {detail}")
    return BadHttpStatus(status, f"Unexpected status code ({status}): {detail}")


# ============================================================================
# TRANSPORT ERROR
# ============================================================================


class TransportError(BaseError):
    """The HTTP exchange with the server did not complete.

    Raised by executors, always chained (``raise ... from``) to the
    underlying library exception. This client never retries; whether a
    retry is safe depends on the operation, and for transfers and
    withdrawals the request may already have been executed.
    """

    pass


class HttpConnectionError(TransportError):
    """Connecting failed, through a proxy or directly, or the connection dropped."""

    def __init__(self, message: str, url: str | None = None):
        self.message = message
        self.url = url
        super().__init__(f"{message} (url: {url})" if url else message)


class TransportTimeoutError(TransportError):
    """The transport library gave up waiting."""

    def __init__(self, message: str, timeout_seconds: float | None = None):
        self.message = message
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"{message} (timeout: {timeout_seconds}s)" if timeout_seconds else message
        )


class DeserializationError(TransportError):
    """The response body is not JSON, e.g. an HTML error page.

    Args:
        message: What failed to parse and where.
        status: HTTP status of the response, if one was received.
    """

    def __init__(self, message: str, status: int | None = None):
        self.message = message
        self.status = status
        super().__init__(message)


class SerializationError(TransportError):
    """The request body could not be encoded as JSON."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# ============================================================================
# DECODE ERROR
# ============================================================================


class DecodeError(BaseError):
    """JSON was received but does not match the shape an operation expects.

    ``payload`` holds the whole parsed response, whether the envelope or
    one of its ``data`` items failed to decode. For a mutating call that
    succeeded without returning any item it is the empty ``data`` list.
    """

    def __init__(self, message: str, payload: Any = None):
        self.message = message
        self.payload = payload
        super().__init__(f"{message}: {payload!r}")


# ============================================================================
# VALIDATION ERROR
# ============================================================================


class ValidationError(BaseError):
    """Caller input was rejected before any request was sent."""

    pass


class MissingCredentialsError(ValidationError):
    """A credential (or the environment variable holding it) is empty."""

    def __init__(self, credential_type: str = "API key"):
        self.credential_type = credential_type
        super().__init__(f"{credential_type} is not set")
