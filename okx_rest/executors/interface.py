"""Abstract interface for HTTP executors.

This module defines the abstract base class that all HTTP executor
implementations must follow, enabling pluggable transport layers.
"""

from abc import ABC, abstractmethod

from okx_rest.types import Json


class HttpResponse:
    """Container for HTTP response data.

    Encapsulates the status code, parsed JSON body, and headers from an HTTP response.
    """

    status: int
    body: Json
    headers: dict[str, str] | None

    __slots__ = ("status", "body", "headers")

    def __init__(
        self,
        *,
        status: int,
        body: Json | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize an HTTP response object.

        Args:
            status: The HTTP status code of the response.
            body: The JSON response body. Defaults to an empty dict if None.
            headers: Optional HTTP response headers as key-value pairs.

        """
        self.status = status
        self.body = body if body is not None else {}
        self.headers = headers


class HttpExecutor(ABC):
    """Abstract base class for asynchronous HTTP request executors.

    An executor only moves bytes: signing and envelope handling happen in
    the client. Each call to ``send_request`` performs exactly one request.
    """

    @abstractmethod
    async def send_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        content: bytes | None = None,
        proxy: str | None = None,
    ) -> HttpResponse:
        """Send one HTTP request and parse its JSON body.

        Args:
            method: The HTTP method (e.g., 'GET', 'POST').
            url: The full, already encoded URL. It must be sent unchanged,
                since its path and query are part of the signature.
            headers: Request headers, including the signed OK-ACCESS-* set.
            content: Serialized request body, or None to send no body.
            proxy: Optional forward proxy URL for this request.

        Returns:
            An HttpResponse object containing the status, body, and headers.

        Raises:
            TransportError: On connection, timeout or protocol failures.
            DeserializationError: If the response body is not JSON.

        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release any sessions or connection pools held by the executor."""
        ...
