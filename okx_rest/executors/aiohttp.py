"""HTTP executor implementation using aiohttp.

This module provides asynchronous HTTP request handling using an aiohttp
ClientSession, which accepts a forward proxy per request.
"""

import asyncio

from typing_extensions import override

import aiohttp
from yarl import URL

from okx_rest.errors import (
    BaseError,
    HttpConnectionError,
    TransportError,
    TransportTimeoutError,
)
from okx_rest.executors.interface import HttpExecutor, HttpResponse
from okx_rest.helpers import deserialize_response


class AiohttpHttpExecutor(HttpExecutor):
    """HTTP executor implementation using aiohttp.

    Manages an aiohttp ClientSession created on first use.
    """

    def __init__(self) -> None:
        self._session: aiohttp.ClientSession | None = None

    @override
    async def send_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        content: bytes | None = None,
        proxy: str | None = None,
    ) -> HttpResponse:
        """Send a request through aiohttp.

        The URL is passed pre-encoded so aiohttp does not re-quote the query
        that was signed.

        Raises:
            TransportTimeoutError: If the request times out.
            HttpConnectionError: If the connection or the proxy fails.
            TransportError: If any other transport-level error occurs.
            DeserializationError: If the response body is not JSON.

        """
        try:
            if self._session is None:
                self._session = aiohttp.ClientSession()

            async with self._session.request(
                method,
                URL(url, encoded=True),
                headers=headers,
                data=content,
                proxy=proxy,
            ) as response:
                status = response.status
                body = await response.read()
                response_headers = dict(response.headers)
        except BaseError:
            raise
        except asyncio.TimeoutError as e:
            raise TransportTimeoutError(
                f"{method} request to {url} timed out", timeout_seconds=None
            ) from e
        except aiohttp.ClientConnectionError as e:
            raise HttpConnectionError(f"Failed to connect to {url}", url=url) from e
        except Exception as e:
            raise TransportError(f"{method} request to {url} failed: {e}") from e
        return HttpResponse(
            status=status,
            body=deserialize_response(body, url, status),
            headers=response_headers,
        )

    @override
    async def close(self) -> None:
        """Close the underlying aiohttp session."""
        if self._session is not None:
            await self._session.close()
            self._session = None
