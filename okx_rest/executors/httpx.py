"""HTTP executor implementation using httpx.

This module provides asynchronous HTTP request handling using httpx's
AsyncClient, the default transport of the OKX client.
"""

from typing_extensions import override

import httpx

from okx_rest.errors import (
    BaseError,
    HttpConnectionError,
    TransportError,
    TransportTimeoutError,
)
from okx_rest.executors.interface import HttpExecutor, HttpResponse
from okx_rest.helpers import deserialize_response


class HttpxHttpExecutor(HttpExecutor):
    """HTTP executor implementation using httpx.

    httpx binds proxies to a client, so one extra AsyncClient is created
    lazily per distinct proxy URL and reused for later calls through it.
    """

    def __init__(self, client: httpx.AsyncClient | None = None):
        """Initialize the HTTPX HTTP executor.

        Args:
            client: Optional pre-built AsyncClient used for unproxied requests,
                e.g. one with a custom transport in tests.

        """
        self.client = client if client is not None else httpx.AsyncClient()
        self._proxy_clients: dict[str, httpx.AsyncClient] = {}

    def _client_for(self, proxy: str | None) -> httpx.AsyncClient:
        if proxy is None:
            return self.client
        client = self._proxy_clients.get(proxy)
        if client is None:
            client = httpx.AsyncClient(proxy=proxy)
            self._proxy_clients[proxy] = client
        return client

    @override
    async def send_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        content: bytes | None = None,
        proxy: str | None = None,
    ) -> HttpResponse:
        """Send a request through httpx.

        Raises:
            TransportTimeoutError: If the request times out.
            HttpConnectionError: If there is a connection, proxy or network error.
            TransportError: If any other transport-level error occurs.
            DeserializationError: If the response body is not JSON.

        """
        try:
            client = self._client_for(proxy)
            response = await client.request(
                method, url, headers=headers, content=content
            )
        except BaseError:
            raise
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(
                f"{method} request to {url} timed out", timeout_seconds=None
            ) from e
        except (httpx.ConnectError, httpx.ProxyError) as e:
            raise HttpConnectionError(f"Failed to connect to {url}", url=url) from e
        except httpx.NetworkError as e:
            raise HttpConnectionError(
                f"Network error during {method} request to {url}", url=url
            ) from e
        except Exception as e:
            raise TransportError(f"{method} request to {url} failed: {e}") from e
        return HttpResponse(
            status=response.status_code,
            body=deserialize_response(response.content, url, response.status_code),
            headers=dict(response.headers),
        )

    @override
    async def close(self) -> None:
        """Close the default client and every per-proxy client."""
        await self.client.aclose()
        for client in self._proxy_clients.values():
            await client.aclose()
        self._proxy_clients.clear()
