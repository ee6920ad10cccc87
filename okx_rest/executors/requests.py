"""HTTP executor implementation using requests.

requests is blocking, so each call runs in a worker thread and the calling
task is suspended until it completes.
"""

import asyncio
import threading
from typing import Callable

from typing_extensions import override

import requests

from okx_rest.errors import (
    BaseError,
    HttpConnectionError,
    TransportError,
    TransportTimeoutError,
)
from okx_rest.executors.interface import HttpExecutor, HttpResponse
from okx_rest.helpers import deserialize_response


class RequestsHttpExecutor(HttpExecutor):
    """HTTP executor implementation using requests.

    ``requests.Session`` is not thread-safe, and concurrent operations land
    on different ``asyncio.to_thread`` workers, so every worker thread gets
    its own session. ``close`` closes all of them.
    """

    def __init__(
        self, session_factory: Callable[[], requests.Session] = requests.Session
    ) -> None:
        self._session_factory = session_factory
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._lock = threading.Lock()

    def _session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._session_factory()
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session

    def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        content: bytes | None,
        proxy: str | None,
    ) -> requests.Response:
        proxies = {"http": proxy, "https": proxy} if proxy is not None else None
        return self._session().request(
            method, url, headers=headers, data=content, proxies=proxies
        )

    @override
    async def send_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        content: bytes | None = None,
        proxy: str | None = None,
    ) -> HttpResponse:
        try:
            response = await asyncio.to_thread(
                self._send, method, url, headers, content, proxy
            )
        except BaseError:
            raise
        except requests.Timeout as e:
            raise TransportTimeoutError(
                f"{method} request to {url} timed out", timeout_seconds=None
            ) from e
        except requests.ConnectionError as e:
            raise HttpConnectionError(f"Failed to connect to {url}", url=url) from e
        except Exception as e:
            raise TransportError(f"{method} request to {url} failed: {e}") from e
        return HttpResponse(
            status=response.status_code,
            body=deserialize_response(response.content, url, response.status_code),
            headers=dict(response.headers),
        )

    @override
    async def close(self) -> None:
        with self._lock:
            sessions, self._sessions = self._sessions, []
            # threads still holding a closed session start over with a new one
            self._local = threading.local()
        for session in sessions:
            session.close()
