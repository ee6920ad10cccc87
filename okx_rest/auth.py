"""Request signing for OKX private endpoints.

OKX authenticates a request with an HMAC-SHA256 over the concatenation
``timestamp + METHOD + requestPath + body`` keyed by the API secret, base64
encoded and sent in ``OK-ACCESS-SIGN`` next to the key, passphrase and the
very same timestamp.
"""

import base64
import hmac
from dataclasses import dataclass, field
from hashlib import sha256

from okx_rest.errors import MissingCredentialsError
from okx_rest.helpers import request_path


@dataclass(frozen=True)
class Credentials:
    """API key, secret key and passphrase for one OKX API key.

    The secret key and passphrase are kept out of ``repr`` so the object can
    appear in logs and tracebacks without leaking them.
    """

    api_key: str
    secret_key: str = field(repr=False)
    passphrase: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.api_key:
            raise MissingCredentialsError("API key")
        if not self.secret_key:
            raise MissingCredentialsError("Secret key")
        if not self.passphrase:
            raise MissingCredentialsError("Passphrase")

    def sign(
        self,
        method: str,
        timestamp: str,
        path: str,
        body: bytes | str | None = None,
    ) -> str:
        """Sign a request.

        Args:
            method: HTTP verb; upper-cased before signing
            timestamp: The exact value sent in OK-ACCESS-TIMESTAMP
            path: Request path including "?query" when present
            body: Serialized JSON body, or None when the request has none

        Returns:
            str: The base64 encoded HMAC-SHA256 signature

        """
        message = prehash(timestamp, method, path, body)
        mac = hmac.new(self.secret_key.encode(), message, sha256)
        return base64.b64encode(mac.digest()).decode()

    def auth_headers(self, timestamp: str, signature: str) -> dict[str, str]:
        return {
            "OK-ACCESS-KEY": self.api_key,
            "OK-ACCESS-PASSPHRASE": self.passphrase,
            "OK-ACCESS-SIGN": signature,
            "OK-ACCESS-TIMESTAMP": timestamp,
        }


def prehash(
    timestamp: str, method: str, path: str, body: bytes | str | None = None
) -> bytes:
    """Build the byte string that gets signed; no separators between parts."""
    if body is None:
        body_bytes = b""
    elif isinstance(body, str):
        body_bytes = body.encode()
    else:
        body_bytes = body
    return f"{timestamp}{method.upper()}{path}".encode() + body_bytes


@dataclass(frozen=True)
class CanonicalRequest:
    """Everything that goes into a signature, captured once per request."""

    timestamp: str
    method: str
    request_path: str
    body: bytes | None = None

    @classmethod
    def from_parts(
        cls, method: str, url: str, body: bytes | None, timestamp: str
    ) -> "CanonicalRequest":
        return cls(
            timestamp=timestamp,
            method=method.upper(),
            request_path=request_path(url),
            body=body,
        )

    def prehash(self) -> bytes:
        return prehash(self.timestamp, self.method, self.request_path, self.body)

    def headers(self, credentials: Credentials) -> dict[str, str]:
        """Signed OK-ACCESS-* headers; the timestamp header equals the signed one."""
        signature = credentials.sign(
            self.method, self.timestamp, self.request_path, self.body
        )
        return credentials.auth_headers(self.timestamp, signature)
