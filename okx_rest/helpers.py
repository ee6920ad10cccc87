"""Helper utilities for the OKX REST client.

This module contains the endpoint constants and the utility functions used to
build canonical requests, serialize and deserialize bodies, decode response
envelopes, and display results.
"""

import inspect
import logging
from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from decimal import Decimal
from functools import lru_cache
from typing import Any, Callable, Dict, TypeVar
from urllib.parse import urlencode, urlsplit

import orjson
from prettyprinter import cpprint

from okx_rest.errors import DecodeError, DeserializationError, SerializationError
from okx_rest.types import (
    SUCCESS_CODE,
    Json,
    JsonObject,
    QueryParams,
    ResponseEnvelope,
)

log = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

DEFAULT_API_URL: str = "https://www.okx.com"

TRADING_ACCOUNT_BALANCE_PATH: str = "/api/v5/account/balance"
SUB_ACCOUNT_FUNDING_BALANCE_PATH: str = "/api/v5/asset/subaccount/balances"
SUB_ACCOUNT_LIST_PATH: str = "/api/v5/users/subaccount/list"
ASSET_TRANSFER_PATH: str = "/api/v5/asset/transfer"
ASSET_WITHDRAWAL_PATH: str = "/api/v5/asset/withdrawal"


# ============================================================================
# CLIENT IDENTIFICATION
# ============================================================================


@lru_cache(maxsize=1)
def get_client_ident() -> str:
    """Get the User-Agent string sent with every request."""
    import okx_rest

    return f"OkxRestPython/{okx_rest.__version__}"


# ============================================================================
# OBJECT CONSTRUCTION
# ============================================================================

T = TypeVar("T")


def create_with(func: Callable[..., T], data: Dict[str, Any]) -> T:
    """Call ``func`` with the entries of ``data`` it accepts as keywords.

    OKX adds fields to its responses without notice; unknown keys are
    dropped here instead of failing the decode.
    """
    accepted = inspect.signature(func).parameters
    return func(**{key: value for key, value in data.items() if key in accepted})


# ============================================================================
# CANONICAL REQUEST PARTS
# ============================================================================


def build_url(
    path: str, params: QueryParams | None = None, base_url: str = DEFAULT_API_URL
) -> str:
    """Build the full request URL for ``path`` and ordered query ``params``.

    Parameters are form-urlencoded in the order given; that order is part of
    the signed bytes. Commas are left literal so list values read
    ``ccy=ETH,USDC``.

    Args:
        path: Absolute endpoint path, e.g. "/api/v5/account/balance"
        params: Ordered (key, value) pairs or a dict (insertion order is kept)
        base_url: Scheme and host to prefix

    Returns:
        The full URL, with no trailing "?" when there are no params

    """
    url = f"{base_url}{path}"
    if not params:
        return url
    pairs = list(params.items()) if isinstance(params, dict) else list(params)
    return f"{url}?{urlencode(pairs, safe=',')}"


def request_path(url: str) -> str:
    """Extract the ``path?query`` part of ``url`` that is signed."""
    parts = urlsplit(url)
    if parts.query:
        return f"{parts.path}?{parts.query}"
    return parts.path


def iso_timestamp(now: datetime | None = None) -> str:
    """Format a UTC instant as RFC3339 with milliseconds, e.g. 2024-01-01T00:00:00.123Z."""
    if now is None:
        now = datetime.now(timezone.utc)
    else:
        now = now.astimezone(timezone.utc)
    return f"{now.strftime('%Y-%m-%dT%H:%M:%S')}.{now.microsecond // 1000:03d}Z"


# ============================================================================
# SERIALIZATION / DESERIALIZATION
# ============================================================================


def decimal_as_str(obj: object) -> str:
    """orjson ``default`` hook: Decimals go on the wire as exact strings."""
    if isinstance(obj, Decimal):
        return format(obj, "f")
    raise TypeError(f"{type(obj).__name__} is not JSON serializable")


def serialize_request(request: Json | None) -> bytes | None:
    """Serialize a request object to compact JSON bytes.

    The same bytes are signed and sent, so this must run once per request.

    Args:
        request: Request data to serialize

    Returns:
        JSON bytes or None if request is None

    Raises:
        SerializationError: If serialization fails

    """
    if request is None:
        return None
    try:
        return orjson.dumps(request, default=decimal_as_str)
    except Exception as e:
        raise SerializationError(f"Failed to serialize {request=}") from e


def deserialize_response(response_body: bytes, url: str, status: int) -> Json:
    """Deserialize a JSON response body.

    Args:
        response_body: Response bytes to deserialize
        url: URL that was requested (for error messages)
        status: HTTP status of the response (for error messages)

    Returns:
        Deserialized JSON object

    Raises:
        DeserializationError: If deserialization fails

    """
    try:
        return orjson.loads(response_body)  # type: ignore
    except Exception as e:
        raise DeserializationError(
            f"Failed to parse JSON response from {url} (status {status}): {e}",
            status=status,
        ) from e


def decode_envelope(
    response: Json, decode_item: Callable[[JsonObject], T]
) -> ResponseEnvelope[T]:
    """Decode an OKX ``{code, msg, data}`` envelope.

    The untyped envelope is checked first; payload items are only decoded
    with ``decode_item`` when ``code`` is "0".

    Args:
        response: Parsed JSON body returned by the dispatcher
        decode_item: Builds one typed payload item from its JSON object

    Returns:
        The decoded envelope

    Raises:
        DecodeError: If the envelope or a payload item has an unexpected shape

    """
    if not isinstance(response, dict):
        raise DecodeError("Response is not a JSON object", response)

    code = response.get("code")
    if not isinstance(code, str):
        raise DecodeError("Envelope has no string 'code'", response)

    msg = response.get("msg") or ""
    data = response.get("data", [])
    if not isinstance(data, list):
        raise DecodeError("Envelope 'data' is not a list", response)

    if code != SUCCESS_CODE:
        return ResponseEnvelope(code=code, msg=str(msg), raw_data=data)

    try:
        items = [decode_item(item) for item in data]  # type: ignore
    except (TypeError, KeyError, ValueError, AttributeError) as e:
        raise DecodeError(f"Received invalid payload ({e})", response) from e

    return ResponseEnvelope(code=code, data=items, msg=str(msg), raw_data=data)


# ============================================================================
# DISPLAY UTILITIES
# ============================================================================


def _plain(value: Any) -> Any:
    if isinstance(value, ResponseEnvelope):
        return {"code": value.code, "msg": value.msg, "data": _plain(value.data)}
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def print_data(response: Any) -> None:
    """Pretty-print a decoded result.

    Dataclasses, envelopes, and lists or dicts of them are turned into plain
    dicts first so cpprint lays them out field by field.
    """
    cpprint(_plain(response))
