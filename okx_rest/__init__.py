"""Signed async REST client for OKX private account and asset endpoints."""

from importlib.metadata import PackageNotFoundError, version

from okx_rest.api import OkxApiClient
from okx_rest.auth import CanonicalRequest, Credentials
from okx_rest.errors import (
    BadHttpStatus,
    BaseError,
    DecodeError,
    DeserializationError,
    DomainError,
    ExchangeError,
    HttpConnectionError,
    MissingCredentialsError,
    TransportError,
    TransportTimeoutError,
    ValidationError,
)
from okx_rest.executors import (
    AiohttpHttpExecutor,
    HttpExecutor,
    HttpxHttpExecutor,
    RequestsHttpExecutor,
)
from okx_rest.helpers import print_data
from okx_rest.types import (
    AccountType,
    BalanceDetail,
    ResponseEnvelope,
    SubAccount,
    TradingBalance,
    TransferRequest,
    TransferResponse,
    TransferType,
    WithdrawalDestination,
    WithdrawRequest,
    WithdrawResponse,
)


def get_version() -> str:
    try:
        return version("okx-rest")
    except PackageNotFoundError:
        return "0.0.0-unknown"


__version__ = get_version()

__all__ = [
    "OkxApiClient",
    "CanonicalRequest",
    "Credentials",
    "HttpExecutor",
    "HttpxHttpExecutor",
    "AiohttpHttpExecutor",
    "RequestsHttpExecutor",
    "AccountType",
    "BalanceDetail",
    "ResponseEnvelope",
    "SubAccount",
    "TradingBalance",
    "TransferRequest",
    "TransferResponse",
    "TransferType",
    "WithdrawalDestination",
    "WithdrawRequest",
    "WithdrawResponse",
    "BaseError",
    "ExchangeError",
    "DomainError",
    "BadHttpStatus",
    "TransportError",
    "HttpConnectionError",
    "TransportTimeoutError",
    "DeserializationError",
    "DecodeError",
    "ValidationError",
    "MissingCredentialsError",
    "print_data",
    "get_version",
]
