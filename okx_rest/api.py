"""HTTP API client for the OKX exchange's private endpoints.

This module provides the OkxApiClient class: a signed request dispatcher and
the typed account, sub-account, transfer and withdrawal operations built on
top of it.
"""

import logging
from dataclasses import asdict
from typing import Any, Sequence, TypeVar

from okx_rest.auth import CanonicalRequest, Credentials
from okx_rest.errors import BaseError, DecodeError, ValidationError, http_status_error
from okx_rest.executors import DEFAULT_HTTP_EXECUTOR, HttpExecutor
from okx_rest.executors.interface import HttpResponse
from okx_rest.helpers import (
    ASSET_TRANSFER_PATH,
    ASSET_WITHDRAWAL_PATH,
    DEFAULT_API_URL,
    SUB_ACCOUNT_FUNDING_BALANCE_PATH,
    SUB_ACCOUNT_LIST_PATH,
    TRADING_ACCOUNT_BALANCE_PATH,
    build_url,
    create_with,
    decode_envelope,
    get_client_ident,
    iso_timestamp,
    serialize_request,
)
from okx_rest.types import (
    BalanceDetail,
    Json,
    JsonObject,
    NumericInput,
    QueryParams,
    ResponseEnvelope,
    SubAccount,
    TradingBalance,
    TransferRequest,
    TransferResponse,
    WithdrawRequest,
    WithdrawResponse,
    find_available_balance,
    full_precision_string,
)

log = logging.getLogger(__name__)

T = TypeVar("T")


def raise_response_errors(response: HttpResponse) -> None:
    """Raise for a non-2XX response that carries no OKX envelope.

    A body with a ``code`` field is left alone whatever the status, so the
    OKX code and message reach the envelope decoder instead of being
    replaced by a generic HTTP error.

    Raises:
        BadHttpStatus: The subclass matching the status, see ``http_status_error``

    """
    if 200 <= response.status < 300:
        return

    body = response.body if isinstance(response.body, dict) else {}
    if "code" in body:
        return

    raise http_status_error(response.status, str(body) if body else "<no error message>")


def _transfer_response(item: JsonObject) -> TransferResponse:
    data: dict[str, Any] = dict(item)
    data["fromAccount"] = item.get("from")
    data["toAccount"] = item.get("to")
    return create_with(TransferResponse, data)


def _trading_balance(item: JsonObject) -> TradingBalance:
    data: dict[str, Any] = dict(item)
    data["details"] = [
        create_with(BalanceDetail, detail)
        for detail in item["details"]  # type: ignore
    ]
    return create_with(TradingBalance, data)


def _balance_detail(item: JsonObject) -> BalanceDetail:
    return create_with(BalanceDetail, item)


def _sub_account(item: JsonObject) -> SubAccount:
    return create_with(SubAccount, item)


def _withdraw_response(item: JsonObject) -> WithdrawResponse:
    return create_with(WithdrawResponse, item)


class OkxApiClient:
    """OKX API client for private account and asset operations.

    Every operation is a coroutine that performs its requests one after the
    other; the client holds no mutable state besides the executor's
    connection pool, so independent operations may run concurrently.

    Examples:
        .. code-block:: python

            import asyncio
            import os

            from okx_rest import OkxApiClient

            async def main():
                async with OkxApiClient(
                    api_key=os.environ["OKX_API_KEY"],
                    secret_key=os.environ["OKX_SECRET_KEY"],
                    passphrase=os.environ["OKX_PASSPHRASE"],
                ) as okx:
                    balance = await okx.get_trading_account_balance(["ETH"])
                    print(balance.first())

            asyncio.run(main())
    """

    _credentials: Credentials

    _http_executor: HttpExecutor

    def __init__(
        self,
        api_key: str,
        secret_key: str,
        passphrase: str,
        api_url: str = DEFAULT_API_URL,
        proxy: str | None = None,
        executor: HttpExecutor | None = None,
    ):
        """Initialize the OKX API client.

        Args:
            api_key: The API key, sent as OK-ACCESS-KEY
            secret_key: The secret key used to sign requests
            passphrase: The passphrase chosen when the API key was created
            api_url: Base URL for the OKX API (default: production URL)
            proxy: Forward proxy used when an operation is not given one
            executor: Custom HTTP executor (optional, uses default if not provided)

        Raises:
            MissingCredentialsError: If any of the three credentials is empty

        """
        self._credentials = Credentials(api_key, secret_key, passphrase)
        self._api_url = api_url
        self._proxy = proxy
        self._http_executor = (
            executor if executor is not None else DEFAULT_HTTP_EXECUTOR()
        )

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def api_key(self) -> str:
        return self._credentials.api_key

    async def close(self) -> None:
        """Release the executor's sessions."""
        await self._http_executor.close()

    async def __aenter__(self) -> "OkxApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    ### ------------------------------------------------ Dispatcher ------------------------------------------------

    async def dispatch(
        self,
        path: str,
        params: QueryParams | None = None,
        method: str = "GET",
        body: Json | None = None,
        proxy: str | None = None,
    ) -> Json:
        """Sign and send one request, returning the parsed JSON body.

        The timestamp is taken once and used both in the signed message and
        in OK-ACCESS-TIMESTAMP; the body is serialized once and the same
        bytes are signed and sent. An envelope with a non-"0" code is
        returned as-is.

        Args:
            path: Endpoint path, e.g. "/api/v5/account/balance"
            params: Ordered query parameters; their order is signed
            method: HTTP method (GET or POST)
            body: Optional JSON body
            proxy: Forward proxy for this call; defaults to the client's

        Returns:
            Json: The parsed JSON response body

        Raises:
            TransportError: If the request fails in transit or the body is not JSON
            BadHttpStatus: If a non-2XX response carries no envelope

        """
        method = method.upper()
        url = build_url(path, params, base_url=self._api_url)
        content = serialize_request(body)
        canonical = CanonicalRequest.from_parts(method, url, content, iso_timestamp())

        headers = canonical.headers(self._credentials)
        headers["Accept"] = "application/json"
        headers["User-Agent"] = get_client_ident()
        if content is not None:
            headers["Content-Type"] = "application/json"

        log.debug("%s %s", method, canonical.request_path)
        response = await self._http_executor.send_request(
            method,
            url,
            headers,
            content=content,
            proxy=proxy if proxy is not None else self._proxy,
        )
        raise_response_errors(response)
        return response.body

    ### ------------------------------------------------ Account API ------------------------------------------------

    async def get_trading_account_balance(
        self, currencies: Sequence[str] | None = None, proxy: str | None = None
    ) -> ResponseEnvelope[TradingBalance]:
        """Get the trading account balance.

        Args:
            currencies: Restrict the details to these currencies, e.g. ["ETH", "USDC"]
            proxy: Optional forward proxy for this call

        Returns:
            ResponseEnvelope[TradingBalance]: The decoded envelope; check
                ``is_success`` or call ``raise_for_code()``

        Raises:
            DecodeError: If the API response cannot be decoded

        Endpoint:
            GET /api/v5/account/balance

        """
        params = [("ccy", ",".join(currencies))] if currencies else None
        response = await self.dispatch(
            TRADING_ACCOUNT_BALANCE_PATH, params, "GET", proxy=proxy
        )
        return decode_envelope(response, _trading_balance)

    async def get_sub_account_funding_balance(
        self, sub_account_name: str, proxy: str | None = None
    ) -> ResponseEnvelope[BalanceDetail]:
        """Get the funding account balance of one sub-account.

        Args:
            sub_account_name: Name of the sub-account
            proxy: Optional forward proxy for this call

        Returns:
            ResponseEnvelope[BalanceDetail]: One entry per currency held

        Raises:
            ValidationError: If sub_account_name is empty
            DecodeError: If the API response cannot be decoded

        Endpoint:
            GET /api/v5/asset/subaccount/balances

        """
        if not sub_account_name:
            raise ValidationError("sub_account_name must not be empty")
        response = await self.dispatch(
            SUB_ACCOUNT_FUNDING_BALANCE_PATH,
            [("subAcct", sub_account_name)],
            "GET",
            proxy=proxy,
        )
        return decode_envelope(response, _balance_detail)

    async def list_sub_accounts(
        self, proxy: str | None = None
    ) -> ResponseEnvelope[SubAccount]:
        """List the sub-accounts of the master account.

        Endpoint:
            GET /api/v5/users/subaccount/list

        """
        response = await self.dispatch(SUB_ACCOUNT_LIST_PATH, None, "GET", proxy=proxy)
        return decode_envelope(response, _sub_account)

    async def get_all_sub_account_funding_balances(
        self, proxy: str | None = None
    ) -> dict[str, ResponseEnvelope[BalanceDetail]]:
        """Get the funding balance of every sub-account.

        Lists the sub-accounts, then requests each funding balance in turn.
        There is no partial result: the first failure aborts the whole
        operation.

        Args:
            proxy: Optional forward proxy for every call made

        Returns:
            dict[str, ResponseEnvelope[BalanceDetail]]: Balances keyed by
                sub-account name, in listing order

        Raises:
            DomainError: If the listing or any balance call returns a non-"0" code
            DecodeError: If any API response cannot be decoded

        """
        sub_accounts = (await self.list_sub_accounts(proxy=proxy)).raise_for_code()

        balances: dict[str, ResponseEnvelope[BalanceDetail]] = {}
        for sub_account in sub_accounts.data:
            envelope = await self.get_sub_account_funding_balance(
                sub_account.subAcct, proxy=proxy
            )
            balances[sub_account.subAcct] = envelope.raise_for_code()
        return balances

    ### ------------------------------------------------ Asset API ------------------------------------------------

    async def transfer_from_sub_account(
        self,
        currency: str,
        amount: NumericInput,
        sub_account_name: str,
        proxy: str | None = None,
    ) -> TransferResponse:
        """Transfer funds from a sub-account's funding account to the master's.

        Args:
            currency: Currency to move, e.g. "USDT"
            amount: Amount to move
            sub_account_name: Sub-account the funds come from
            proxy: Optional forward proxy for this call

        Returns:
            TransferResponse: The transfer id, currency and amount

        Raises:
            DomainError: If OKX rejects the transfer
            DecodeError: If the API response cannot be decoded

        Endpoint:
            POST /api/v5/asset/transfer

        """
        request = TransferRequest(
            ccy=currency,
            amt=full_precision_string(amount),
            subAcct=sub_account_name,
        )
        response = await self.dispatch(
            ASSET_TRANSFER_PATH, None, "POST", body=request.to_json(), proxy=proxy
        )
        return _require_first(decode_envelope(response, _transfer_response))

    async def transfer_from_sub_accounts_to_master(
        self, currency: str, proxy: str | None = None
    ) -> dict[str, TransferResponse]:
        """Sweep the full available balance of ``currency`` into the master account.

        Sub-accounts holding no ``currency`` are skipped. Transfers run one at
        a time and the first failure stops the sweep. Transfers that already
        went through are not reversed; they are reported on the raised
        error's ``completed`` mapping.

        Args:
            currency: Currency to sweep, e.g. "USDT"
            proxy: Optional forward proxy for every call made

        Returns:
            dict[str, TransferResponse]: Transfers made, keyed by sub-account name

        Raises:
            DomainError: If fetching balances or any transfer is rejected
            TransportError: If a call fails in transit; the transfer in flight
                may or may not have been executed
            DecodeError: If any API response cannot be decoded

        """
        balances = await self.get_all_sub_account_funding_balances(proxy=proxy)

        completed: dict[str, TransferResponse] = {}
        for sub_account_name, envelope in balances.items():
            amount = find_available_balance(envelope.data, currency)
            if amount is None:
                log.debug("No %s balance in sub-account %s", currency, sub_account_name)
                continue

            log.info(
                "Transferring %s %s from sub-account %s",
                amount,
                currency,
                sub_account_name,
            )
            try:
                completed[sub_account_name] = await self.transfer_from_sub_account(
                    currency, amount, sub_account_name, proxy=proxy
                )
            except BaseError as e:
                log.warning(
                    "Sweep of %s aborted at sub-account %s after %d transfer(s): %s",
                    currency,
                    sub_account_name,
                    len(completed),
                    e,
                )
                e.completed = dict(completed)
                raise

        return completed

    async def withdraw(
        self,
        amount: NumericInput,
        fee: NumericInput,
        currency: str,
        chain: str,
        to_address: str,
        proxy: str | None = None,
    ) -> WithdrawResponse:
        """Submit an on-chain withdrawal.

        Args:
            amount: Amount to withdraw; floats are formatted without exponent
            fee: Network fee
            currency: Currency to withdraw, e.g. "SOL"
            chain: Chain name, combined with the currency as "SOL-Solana"
            to_address: Destination address
            proxy: Optional forward proxy for this call

        Returns:
            WithdrawResponse: Response containing the withdrawal id

        Raises:
            ValidationError: If amount or fee is not a valid decimal
            DomainError: If OKX rejects the withdrawal
            DecodeError: If the API response cannot be decoded

        Endpoint:
            POST /api/v5/asset/withdrawal

        """
        request = WithdrawRequest(amount, fee, currency, chain, to_address)
        response = await self.dispatch(
            ASSET_WITHDRAWAL_PATH, None, "POST", body=asdict(request), proxy=proxy
        )
        return _require_first(decode_envelope(response, _withdraw_response))


def _require_first(envelope: ResponseEnvelope[T]) -> T:
    """Return the single payload item of a mutating call, raising on failure."""
    envelope.raise_for_code()
    result = envelope.first()
    if result is None:
        raise DecodeError("Successful response carried no data", envelope.raw_data)
    return result
