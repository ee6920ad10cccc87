"""Type definitions for the OKX REST client.

This module contains type aliases, enums, and dataclasses used throughout
the package, organized into logical sections for clarity.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Generic, List, Sequence, TypeAlias, TypeVar

from okx_rest.errors import DomainError, ValidationError

# ============================================================================
# TYPE ALIASES
# ============================================================================

# JSON type hierarchy
JsonObject: TypeAlias = dict[str, "JsonValue"]
JsonArray: TypeAlias = list["JsonValue"]
JsonValue: TypeAlias = None | bool | int | float | str | JsonObject | JsonArray
# OKX always answers with an object envelope, so responses are decoded as dict
Json: TypeAlias = JsonObject

# Input types
NumericInput: TypeAlias = Decimal | str | float | int
QueryParams: TypeAlias = Sequence[tuple[str, str]] | dict[str, str]


# ============================================================================
# NUMERIC CONVERSION UTILITIES
# ============================================================================

DECIMAL_PATTERN = re.compile(r"\d+(\.\d+)?")


def full_precision_string(n: NumericInput) -> str:
    """Convert a numeric input to a plain decimal string with no exponent."""
    if isinstance(n, str):
        if not DECIMAL_PATTERN.fullmatch(n):
            raise ValidationError(f"Invalid numeric input {n}")
        return n
    if isinstance(n, bool):
        raise ValidationError(f"Invalid numeric input type {n} - {type(n)}")
    if isinstance(n, (int, float)):
        n = Decimal(str(n))
    if not isinstance(n, Decimal):
        raise ValidationError(f"Invalid numeric input type {n} - {type(n)}")
    if not n.is_finite() or n < 0:
        raise ValidationError(f"Invalid numeric input {n}")
    return format(n, "f")


# ============================================================================
# CORE ENUMS
# ============================================================================


class AccountType(Enum):
    """OKX account types used by asset transfers."""

    TRADING = "18"
    FUNDING = "6"


class TransferType(Enum):
    """Direction of an asset transfer between master and sub-accounts."""

    WITHIN_ACCOUNT = "0"
    MASTER_TO_SUB = "1"
    SUB_TO_MASTER = "2"


class WithdrawalDestination(Enum):
    """Withdrawal method."""

    INTERNAL = "3"
    ON_CHAIN = "4"


# ============================================================================
# RESPONSE ENVELOPE
# ============================================================================

SUCCESS_CODE = "0"

T = TypeVar("T")


@dataclass
class ResponseEnvelope(Generic[T]):
    """The ``{code, msg, data}`` wrapper OKX puts around every payload.

    ``data`` holds typed items only when ``code`` is "0"; otherwise it is
    empty and the undecoded list is left on ``raw_data``.
    """

    code: str
    data: List[T] = field(default_factory=list)
    msg: str = ""
    raw_data: list = field(default_factory=list, repr=False)

    @property
    def is_success(self) -> bool:
        return self.code == SUCCESS_CODE

    def first(self) -> T | None:
        """Return the first payload item, if any."""
        return self.data[0] if self.data else None

    def raise_for_code(self) -> "ResponseEnvelope[T]":
        """Raise DomainError unless the envelope signals success.

        Returns:
            The envelope itself, so calls can be chained.

        Raises:
            DomainError: If ``code`` is anything other than "0"

        """
        if not self.is_success:
            raise DomainError(self.code, self.msg, self.raw_data)
        return self


# ============================================================================
# ACCOUNT TYPES
# ============================================================================


@dataclass
class BalanceDetail:
    """Balance of one currency."""

    ccy: str
    availBal: str
    bal: str | None = field(default=None)
    frozenBal: str | None = field(default=None)


@dataclass
class TradingBalance:
    """Trading account balance, one detail entry per currency."""

    details: List[BalanceDetail]
    totalEq: str | None = field(default=None)
    uTime: str | None = field(default=None)

    def get_balance(self, ccy: str) -> str | None:
        """Available balance for ``ccy``, or None when the account holds none."""
        return find_available_balance(self.details, ccy)


@dataclass
class SubAccount:
    """Sub-account descriptor."""

    subAcct: str
    label: str | None = field(default=None)
    type: str | None = field(default=None)
    enable: bool | None = field(default=None)
    ts: str | None = field(default=None)


def find_available_balance(details: Sequence[BalanceDetail], ccy: str) -> str | None:
    """Return the available balance of ``ccy`` among ``details``, if present."""
    for detail in details:
        if detail.ccy == ccy:
            return detail.availBal
    return None


# ============================================================================
# CAPITAL TYPES
# ============================================================================


@dataclass
class TransferRequest:
    """Funds transfer between a sub-account and the master account."""

    ccy: str
    amt: str
    subAcct: str
    fromAccount: AccountType = AccountType.FUNDING
    toAccount: AccountType = AccountType.FUNDING
    transferType: TransferType = TransferType.SUB_TO_MASTER

    def to_json(self) -> Json:
        """Serialize with the field names OKX expects on the wire."""
        return {
            "ccy": self.ccy,
            "amt": self.amt,
            "from": self.fromAccount.value,
            "to": self.toAccount.value,
            "type": self.transferType.value,
            "subAcct": self.subAcct,
        }


@dataclass
class TransferResponse:
    """Transfer response."""

    transId: str
    ccy: str
    amt: str
    clientId: str | None = field(default=None)
    # "from" and "to" are not valid identifiers; decoded under these names
    fromAccount: str | None = field(default=None)
    toAccount: str | None = field(default=None)


@dataclass
class WithdrawRequest:
    """On-chain withdrawal request."""

    amt: str
    fee: str
    dest: str
    ccy: str
    chain: str
    toAddr: str

    def __init__(
        self,
        amount: NumericInput,
        fee: NumericInput,
        currency: str,
        chain: str,
        to_address: str,
        destination: WithdrawalDestination = WithdrawalDestination.ON_CHAIN,
    ):
        """Initialize a WithdrawRequest instance.

        Args:
            amount: Amount to withdraw (formatted to a plain decimal string).
            fee: Network fee (formatted to a plain decimal string).
            currency: Currency to withdraw, e.g. "SOL".
            chain: Chain name without the currency prefix, e.g. "Solana".
            to_address: Destination address.
            destination: Withdrawal method, on-chain by default.

        """
        self.amt = full_precision_string(amount)
        self.fee = full_precision_string(fee)
        self.dest = destination.value
        self.ccy = currency
        self.chain = f"{currency}-{chain}"
        self.toAddr = to_address


@dataclass
class WithdrawResponse:
    """Withdrawal response."""

    wdId: str
    ccy: str | None = field(default=None)
    chain: str | None = field(default=None)
    amt: str | None = field(default=None)
    clientId: str | None = field(default=None)
