"""Tests for request signing."""

import base64
import hmac
from hashlib import sha256

import pytest

from okx_rest.auth import CanonicalRequest, Credentials, prehash
from okx_rest.errors import MissingCredentialsError

TIMESTAMP = "2020-12-08T09:08:57.715Z"


def reference_signature(secret: str, message: bytes) -> str:
    return base64.b64encode(hmac.new(secret.encode(), message, sha256).digest()).decode()


@pytest.fixture
def credentials() -> Credentials:
    return Credentials("api-key", "secret-key", "passphrase")


def test_prehash_without_body_has_no_separators():
    assert prehash("T", "GET", "/p") == b"TGET/p"


def test_prehash_appends_body():
    assert (
        prehash("T", "POST", "/api/v5/asset/transfer", b'{"ccy":"USDT"}')
        == b'TPOST/api/v5/asset/transfer{"ccy":"USDT"}'
    )


def test_prehash_uppercases_method():
    assert prehash("T", "get", "/p") == b"TGET/p"


def test_sign_matches_hmac_sha256_base64(credentials):
    signature = credentials.sign("GET", TIMESTAMP, "/api/v5/account/balance?ccy=BTC")

    assert signature == reference_signature(
        "secret-key", f"{TIMESTAMP}GET/api/v5/account/balance?ccy=BTC".encode()
    )


def test_sign_is_deterministic(credentials):
    first = credentials.sign("POST", TIMESTAMP, "/p", b'{"a":"1"}')
    second = credentials.sign("POST", TIMESTAMP, "/p", b'{"a":"1"}')

    assert first == second


@pytest.mark.parametrize(
    "changed",
    [
        ("GET", TIMESTAMP, "/p", b'{"a":"1"}'),
        ("POST", "2020-12-08T09:08:57.716Z", "/p", b'{"a":"1"}'),
        ("POST", TIMESTAMP, "/q", b'{"a":"1"}'),
        ("POST", TIMESTAMP, "/p", b'{"a":"2"}'),
        ("POST", TIMESTAMP, "/p", None),
    ],
)
def test_sign_changes_with_any_field(credentials, changed):
    base = credentials.sign("POST", TIMESTAMP, "/p", b'{"a":"1"}')

    assert credentials.sign(*changed) != base


def test_sign_accepts_str_or_bytes_body(credentials):
    assert credentials.sign("POST", TIMESTAMP, "/p", '{"a":"1"}') == credentials.sign(
        "POST", TIMESTAMP, "/p", b'{"a":"1"}'
    )


def test_different_secret_gives_different_signature(credentials):
    other = Credentials("api-key", "another-secret", "passphrase")

    assert other.sign("GET", TIMESTAMP, "/p") != credentials.sign("GET", TIMESTAMP, "/p")


def test_repr_hides_secret_and_passphrase(credentials):
    text = repr(credentials)

    assert "api-key" in text
    assert "secret-key" not in text
    assert "passphrase='" not in text


@pytest.mark.parametrize(
    "args, missing",
    [
        (("", "secret", "pass"), "API key"),
        (("key", "", "pass"), "Secret key"),
        (("key", "secret", ""), "Passphrase"),
    ],
)
def test_empty_credentials_are_rejected(args, missing):
    with pytest.raises(MissingCredentialsError) as exc_info:
        Credentials(*args)

    assert exc_info.value.credential_type == missing


def test_credentials_are_immutable(credentials):
    with pytest.raises(AttributeError):
        credentials.secret_key = "changed"  # type: ignore


def test_canonical_request_uses_path_and_query_only():
    canonical = CanonicalRequest.from_parts(
        "get",
        "https://www.okx.com/api/v5/account/balance?ccy=ETH,USDC",
        None,
        TIMESTAMP,
    )

    assert canonical.method == "GET"
    assert canonical.request_path == "/api/v5/account/balance?ccy=ETH,USDC"
    assert canonical.prehash() == (
        f"{TIMESTAMP}GET/api/v5/account/balance?ccy=ETH,USDC".encode()
    )


def test_canonical_headers_carry_signed_timestamp(credentials):
    canonical = CanonicalRequest.from_parts(
        "POST", "https://www.okx.com/api/v5/asset/transfer", b"{}", TIMESTAMP
    )

    headers = canonical.headers(credentials)

    assert headers == {
        "OK-ACCESS-KEY": "api-key",
        "OK-ACCESS-PASSPHRASE": "passphrase",
        "OK-ACCESS-SIGN": reference_signature(
            "secret-key", f"{TIMESTAMP}POST/api/v5/asset/transfer{{}}".encode()
        ),
        "OK-ACCESS-TIMESTAMP": TIMESTAMP,
    }
