import orjson
import pytest

from okx_rest.errors import DomainError, ValidationError
from tests.mock_executors import MockSuccessfulOutput
from tests.unit.conftest import BASE_URL, load_json_all_cases


@pytest.mark.asyncio
@pytest.mark.parametrize("test_data", load_json_all_cases("response.withdrawal"))
async def test_withdraw(mock_http_client, test_data):
    payload, path = test_data
    client, mock_http = mock_http_client

    mock_http.stage_output(
        MockSuccessfulOutput(
            output=payload,
            call_validation=lambda call: call.arg_pack[0:2]
            == ("POST", f"{BASE_URL}/api/v5/asset/withdrawal")
            and call.arg_pack[2]["Content-Type"] == "application/json",
        )
    )

    response = await client.withdraw(
        1.5, "0.008", "SOL", "Solana", "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"
    )

    assert response.wdId == payload["data"][0]["wdId"]
    assert response.chain == "SOL-Solana"
    assert orjson.loads(mock_http.call_log[0].arg_pack[3]) == {
        "amt": "1.5",
        "fee": "0.008",
        "dest": "4",
        "ccy": "SOL",
        "chain": "SOL-Solana",
        "toAddr": "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM",
    }


@pytest.mark.asyncio
async def test_small_float_amount_has_no_exponent(mock_http_client):
    client, mock_http = mock_http_client
    mock_http.stage_output(
        MockSuccessfulOutput(output={"code": "0", "data": [{"wdId": "1"}]})
    )

    await client.withdraw(1e-07, "0.0001", "BTC", "Bitcoin", "bc1qxyz")

    body = orjson.loads(mock_http.call_log[0].arg_pack[3])
    assert body["amt"] == "0.0000001"
    assert body["chain"] == "BTC-Bitcoin"


@pytest.mark.asyncio
async def test_rejected_withdrawal_raises_domain_error(mock_http_client):
    client, mock_http = mock_http_client
    mock_http.stage_output(
        MockSuccessfulOutput(
            output={
                "code": "58207",
                "msg": "Withdrawal address isn't on the verified address list.",
                "data": [],
            }
        )
    )

    with pytest.raises(DomainError) as exc_info:
        await client.withdraw(1.5, "0.008", "SOL", "Solana", "unverified")

    assert exc_info.value.code == "58207"


@pytest.mark.asyncio
async def test_invalid_amount_sends_nothing(mock_http_client):
    client, mock_http = mock_http_client

    with pytest.raises(ValidationError):
        await client.withdraw(-1.0, "0.008", "SOL", "Solana", "addr")

    assert mock_http.call_log == []
