import orjson
import pytest

from okx_rest.errors import DomainError
from tests.mock_executors import MockSuccessfulOutput
from tests.unit.conftest import BASE_URL, load_json_all_cases


@pytest.mark.asyncio
@pytest.mark.parametrize("test_data", load_json_all_cases("response.transfer"))
async def test_transfer_from_sub_account(mock_http_client, test_data):
    payload, path = test_data
    client, mock_http = mock_http_client
    transfer = payload["data"][0]

    mock_http.stage_output(
        MockSuccessfulOutput(
            output=payload,
            call_validation=lambda call: call.arg_pack[0:2]
            == ("POST", f"{BASE_URL}/api/v5/asset/transfer")
            and call.arg_pack[3] is not None,
        )
    )

    response = await client.transfer_from_sub_account(
        transfer["ccy"], transfer["amt"], "maker01"
    )

    assert response.transId == transfer["transId"]
    assert response.ccy == transfer["ccy"]
    assert response.amt == transfer["amt"]
    assert response.fromAccount == "6"
    assert response.toAccount == "6"

    content = mock_http.call_log[0].arg_pack[3]
    assert orjson.loads(content) == {
        "ccy": transfer["ccy"],
        "amt": transfer["amt"],
        "from": "6",
        "to": "6",
        "type": "2",
        "subAcct": "maker01",
    }
    assert content.startswith(b'{"ccy":')


@pytest.mark.asyncio
async def test_numeric_amount_is_sent_as_decimal_string(mock_http_client):
    client, mock_http = mock_http_client
    mock_http.stage_output(
        MockSuccessfulOutput(
            output={
                "code": "0",
                "data": [{"transId": "1", "ccy": "BTC", "amt": "0.00012"}],
            }
        )
    )

    await client.transfer_from_sub_account("BTC", 0.00012, "maker01")

    assert orjson.loads(mock_http.call_log[0].arg_pack[3])["amt"] == "0.00012"


@pytest.mark.asyncio
async def test_rejected_transfer_raises_domain_error(mock_http_client):
    client, mock_http = mock_http_client
    mock_http.stage_output(
        MockSuccessfulOutput(
            output={"code": "58350", "msg": "Insufficient balance", "data": []}
        )
    )

    with pytest.raises(DomainError) as exc_info:
        await client.transfer_from_sub_account("USDT", "10", "maker01")

    assert exc_info.value.code == "58350"
    assert "Insufficient balance" in str(exc_info.value)
