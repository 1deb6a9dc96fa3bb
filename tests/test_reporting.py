"""
Subscan payload validation.
"""
import pytest
import requests

from supplyaudit.ledger.reporting import subscan
from supplyaudit.protocol.config.params import current_network, get_network
from supplyaudit.protocol.types.common import (
    ConfigurationError,
    RemoteConnectionError,
    SchemaValidationError,
    SupplyAuditError,
    TransientIOError,
)

TOKEN_PAYLOAD = {
    "code": 0,
    "message": "Success",
    "data": {
        "detail": {
            "CTC": {
                "symbol": "CTC",
                "total_issuance": "1000000000000000000000",
                "free_balance": "900000000000000000000",
                "available_balance": "700000000000000000000",
                "locked_balance": "200000000000000000000",
                "reserved_balance": "100000000000000000000",
                "unbonded_locked_balance": "5000",
            }
        }
    },
}

BLOCKS_PAYLOAD = {
    "code": 0,
    "message": "Success",
    "generated_at": 1700000000,
    "data": {
        "blocks": [
            {"block_num": 4321, "hash": "0x" + "cd" * 32, "finalized": True, "extrinsics_count": 2},
        ],
        "count": 4321,
    },
}


class FakeResponse:
    def __init__(self, body, status_code=200, url="https://creditcoin.api.subscan.io/api/scan"):
        self._body = body
        self.status_code = status_code
        self.url = url
        self.text = str(body)

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


@pytest.fixture
def http(monkeypatch):
    """Replaces requests.request; returns the list of recorded calls."""
    calls = []
    responses = {}

    def fake_request(method, url, **kwargs):
        calls.append((method, url, kwargs))
        response = responses[url.rsplit("/", 1)[-1]]
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(requests, "request", fake_request)
    monkeypatch.delenv("SUBSCAN_API_KEY", raising=False)
    return calls, responses


def test_token_info_parsed(http):
    calls, responses = http
    responses["token"] = FakeResponse(TOKEN_PAYLOAD)

    detail = subscan.get_token_info(get_network("creditcoin"))

    assert detail.total_issuance == "1000000000000000000000"
    assert detail.reserved_balance == "100000000000000000000"
    method, url, kwargs = calls[0]
    assert (method, url) == ("GET", "https://creditcoin.api.subscan.io/api/scan/token")
    assert "X-API-Key" not in kwargs["headers"]


def test_token_info_missing_symbol_rejected(http):
    _, responses = http
    responses["token"] = FakeResponse({"data": {"detail": {"DOT": TOKEN_PAYLOAD["data"]["detail"]["CTC"]}}})

    with pytest.raises(SchemaValidationError, match="CTC"):
        subscan.get_token_info(get_network("creditcoin"))


@pytest.mark.parametrize("field,value", [("total_issuance", None), ("free_balance", "12.5"), ("locked_balance", 100)])
def test_token_info_bad_field_rejected(http, field, value):
    _, responses = http
    detail = dict(TOKEN_PAYLOAD["data"]["detail"]["CTC"])
    detail[field] = value
    responses["token"] = FakeResponse({"data": {"detail": {"CTC": detail}}})

    with pytest.raises(SchemaValidationError):
        subscan.get_token_info(get_network("creditcoin"))


def test_non_json_body_rejected(http):
    _, responses = http
    responses["token"] = FakeResponse(ValueError("Expecting value"))

    with pytest.raises(SchemaValidationError, match="not JSON"):
        subscan.get_token_info(get_network("creditcoin"))


def test_latest_block(http, monkeypatch):
    calls, responses = http
    responses["blocks"] = FakeResponse(BLOCKS_PAYLOAD)
    monkeypatch.setenv("SUBSCAN_API_KEY", "secret")

    block = subscan.get_latest_block(get_network("creditcoin-testnet"))

    assert block.block_num == 4321
    assert block.hash == "0x" + "cd" * 32
    method, url, kwargs = calls[0]
    assert (method, url) == ("POST", "https://creditcoin-testnet.api.subscan.io/api/scan/blocks")
    assert kwargs["json"] == {"page": 0, "row": 1}
    assert kwargs["headers"]["X-API-Key"] == "secret"


def test_latest_block_empty_list_rejected(http):
    _, responses = http
    payload = dict(BLOCKS_PAYLOAD, data={"blocks": [], "count": 0})
    responses["blocks"] = FakeResponse(payload)

    with pytest.raises(SchemaValidationError, match="empty"):
        subscan.get_latest_block(get_network("creditcoin"))


def test_latest_block_missing_envelope_rejected(http):
    _, responses = http
    responses["blocks"] = FakeResponse({"code": 10004, "message": "Record Not Found"})

    with pytest.raises(SchemaValidationError):
        subscan.get_latest_block(get_network("creditcoin"))


def test_http_error_status(http):
    _, responses = http
    responses["token"] = FakeResponse({}, status_code=429)

    with pytest.raises(TransientIOError, match="429"):
        subscan.get_token_info(get_network("creditcoin"))


def test_unreachable_service(http):
    _, responses = http
    responses["token"] = requests.ConnectionError("no route to host")

    with pytest.raises(RemoteConnectionError):
        subscan.get_token_info(get_network("creditcoin"))


def test_default_network_resolved_per_call(http, monkeypatch):
    calls, responses = http
    responses["token"] = FakeResponse(TOKEN_PAYLOAD)
    monkeypatch.setenv("SUPPLYAUDIT_NETWORK", "creditcoin-testnet")

    subscan.get_token_info()

    assert calls[0][1] == "https://creditcoin-testnet.api.subscan.io/api/scan/token"


def test_unknown_network_is_a_configuration_error(monkeypatch):
    monkeypatch.setenv("SUPPLYAUDIT_NETWORK", "nonexistent")

    with pytest.raises(ConfigurationError, match="nonexistent") as exc:
        current_network()
    assert isinstance(exc.value, SupplyAuditError)
