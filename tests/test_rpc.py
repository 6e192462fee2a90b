"""Tests for the JSON-RPC client and ABI codec."""

from __future__ import annotations

import json
from unittest.mock import patch

import httpx
import pytest
from eth_abi import encode
from eth_hash.auto import keccak

from oblatio.chain import rpc
from oblatio.chain.abi import BOOKSTORE_ABI, CHARITY_PLATFORM_ABI, abi_type, load_abi
from oblatio.chain.rpc import RpcError

CONTRACT = "0x" + "11" * 20


def _mock_client(handler):
    real_client = httpx.Client

    def factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    return patch("oblatio.chain.rpc.httpx.Client", factory)


class TestAbi:
    """Tests for ABI helpers."""

    def test_tuple_type_expansion(self) -> None:
        outputs = CHARITY_PLATFORM_ABI[3]["outputs"]
        assert abi_type(outputs[0]) == "(uint256,string,string,uint256,uint256,bool)"

    def test_tuple_array_suffix(self) -> None:
        param = {"type": "tuple[]", "components": [{"type": "uint256"}, {"type": "address"}]}
        assert abi_type(param) == "(uint256,address)[]"

    def test_builtin(self) -> None:
        assert load_abi("AdvancedBookStore") is BOOKSTORE_ABI

    def test_unknown_builtin(self) -> None:
        with pytest.raises(ValueError):
            load_abi("Nope")

    def test_hardhat_artifact(self, tmp_path) -> None:
        artifact = tmp_path / "CharityPlatform.json"
        artifact.write_text(json.dumps({"contractName": "CharityPlatform", "abi": CHARITY_PLATFORM_ABI}))
        assert load_abi("CharityPlatform", artifact) == CHARITY_PLATFORM_ABI

    def test_missing_artifact(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_abi("CharityPlatform", tmp_path / "missing.json")


class TestEncoding:
    """Tests for calldata encoding and result decoding."""

    def test_selector(self) -> None:
        calldata = rpc._encode_function_call(CHARITY_PLATFORM_ABI, "campaignCount", [])
        assert calldata == "0x" + keccak(b"campaignCount()")[:4].hex()

    def test_arguments(self) -> None:
        calldata = rpc._encode_function_call(BOOKSTORE_ABI, "buyBook", [5, 2])
        expected = keccak(b"buyBook(uint256,uint256)")[:4] + encode(["uint256", "uint256"], [5, 2])
        assert calldata == "0x" + expected.hex()

    def test_wrong_arity(self) -> None:
        with pytest.raises(ValueError):
            rpc._encode_function_call(BOOKSTORE_ABI, "buyBook", [5])

    def test_named_struct(self) -> None:
        raw = encode(
            ["(uint256,string,string,uint256,uint256,bool)"],
            [(1, "Clean Water", "Well funding", 5, 0, False)],
        )
        values = rpc._decode_function_result(CHARITY_PLATFORM_ABI, "getCampaign", "0x" + raw.hex())
        named = rpc.name_outputs(CHARITY_PLATFORM_ABI, "getCampaign", values)
        assert named == {
            "id": 1,
            "title": "Clean Water",
            "description": "Well funding",
            "targetAmount": 5,
            "raisedAmount": 0,
            "isCompleted": False,
        }

    def test_named_multiple_outputs(self) -> None:
        raw = encode(["string", "string", "uint256", "uint256"], ["HP", "JKR", 10, 100])
        values = rpc._decode_function_result(BOOKSTORE_ABI, "getBooks", raw.hex())
        named = rpc.name_outputs(BOOKSTORE_ABI, "getBooks", values)
        assert named == {"title": "HP", "author": "JKR", "price": 10, "stock": 100}


class TestRpcCall:
    """Tests for the JSON-RPC transport."""

    def test_result(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            assert body["method"] == "eth_gasPrice"
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x3b9aca00"})

        with _mock_client(handler):
            assert rpc.get_gas_price(rpc_url="http://node") == 1_000_000_000

    def test_error_object(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": 1, "error": {"code": 3, "message": "execution reverted"}},
            )

        with _mock_client(handler):
            with pytest.raises(RpcError, match="execution reverted") as excinfo:
                rpc._rpc_call("eth_call", [], rpc_url="http://node")
        assert excinfo.value.code == 3

    def test_http_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502)

        with _mock_client(handler):
            with pytest.raises(RpcError):
                rpc._rpc_call("eth_blockNumber", [], rpc_url="http://node")

    def test_unreachable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with _mock_client(handler):
            with pytest.raises(RpcError, match="connection refused"):
                rpc._rpc_call("eth_blockNumber", [], rpc_url="http://node")


class TestReadContract:
    """Tests for read_contract."""

    def test_decodes(self) -> None:
        raw = "0x" + encode(["uint256"], [7]).hex()
        with patch("oblatio.chain.rpc._rpc_call", return_value=raw) as call:
            assert rpc.read_contract(CONTRACT, "campaignCount", [], abi=CHARITY_PLATFORM_ABI) == (7,)
        method, params = call.call_args.args[:2]
        assert method == "eth_call"
        assert params[0]["to"] == CONTRACT

    def test_empty_result_is_error(self) -> None:
        with patch("oblatio.chain.rpc._rpc_call", return_value="0x"):
            with pytest.raises(RpcError):
                rpc.read_contract(CONTRACT, "campaignCount", [], abi=CHARITY_PLATFORM_ABI)


class TestWaitForReceipt:
    """Tests for wait_for_receipt."""

    def test_polls_until_receipt(self) -> None:
        receipt = {"blockNumber": "0x1", "status": "0x1"}
        with patch("oblatio.chain.rpc.get_receipt", side_effect=[None, None, receipt]) as get:
            assert rpc.wait_for_receipt("0xabc", poll_interval=0) == receipt
        assert get.call_count == 3

    def test_timeout(self) -> None:
        with patch("oblatio.chain.rpc.get_receipt", return_value=None):
            with pytest.raises(TimeoutError):
                rpc.wait_for_receipt("0xabc", timeout=0, poll_interval=0)

    def test_polling_error_propagates(self) -> None:
        with patch("oblatio.chain.rpc.get_receipt", side_effect=RpcError("connection reset")):
            with pytest.raises(RpcError):
                rpc.wait_for_receipt("0xabc", poll_interval=0)


class TestNameOutputs:
    """Tests for name_outputs with unnamed ABI outputs."""

    def test_unnamed_outputs_keyed_by_position(self) -> None:
        abi = [{
            "type": "function",
            "name": "getBooks",
            "inputs": [{"name": "", "type": "uint256"}],
            "outputs": [{"name": "", "type": "string"}, {"name": "", "type": "uint256"}],
        }]
        assert rpc.name_outputs(abi, "getBooks", ("HP", 10)) == {"0": "HP", "1": 10}
