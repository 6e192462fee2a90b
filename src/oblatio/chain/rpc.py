"""
JSON-RPC Client for EVM nodes.

Lightweight alternative to web3.py: uses httpx for HTTP + eth-abi for encoding.
Supports read-only contract calls, gas simulation, raw transaction
submission, and transaction receipt polling.
"""

from __future__ import annotations

import os
import time
from typing import Any, Optional

import httpx
from eth_abi import encode, decode
from eth_hash.auto import keccak

from .abi import abi_type, find_function


# Default RPC endpoint (local Hardhat / Anvil node)
DEFAULT_RPC_URL = "http://127.0.0.1:8545"
DEFAULT_CHAIN_ID = 11155111  # Sepolia
DEFAULT_HTTP_TIMEOUT = 30.0


class RpcError(RuntimeError):
    """Transport failure or JSON-RPC ``error`` response."""

    def __init__(self, message: str, code: Optional[int] = None, data: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.data = data


def _keccak256(data: bytes) -> bytes:
    """Compute Keccak-256 hash.

    NOTE: Keccak-256 != SHA3-256 (NIST). Never use hashlib.sha3_256 here.
    """
    return keccak(data)


def get_rpc_url() -> str:
    """Get the RPC URL from environment or default."""
    return os.environ.get("RPC_URL", DEFAULT_RPC_URL)


def get_chain_id() -> int:
    """Get the chain ID from environment or default."""
    return int(os.environ.get("CHAIN_ID", str(DEFAULT_CHAIN_ID)))


def _rpc_call(method: str, params: list, rpc_url: Optional[str] = None) -> Any:
    """
    Make a JSON-RPC call.

    Args:
        method: RPC method name (e.g., "eth_call")
        params: RPC parameters
        rpc_url: RPC endpoint URL

    Returns:
        Result field from the RPC response

    Raises:
        RpcError: If the node is unreachable or returns an error object
    """
    url = rpc_url or get_rpc_url()
    payload = {
        "jsonrpc": "2.0",
        "method": method,
        "params": params,
        "id": 1,
    }

    try:
        with httpx.Client(timeout=DEFAULT_HTTP_TIMEOUT) as client:
            response = client.post(url, json=payload)
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPError as exc:
        raise RpcError(f"{method} failed: {exc}") from exc
    except ValueError as exc:
        raise RpcError(f"{method} returned invalid JSON: {exc}") from exc

    if "error" in data:
        error = data["error"] or {}
        if isinstance(error, dict):
            raise RpcError(
                f"RPC error: {error.get('message', error)}",
                code=error.get("code"),
                data=error.get("data"),
            )
        raise RpcError(f"RPC error: {error}")

    return data.get("result")


def _encode_function_call(abi: list, function_name: str, args: list) -> str:
    """
    ABI-encode a function call.

    Args:
        abi: Contract ABI
        function_name: Function name to call
        args: Function arguments

    Returns:
        0x-prefixed hex encoded calldata
    """
    func = find_function(abi, function_name)

    input_types = [abi_type(inp) for inp in func.get("inputs", [])]
    if len(args) != len(input_types):
        raise ValueError(
            f"{function_name} expects {len(input_types)} arguments, got {len(args)}"
        )
    sig = f"{function_name}({','.join(input_types)})"

    # Selector is the first 4 bytes of keccak256(signature)
    selector = _keccak256(sig.encode("utf-8"))[:4]

    if args:
        encoded_args = encode(input_types, list(args))
    else:
        encoded_args = b""

    return "0x" + selector.hex() + encoded_args.hex()


def _decode_function_result(abi: list, function_name: str, data: str) -> tuple:
    """
    ABI-decode a function call result.

    Args:
        abi: Contract ABI
        function_name: Function name
        data: 0x-prefixed hex encoded return data

    Returns:
        Tuple of the declared return values (empty if none)
    """
    func = find_function(abi, function_name)

    output_types = [abi_type(out) for out in func.get("outputs", [])]
    if not output_types:
        return ()

    raw = bytes.fromhex(data[2:]) if data.startswith("0x") else bytes.fromhex(data)
    return tuple(decode(output_types, raw))


def name_outputs(abi: list, function_name: str, values: tuple) -> dict[str, Any]:
    """
    Attach ABI output names to decoded return values.

    A single struct output is flattened into its component names, so
    ``getCampaign`` yields ``{"id": ..., "title": ...}`` rather than one
    anonymous tuple.  Unnamed outputs are keyed by position.
    """
    func = find_function(abi, function_name)
    outputs = func.get("outputs", [])

    if len(outputs) == 1 and outputs[0]["type"] == "tuple":
        outputs = outputs[0].get("components", [])
        values = tuple(values[0])

    named: dict[str, Any] = {}
    for index, (param, value) in enumerate(zip(outputs, values)):
        named[param.get("name") or str(index)] = value
    return named


def read_contract(
    contract_address: str,
    function_name: str,
    args: Optional[list] = None,
    abi: Optional[list] = None,
    rpc_url: Optional[str] = None,
) -> tuple:
    """
    Read from a smart contract (eth_call).

    Args:
        contract_address: 0x-prefixed contract address
        function_name: Function to call
        args: Function arguments (default: [])
        abi: Contract ABI
        rpc_url: RPC endpoint URL

    Returns:
        Tuple of decoded return values

    Raises:
        RpcError: If the call reverts, the node is unreachable, or the
            contract returned no data for a function that declares outputs
    """
    if abi is None:
        raise ValueError("abi must be provided")

    calldata = _encode_function_call(abi, function_name, args or [])

    result = _rpc_call(
        "eth_call",
        [{"to": contract_address, "data": calldata}, "latest"],
        rpc_url=rpc_url,
    )

    if result is None or result == "0x":
        if find_function(abi, function_name).get("outputs"):
            raise RpcError(f"{function_name} returned no data (is {contract_address} a contract?)")
        return ()

    return _decode_function_result(abi, function_name, result)


def get_balance(address: str, rpc_url: Optional[str] = None) -> int:
    """Balance of an address in wei."""
    result = _rpc_call("eth_getBalance", [address, "latest"], rpc_url=rpc_url)
    return int(result, 16)


def get_nonce(address: str, rpc_url: Optional[str] = None) -> int:
    """
    Get transaction nonce for an address.

    Counts pending transactions so back-to-back writes do not collide.
    """
    result = _rpc_call("eth_getTransactionCount", [address, "pending"], rpc_url=rpc_url)
    return int(result, 16)


def get_gas_price(rpc_url: Optional[str] = None) -> int:
    """Current gas price in wei."""
    result = _rpc_call("eth_gasPrice", [], rpc_url=rpc_url)
    return int(result, 16)


def estimate_gas(call: dict, rpc_url: Optional[str] = None) -> int:
    """
    Simulate a call and return its gas estimate.

    A revert during simulation surfaces as an RpcError carrying the
    node's revert message.
    """
    result = _rpc_call("eth_estimateGas", [call], rpc_url=rpc_url)
    return int(result, 16)


def send_raw_transaction(raw_tx: str, rpc_url: Optional[str] = None) -> str:
    """
    Send a signed raw transaction.

    Args:
        raw_tx: 0x-prefixed hex encoded signed transaction

    Returns:
        Transaction hash (0x-prefixed hex)
    """
    return _rpc_call("eth_sendRawTransaction", [raw_tx], rpc_url=rpc_url)


def get_receipt(tx_hash: str, rpc_url: Optional[str] = None) -> Optional[dict]:
    """Receipt for a transaction, or None while it is still pending."""
    return _rpc_call("eth_getTransactionReceipt", [tx_hash], rpc_url=rpc_url)


def wait_for_receipt(
    tx_hash: str,
    timeout: Optional[float] = None,
    poll_interval: float = 2.0,
    rpc_url: Optional[str] = None,
) -> dict:
    """
    Wait for a transaction receipt.

    Args:
        tx_hash: Transaction hash
        timeout: Maximum wait time in seconds (None waits without bound)
        poll_interval: Polling interval in seconds
        rpc_url: RPC endpoint URL

    Returns:
        Transaction receipt dict

    Raises:
        TimeoutError: If receipt not found within timeout
        RpcError: If polling itself fails
    """
    start = time.monotonic()
    while True:
        receipt = get_receipt(tx_hash, rpc_url=rpc_url)
        if receipt is not None:
            return receipt
        if timeout is not None and time.monotonic() - start >= timeout:
            raise TimeoutError(f"Transaction {tx_hash} not confirmed within {timeout}s")
        time.sleep(poll_interval)
