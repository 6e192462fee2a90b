"""
Transaction Builder - Build, sign, and send contract transactions.

Uses eth-account for signing and httpx-based JSON-RPC for sending.
All gas is paid by the signing EOA.
"""

from __future__ import annotations

from typing import Any, Optional

from eth_account.signers.local import LocalAccount

from .rpc import (
    _encode_function_call,
    _keccak256,
    estimate_gas,
    get_chain_id,
    get_gas_price,
    get_nonce,
    send_raw_transaction,
)

# Headroom over the node's estimate; estimates are exact for the simulated
# state and the state can move before inclusion.
GAS_MARGIN_PERCENT = 20


def _to_checksum_address(address: str) -> str:
    """Convert an address to EIP-55 checksummed format.

    eth-account requires checksummed addresses in transaction fields.
    """
    addr = address.lower().replace("0x", "")
    addr_hash = _keccak256(addr.encode("utf-8")).hex()
    result = "0x"
    for i, c in enumerate(addr):
        if c in "abcdef":
            result += c.upper() if int(addr_hash[i], 16) >= 8 else c
        else:
            result += c
    return result


def build_contract_tx(
    account: LocalAccount,
    contract_address: str,
    function_name: str,
    args: list,
    abi: list,
    value: int = 0,
    gas_limit: Optional[int] = None,
    rpc_url: Optional[str] = None,
    chain_id: Optional[int] = None,
) -> dict:
    """
    Build a contract call transaction (unsigned).

    When no gas limit is given the call is simulated with
    ``eth_estimateGas`` first, so a call that would revert is rejected here
    rather than after paying for inclusion.

    Args:
        account: Signing account (for sender and nonce)
        contract_address: 0x-prefixed contract address
        function_name: Function to call
        args: Function arguments
        abi: Contract ABI
        value: Value in wei attached to the call (default: 0)
        gas_limit: Gas limit (default: estimate + margin)
        rpc_url: RPC endpoint URL
        chain_id: Chain ID (default: from environment)

    Returns:
        Unsigned transaction dict
    """
    calldata = _encode_function_call(abi, function_name, args)
    to = _to_checksum_address(contract_address)

    if gas_limit is None:
        estimate = estimate_gas(
            {"from": account.address, "to": to, "data": calldata, "value": hex(value)},
            rpc_url=rpc_url,
        )
        gas_limit = estimate * (100 + GAS_MARGIN_PERCENT) // 100

    tx = {
        "to": to,
        "data": calldata,
        "value": value,
        "nonce": get_nonce(account.address, rpc_url=rpc_url),
        "gas": gas_limit,
        "gasPrice": get_gas_price(rpc_url=rpc_url),
        "chainId": chain_id if chain_id is not None else get_chain_id(),
    }

    return tx


def sign_and_send(tx: dict, account: LocalAccount, rpc_url: Optional[str] = None) -> str:
    """
    Sign a transaction and send it.

    Returns as soon as the node accepts the transaction; inclusion is a
    separate step.

    Returns:
        Transaction hash (0x-prefixed hex)
    """
    signed = account.sign_transaction(tx)
    raw_tx = signed.raw_transaction.hex()
    if not raw_tx.startswith("0x"):
        raw_tx = "0x" + raw_tx

    return send_raw_transaction(raw_tx, rpc_url=rpc_url)


def send_contract_tx(
    account: LocalAccount,
    contract_address: str,
    function_name: str,
    args: list,
    abi: list,
    value: int = 0,
    gas_limit: Optional[int] = None,
    rpc_url: Optional[str] = None,
    chain_id: Optional[int] = None,
) -> str:
    """
    Build, sign, and send a contract call transaction.

    Convenience function combining build + sign + send.

    Returns:
        Transaction hash
    """
    tx: dict[str, Any] = build_contract_tx(
        account=account,
        contract_address=contract_address,
        function_name=function_name,
        args=args,
        abi=abi,
        value=value,
        gas_limit=gas_limit,
        rpc_url=rpc_url,
        chain_id=chain_id,
    )
    return sign_and_send(tx, account, rpc_url=rpc_url)
