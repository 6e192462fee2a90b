"""
Contract handle - the query / write / wait surface of a deployed contract.

Workflows never talk to JSON-RPC directly; they go through a handle.
``RpcContract`` is the real one; tests supply an in-memory fake with the
same three methods.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

from eth_account.signers.local import LocalAccount

from ..models import TransactionIntent
from . import rpc
from .tx import send_contract_tx


class ContractHandle(Protocol):
    """Anything that can query, write to, and wait on a contract."""

    def query(self, function_name: str, args: tuple = ()) -> tuple:
        ...

    def query_fields(self, function_name: str, args: tuple = ()) -> dict[str, Any]:
        ...

    def write(self, function_name: str, args: tuple = (), value: int = 0) -> TransactionIntent:
        ...

    def wait(self, intent: TransactionIntent, timeout: Optional[float] = None) -> dict:
        ...


class RpcContract:
    """
    A deployed contract reached over JSON-RPC and signed by one account.

    Args:
        address: 0x-prefixed contract address
        abi: Contract ABI
        account: Signing account for writes
        rpc_url: RPC endpoint URL (default: ``RPC_URL`` env var)
        chain_id: Chain ID (default: ``CHAIN_ID`` env var)
        poll_interval: Seconds between receipt polls
    """

    def __init__(
        self,
        address: str,
        abi: list,
        account: LocalAccount,
        rpc_url: Optional[str] = None,
        chain_id: Optional[int] = None,
        poll_interval: float = 2.0,
    ) -> None:
        self.address = address
        self.abi = abi
        self.account = account
        self.rpc_url = rpc_url
        self.chain_id = chain_id
        self.poll_interval = poll_interval

    def query(self, function_name: str, args: tuple = ()) -> tuple:
        return rpc.read_contract(
            self.address,
            function_name,
            list(args),
            abi=self.abi,
            rpc_url=self.rpc_url,
        )

    def query_fields(self, function_name: str, args: tuple = ()) -> dict[str, Any]:
        values = self.query(function_name, args)
        return rpc.name_outputs(self.abi, function_name, values)

    def write(self, function_name: str, args: tuple = (), value: int = 0) -> TransactionIntent:
        tx_hash = send_contract_tx(
            account=self.account,
            contract_address=self.address,
            function_name=function_name,
            args=list(args),
            abi=self.abi,
            value=value,
            rpc_url=self.rpc_url,
            chain_id=self.chain_id,
        )
        return TransactionIntent(
            function_name=function_name,
            args=tuple(args),
            value=value,
            tx_hash=tx_hash,
        )

    def wait(self, intent: TransactionIntent, timeout: Optional[float] = None) -> dict:
        return rpc.wait_for_receipt(
            intent.tx_hash,
            timeout=timeout,
            poll_interval=self.poll_interval,
            rpc_url=self.rpc_url,
        )

    def __repr__(self) -> str:
        return f"RpcContract(address={self.address!r}, sender={self.account.address!r})"
