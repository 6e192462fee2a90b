"""
Named structures for values that cross the contract boundary.

Contract return tuples are decoded into these once, in the gateway, so no
caller ever indexes a raw tuple.  Monetary fields stay in base units (wei);
conversion to decimal happens only when rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


def field_value(fields: Mapping[str, Any], name: str, index: Optional[int] = None) -> Any:
    """
    Look up a decoded output by ABI name, falling back to its position.

    Artifacts compiled without output names key their values "0", "1", ...
    """
    if name in fields:
        return fields[name]
    if index is not None and str(index) in fields:
        return fields[str(index)]
    raise KeyError(name)


@dataclass(frozen=True)
class Record:
    """
    A catalog item (book) as stored by the bookstore contract.

    Attributes:
        record_id: Caller-assigned identifier
        title: Book title
        author: Book author
        price: Unit price in wei
        stock: Copies available
    """
    record_id: int
    title: str
    author: str
    price: int
    stock: int

    @classmethod
    def from_fields(cls, record_id: int, fields: Mapping[str, Any]) -> "Record":
        return cls(
            record_id=int(record_id),
            title=str(field_value(fields, "title", 0)),
            author=str(field_value(fields, "author", 1)),
            price=int(field_value(fields, "price", 2)),
            stock=int(field_value(fields, "stock", 3)),
        )


@dataclass(frozen=True)
class Campaign:
    """
    A fundraising campaign as stored by the charity contract.

    ``raised_amount`` and ``is_completed`` are owned by the ledger; the
    client only ever displays them.
    """
    campaign_id: int
    title: str
    description: str
    target_amount: int
    raised_amount: int
    is_completed: bool

    @property
    def status(self) -> str:
        return "Completed" if self.is_completed else "Active"

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "Campaign":
        return cls(
            campaign_id=int(field_value(fields, "id", 0)),
            title=str(field_value(fields, "title", 1)),
            description=str(field_value(fields, "description", 2)),
            target_amount=int(field_value(fields, "targetAmount", 3)),
            raised_amount=int(field_value(fields, "raisedAmount", 4)),
            is_completed=bool(field_value(fields, "isCompleted", 5)),
        )


@dataclass(frozen=True)
class TransactionIntent:
    """
    A submitted, not yet confirmed, contract write.

    Lives for one submit-and-confirm cycle only.
    """
    function_name: str
    args: tuple = ()
    value: int = 0
    tx_hash: str = ""


@dataclass(frozen=True)
class TransactionRecord:
    """Inclusion record for a confirmed transaction."""
    tx_hash: str
    block_number: int
    success: bool
    gas_used: Optional[int] = None
    receipt: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_receipt(cls, receipt: Mapping[str, Any]) -> "TransactionRecord":
        """Build from a raw ``eth_getTransactionReceipt`` result."""
        gas_used = receipt.get("gasUsed")
        return cls(
            tx_hash=str(receipt.get("transactionHash", "")),
            block_number=_quantity(receipt.get("blockNumber")),
            success=_quantity(receipt.get("status", "0x1")) == 1,
            gas_used=_quantity(gas_used) if gas_used is not None else None,
            receipt=dict(receipt),
        )


def _quantity(value: Any) -> int:
    """Decode a JSON-RPC quantity (hex string or int)."""
    if value is None:
        raise ValueError("Missing quantity in receipt")
    if isinstance(value, int):
        return value
    return int(str(value), 16)


__all__ = ["Record", "Campaign", "TransactionIntent", "TransactionRecord"]
