"""
Bookstore catalog operations.

Thin, typed wrappers over the ``AdvancedBookStore`` contract.  Prices are
sent and received in wei; nothing here converts for display.
"""

from __future__ import annotations

from typing import Callable, Optional

from .errors import InvalidAmount, QueryFailed
from .gateway import ContractGateway
from .models import Record, TransactionIntent

CONTRACT_NAME = "AdvancedBookStore"

ADD_BOOK = "addBook"
GET_BOOK = "getBooks"
BUY_BOOK = "buyBook"


def _check_count(name: str, value: int, minimum: int = 0) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmount(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidAmount(f"{name} must be at least {minimum}, got {value}")
    return value


def add_record(gateway: ContractGateway, record: Record) -> TransactionIntent:
    """Submit ``addBook``.  Id uniqueness is enforced by the contract, not here."""
    _check_count("Book ID", record.record_id)
    _check_count("Price", record.price)
    _check_count("Stock", record.stock)
    return gateway.write(
        ADD_BOOK,
        (record.record_id, record.title, record.author, record.price, record.stock),
    )


def get_record(gateway: ContractGateway, record_id: int) -> Record:
    """Fetch a book.  Always re-queries; records are never cached."""
    _check_count("Book ID", record_id)
    fields = gateway.query_fields(GET_BOOK, (record_id,))
    try:
        return Record.from_fields(record_id, fields)
    except (KeyError, TypeError, ValueError) as exc:
        raise QueryFailed(f"{GET_BOOK} returned an unexpected shape: {exc!r}") from exc


def purchase(
    gateway: ContractGateway,
    record_id: int,
    quantity: int,
    on_total: Optional[Callable[[int], None]] = None,
) -> TransactionIntent:
    """
    Submit ``buyBook`` paying the current on-chain price.

    The unit price is read immediately before the write and the attached
    value is ``price * quantity`` in wei.  ``on_total`` sees that value
    before the write is submitted.
    """
    _check_count("Book ID", record_id)
    _check_count("Quantity", quantity, minimum=1)
    return gateway.priced_write(
        BUY_BOOK,
        (record_id, quantity),
        quantity=quantity,
        price_function=GET_BOOK,
        price_args=(record_id,),
        price_field="price",
        price_index=2,
        on_total=on_total,
    )
