"""
Contract call gateway.

Wraps a contract handle so that every failure comes back as a typed
``QueryFailed`` / ``SubmissionFailed`` instead of whatever the transport
raised, and owns the price-then-pay sequence for value-bearing writes.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from .chain.handle import ContractHandle
from .errors import InvalidAmount, OblatioError, QueryFailed, SubmissionFailed
from .models import TransactionIntent, field_value
from .units import MAX_BASE_UNITS


def total_value(unit_price: int, quantity: int) -> int:
    """
    Exact value to attach for ``quantity`` units at ``unit_price`` wei each.

    Raises:
        InvalidAmount: Non-integer or negative inputs, or a total beyond uint256
    """
    for name, number in (("unit price", unit_price), ("quantity", quantity)):
        if isinstance(number, bool) or not isinstance(number, int):
            raise InvalidAmount(f"{name} must be an integer, got {number!r}")
        if number < 0:
            raise InvalidAmount(f"{name} must not be negative, got {number}")

    total = unit_price * quantity
    if total > MAX_BASE_UNITS:
        raise InvalidAmount(f"Total {total} overflows uint256")
    return total


class ContractGateway:
    """Typed-failure facade over a :class:`ContractHandle`."""

    def __init__(self, handle: ContractHandle) -> None:
        self.handle = handle

    def query(self, function_name: str, args: tuple = ()) -> tuple:
        """
        Read-only call.  Never blocks on confirmation.

        Raises:
            QueryFailed: If the call reverts or the node is unreachable
        """
        try:
            return tuple(self.handle.query(function_name, tuple(args)))
        except OblatioError:
            raise
        except Exception as exc:
            raise QueryFailed(f"{function_name}{tuple(args)} failed: {exc}") from exc

    def query_fields(self, function_name: str, args: tuple = ()) -> dict[str, Any]:
        """Read-only call returning the outputs keyed by their ABI names."""
        try:
            return dict(self.handle.query_fields(function_name, tuple(args)))
        except OblatioError:
            raise
        except Exception as exc:
            raise QueryFailed(f"{function_name}{tuple(args)} failed: {exc}") from exc

    def write(self, function_name: str, args: tuple = (), value: int = 0) -> TransactionIntent:
        """
        State-changing call.  Returns once the node accepts the transaction.

        Raises:
            InvalidAmount: If ``value`` is not a non-negative integer
            SubmissionFailed: If the node rejects the call before inclusion
        """
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidAmount(f"Attached value must be a non-negative integer, got {value!r}")

        try:
            intent = self.handle.write(function_name, tuple(args), value)
        except OblatioError:
            raise
        except Exception as exc:
            raise SubmissionFailed(f"{function_name} rejected: {exc}") from exc

        if not intent.tx_hash:
            raise SubmissionFailed(f"{function_name} rejected: node returned no transaction hash")
        return intent

    def priced_write(
        self,
        function_name: str,
        args: tuple,
        quantity: int,
        price_function: str,
        price_args: tuple,
        price_field: str = "price",
        price_index: Optional[int] = None,
        on_total: Optional[Callable[[int], None]] = None,
    ) -> TransactionIntent:
        """
        Read the current unit price, then write with ``price * quantity`` attached.

        The price read and the write are issued back to back; the only
        staleness window is that one round trip.  ``price_index`` locates the
        price among unnamed outputs.  ``on_total`` is called
        with the computed value after the price read and before the write.

        Raises:
            QueryFailed: If the price cannot be read
            InvalidAmount: If the total cannot be computed
            SubmissionFailed: If the write is rejected
        """
        fields = self.query_fields(price_function, price_args)
        try:
            unit_price = int(field_value(fields, price_field, price_index))
        except (KeyError, TypeError, ValueError) as exc:
            raise QueryFailed(f"{price_function} returned no usable {price_field!r}") from exc

        value = total_value(unit_price, quantity)
        if on_total is not None:
            on_total(value)
        return self.write(function_name, args, value)
