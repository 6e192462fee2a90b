"""
Unit conversion between decimal currency (ETH) and base units (wei).

Values are handled as ``Decimal`` on the human side and ``int`` on the
ledger side.  Nothing here touches ``float``.
"""

from __future__ import annotations

from decimal import Decimal, DecimalException, InvalidOperation, localcontext
from typing import Union

from .errors import InvalidAmount

DECIMALS = 18
SCALE = 10 ** DECIMALS

# uint256 is the widest amount the ledger can hold
MAX_BASE_UNITS = 2 ** 256 - 1

Number = Union[str, int, Decimal]


def _as_decimal(amount: Number) -> Decimal:
    if isinstance(amount, bool) or isinstance(amount, float):
        # floats already carry binary rounding error
        raise InvalidAmount(f"Amount must be a decimal string or integer, got {amount!r}")
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, int):
        value = Decimal(amount)
    elif isinstance(amount, str):
        text = amount.strip()
        if not text:
            raise InvalidAmount("Amount is empty")
        try:
            value = Decimal(text)
        except InvalidOperation:
            raise InvalidAmount(f"Not a number: {amount!r}") from None
    else:
        raise InvalidAmount(f"Unsupported amount type: {type(amount).__name__}")

    if not value.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {amount!r}")
    return value


def to_base_units(amount: Number, decimals: int = DECIMALS) -> int:
    """
    Convert a decimal currency amount to integer base units.

    Args:
        amount: Decimal amount, e.g. ``"0.5"`` or ``Decimal("10")``
        decimals: Fixed-point precision of the unit (default 18)

    Returns:
        Amount in base units

    Raises:
        InvalidAmount: Negative, non-numeric, finer than the unit's
            precision, or larger than uint256
    """
    value = _as_decimal(amount)
    if value < 0:
        raise InvalidAmount(f"Amount must not be negative, got {amount!r}")

    # uint256 has 78 digits; anything wider cannot fit once scaled
    if value and value.adjusted() + decimals > 78:
        raise InvalidAmount(f"Amount {amount!r} overflows uint256")

    try:
        with localcontext() as ctx:
            ctx.prec = 100
            scaled = value.scaleb(decimals)
            if scaled != scaled.to_integral_value():
                raise InvalidAmount(
                    f"Amount {amount!r} has more than {decimals} decimal places"
                )
            base = int(scaled)
    except DecimalException as exc:
        raise InvalidAmount(f"Amount {amount!r} is out of range") from exc

    if base > MAX_BASE_UNITS:
        raise InvalidAmount(f"Amount {amount!r} overflows uint256")
    return base


def to_decimal_units(amount: int, decimals: int = DECIMALS) -> Decimal:
    """
    Convert integer base units to a decimal currency amount.

    The result is normalized (``10`` rather than ``10.000000000000000000``).
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmount(f"Base-unit amount must be an integer, got {amount!r}")
    if amount < 0:
        raise InvalidAmount(f"Amount must not be negative, got {amount}")
    if amount > MAX_BASE_UNITS:
        raise InvalidAmount(f"Amount {amount} overflows uint256")

    with localcontext() as ctx:
        ctx.prec = 100
        value = Decimal(amount).scaleb(-decimals)
        if value == value.to_integral_value():
            return value.quantize(Decimal(1))
        return value.normalize()


def format_units(amount: int, symbol: str = "ETH", decimals: int = DECIMALS) -> str:
    """Render base units for display, e.g. ``'0.5 ETH'``."""
    return f"{to_decimal_units(amount, decimals):f} {symbol}"
