"""
Transaction confirmation tracker.

The single point where "submitted" becomes "included".  Success or failure
messages for a write must be based on what this returns, never on
submission alone.
"""

from __future__ import annotations

from typing import Optional

from .chain.handle import ContractHandle
from .errors import ConfirmationFailed
from .models import TransactionIntent, TransactionRecord


def await_confirmation(
    handle: ContractHandle,
    intent: TransactionIntent,
    timeout: Optional[float] = None,
) -> TransactionRecord:
    """
    Block until ``intent`` is included in a block.

    Args:
        handle: Contract handle the intent was submitted through
        intent: Submitted transaction
        timeout: Seconds to wait before giving up (None waits without bound)

    Returns:
        TransactionRecord with the inclusion block and outcome.  A
        transaction that was mined but reverted is returned with
        ``success=False``; it is not an exception.

    Raises:
        ConfirmationFailed: On a network error, a malformed receipt, or a
            timeout
    """
    try:
        receipt = handle.wait(intent, timeout=timeout)
    except TimeoutError as exc:
        raise ConfirmationFailed(f"{intent.tx_hash} not included within {timeout}s") from exc
    except Exception as exc:
        raise ConfirmationFailed(f"Lost track of {intent.tx_hash}: {exc}") from exc

    if not receipt:
        raise ConfirmationFailed(f"No receipt returned for {intent.tx_hash}")

    try:
        record = TransactionRecord.from_receipt(receipt)
    except (TypeError, ValueError) as exc:
        raise ConfirmationFailed(f"Malformed receipt for {intent.tx_hash}: {exc}") from exc

    if not record.tx_hash:
        record = TransactionRecord(
            tx_hash=intent.tx_hash,
            block_number=record.block_number,
            success=record.success,
            gas_used=record.gas_used,
            receipt=record.receipt,
        )
    return record
