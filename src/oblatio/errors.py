"""
Error taxonomy for Oblatio workflows.

Every failure a workflow can hit is one of these.  They are caught at the
workflow boundary (create / view / donate / add / read / purchase) and
turned into a console message; none of them is meant to crash the process.
"""

from __future__ import annotations


class OblatioError(RuntimeError):
    exit_code: int = 1
    label: str = "Error"


class InvalidAmount(OblatioError, ValueError):
    """Malformed, negative, or out-of-range monetary amount."""

    exit_code = 2
    label = "InvalidAmount"


class QueryFailed(OblatioError):
    """A read-only contract call reverted or the node was unreachable."""

    exit_code = 3
    label = "QueryFailed"


class SubmissionFailed(OblatioError):
    """The node rejected a write before inclusion."""

    exit_code = 4
    label = "SubmissionFailed"


class ConfirmationFailed(OblatioError):
    """The network failed (or timed out) while waiting for inclusion."""

    exit_code = 5
    label = "ConfirmationFailed"


class InvalidSelection(OblatioError):
    """The operator picked a role or action that does not exist."""

    exit_code = 6
    label = "InvalidSelection"


class TransactionReverted(OblatioError):
    """The transaction was included but its execution reverted."""

    exit_code = 7
    label = "TransactionReverted"


__all__ = [
    "OblatioError",
    "InvalidAmount",
    "QueryFailed",
    "SubmissionFailed",
    "ConfirmationFailed",
    "InvalidSelection",
    "TransactionReverted",
]
