"""
Shared plumbing for workflows: submit-and-confirm reporting and the
failure boundary that turns typed errors into console messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

import click

from ..confirm import await_confirmation
from ..errors import OblatioError, TransactionReverted
from ..gateway import ContractGateway
from ..models import TransactionIntent, TransactionRecord

DEFAULT_EXPLORER_URL = "https://sepolia.etherscan.io"


@dataclass
class RiteContext:
    """
    What a workflow needs: a gateway to the contract and how to wait.

    Attributes:
        gateway: Typed-failure gateway over the contract handle
        confirm_timeout: Seconds to wait for inclusion (None: no bound)
        explorer_url: Block explorer base URL for transaction links
            (None: no link)
    """
    gateway: ContractGateway
    confirm_timeout: Optional[float] = None
    explorer_url: Optional[str] = DEFAULT_EXPLORER_URL

    def confirm(self, intent: TransactionIntent, progress: str) -> TransactionRecord:
        """
        Report a submitted transaction and wait for its inclusion.

        Raises:
            ConfirmationFailed: If waiting fails
            TransactionReverted: If the transaction was mined but reverted
        """
        click.echo(f"{progress}... Transaction Hash: {intent.tx_hash}")
        if self.explorer_url:
            click.echo(f"  Check the transaction: {self.explorer_url.rstrip('/')}/tx/{intent.tx_hash}")

        record = await_confirmation(self.gateway.handle, intent, timeout=self.confirm_timeout)
        if not record.success:
            raise TransactionReverted(
                f"{intent.function_name} reverted in block {record.block_number}"
            )
        return record


def perform(action: str, flow: Callable[..., Any], *args: Any) -> int:
    """
    Run one workflow exactly once and report how it ended.

    Every typed failure is caught here and printed; nothing propagates.

    Returns:
        0 on success, otherwise the failure's exit code
    """
    try:
        flow(*args)
    except OblatioError as exc:
        click.secho(f"Error {action}: {exc.label}: {exc}", fg="red")
        return exc.exit_code
    return 0
