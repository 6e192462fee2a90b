"""
Oblatio CLI

Command-line client for two JSON-RPC contracts: a charity platform driven
interactively, and a bookstore driven by a fixed script.

Commands:
  session  - Interactive charity session (deployer / user)
  batch    - Add, read, and buy a sample book
  whoami   - Show current wallet address and balance
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Optional

import click

from .catalog import CONTRACT_NAME as BOOKSTORE
from .campaigns import CONTRACT_NAME as CHARITY
from .chain.abi import load_abi
from .chain.handle import RpcContract
from .chain.rpc import DEFAULT_CHAIN_ID, DEFAULT_RPC_URL, get_balance
from .gateway import ContractGateway
from .keys import OBLATIO_ENV, get_account, load_env, load_private_key
from .rites.batch import run_batch
from .rites.common import DEFAULT_EXPLORER_URL, RiteContext
from .rites.session import run_session
from .units import format_units


# ============ Constants ============

VERSION = "1.0.0"


# ============ Main CLI Group ============


@click.group()
@click.version_option(version=VERSION, prog_name="oblatio")
def cli() -> None:
    """Oblatio - contract interaction client."""
    load_env()


# ============ Shared Options ============


def _chain_options(contract_envvar: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Options common to every command that talks to a contract."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        options = [
            click.option(
                "--contract",
                envvar=contract_envvar,
                help=f"Contract address (env: {contract_envvar})",
            ),
            click.option(
                "--abi",
                "abi_path",
                type=click.Path(exists=True, dir_okay=False, path_type=Path),
                default=None,
                help="Hardhat or Foundry artifact to take the ABI from",
            ),
            click.option("--rpc-url", envvar="RPC_URL", default=DEFAULT_RPC_URL, help="JSON-RPC endpoint"),
            click.option("--chain-id", envvar="CHAIN_ID", default=DEFAULT_CHAIN_ID, type=int, help="Chain ID"),
            click.option(
                "--confirm-timeout",
                envvar="CONFIRM_TIMEOUT",
                default=None,
                type=click.FloatRange(min=0, min_open=True),
                help="Seconds to wait for inclusion (default: no limit)",
            ),
            click.option(
                "--explorer-url",
                envvar="EXPLORER_URL",
                default=DEFAULT_EXPLORER_URL,
                help="Block explorer for transaction links ('' to disable)",
            ),
        ]
        for option in reversed(options):
            func = option(func)
        return func

    return decorator


def _open_context(
    contract_name: str,
    contract_envvar: str,
    contract: Optional[str],
    abi_path: Optional[Path],
    rpc_url: str,
    chain_id: int,
    confirm_timeout: Optional[float],
    explorer_url: str,
) -> RiteContext:
    """Wire credential, ABI and RPC into a workflow context, or exit(1)."""
    if not contract:
        click.secho(
            f"ERROR: {contract_envvar} must be set (or pass --contract).",
            fg="red",
        )
        sys.exit(1)

    try:
        account = get_account(load_private_key())
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)

    try:
        abi = load_abi(contract_name, abi_path)
    except (FileNotFoundError, ValueError) as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)

    click.echo(f"  Sender: {account.address}")
    click.echo(f"  Contract: {contract} ({contract_name})")
    click.echo(f"  RPC: {rpc_url}")
    click.echo("")

    handle = RpcContract(
        address=contract,
        abi=abi,
        account=account,
        rpc_url=rpc_url,
        chain_id=chain_id,
    )
    return RiteContext(
        gateway=ContractGateway(handle),
        confirm_timeout=confirm_timeout,
        explorer_url=explorer_url or None,
    )


# ============ Commands ============


@cli.command()
@_chain_options("CHARITY_ADDRESS")
def session(
    contract: Optional[str],
    abi_path: Optional[Path],
    rpc_url: str,
    chain_id: int,
    confirm_timeout: Optional[float],
    explorer_url: str,
) -> None:
    """
    Interactive charity session.

    Deployers create and list campaigns; users donate to them.
    """
    ctx = _open_context(
        CHARITY, "CHARITY_ADDRESS", contract, abi_path, rpc_url, chain_id, confirm_timeout, explorer_url
    )
    exit_code = run_session(ctx)
    if exit_code:
        sys.exit(exit_code)


@cli.command()
@_chain_options("BOOKSTORE_ADDRESS")
def batch(
    contract: Optional[str],
    abi_path: Optional[Path],
    rpc_url: str,
    chain_id: int,
    confirm_timeout: Optional[float],
    explorer_url: str,
) -> None:
    """
    Add, read, and buy the sample book.

    Every step runs even if an earlier one failed.
    """
    ctx = _open_context(
        BOOKSTORE, "BOOKSTORE_ADDRESS", contract, abi_path, rpc_url, chain_id, confirm_timeout, explorer_url
    )
    exit_codes = run_batch(ctx)
    if any(exit_codes):
        sys.exit(1)


@cli.command()
@click.option("--rpc-url", envvar="RPC_URL", default=DEFAULT_RPC_URL, help="JSON-RPC endpoint")
def whoami(rpc_url: str) -> None:
    """Show current wallet address and balance."""
    try:
        address = get_account(load_private_key()).address
    except ValueError:
        click.echo("No wallet found.")
        click.echo(f"Set PRIVATE_KEY in the environment or in {OBLATIO_ENV}.")
        sys.exit(1)

    click.echo(f"Address: {address}")
    try:
        click.echo(f"Balance: {format_units(get_balance(address, rpc_url=rpc_url))}")
    except Exception:
        click.echo("Balance: (unable to read)")


# ============ Entry Points ============


def main() -> None:
    """Oblatio CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
