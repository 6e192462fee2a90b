"""
Rite Batch - Fixed bookstore script.

Runs three steps against the bookstore contract, in order:
1. Add the sample book
2. Read it back
3. Buy one copy at the current on-chain price

Each step reports its own failure and the script moves on; a failed step
does not stop the later ones.
"""

from __future__ import annotations

import click

from ..catalog import add_record, get_record, purchase
from ..models import Record
from ..units import format_units, to_base_units
from .common import RiteContext, perform


SAMPLE_RECORD = Record(
    record_id=5,
    title="Harry Potter",
    author="J.K. Rowling",
    price=to_base_units(10),
    stock=100,
)
SAMPLE_QUANTITY = 1


def add_record_step(ctx: RiteContext, record: Record) -> None:
    click.echo(f"Attempting to add book with ID: {record.record_id}")
    intent = add_record(ctx.gateway, record)
    result = ctx.confirm(intent, "Adding book")
    click.secho(f"Book added successfully in block {result.block_number}.", fg="green")


def read_record_step(ctx: RiteContext, record_id: int) -> None:
    click.echo(f"Fetching details for book ID: {record_id}")
    record = get_record(ctx.gateway, record_id)
    click.echo("Book Details:")
    click.echo(f"  Title: {record.title}")
    click.echo(f"  Author: {record.author}")
    click.echo(f"  Price: {format_units(record.price)}")
    click.echo(f"  Stock: {record.stock}")


def purchase_step(ctx: RiteContext, record_id: int, quantity: int) -> None:
    click.echo(f"Attempting to buy {quantity} copies of book with ID: {record_id}")
    intent = purchase(
        ctx.gateway,
        record_id,
        quantity,
        on_total=lambda total: click.echo(f"Total price for {quantity} copies: {format_units(total)}"),
    )
    result = ctx.confirm(intent, "Buying book")
    click.secho(f"Book purchase completed in block {result.block_number}.", fg="green")


def run_batch(
    ctx: RiteContext,
    record: Record = SAMPLE_RECORD,
    quantity: int = SAMPLE_QUANTITY,
) -> list[int]:
    """
    Run add, read, and purchase once each.

    Returns:
        Exit code of each step, in order (0 = success)
    """
    click.echo("Starting interaction with the contract...")
    return [
        perform("adding book", add_record_step, ctx, record),
        perform("fetching book details", read_record_step, ctx, record.record_id),
        perform("buying book", purchase_step, ctx, record.record_id, quantity),
    ]
