"""CLI commands for order snapshots."""

from __future__ import annotations

import json
from pathlib import Path

import click

from receipt_engine.application.import_order import ImportOrderHandler
from receipt_engine.domain.exceptions import DomainException
from receipt_engine.infrastructure.bootstrap import order_repository


@click.command("import")
@click.option(
    "--file", "file_path", required=True,
    type=click.Path(exists=True, dir_okay=False), help="Order snapshot JSON.",
)
def order_import(file_path: str) -> None:
    """Store an order snapshot from the point of sale."""
    try:
        raw = json.loads(Path(file_path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"{file_path} is not valid JSON: {exc}")

    handler = ImportOrderHandler(order_repo=order_repository())
    try:
        order_id = handler.handle(raw)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order '{order_id}' stored")


@click.command("list")
def order_list() -> None:
    """List stored order snapshots."""
    try:
        ids = order_repository().list_ids()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not ids:
        click.echo("No orders found.")
        return
    for order_id in ids:
        click.echo(order_id)
