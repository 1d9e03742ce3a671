"""CLI commands that render receipts and inspect field values."""

from __future__ import annotations

import json

import click

from receipt_engine.application.dto import CommandDTO
from receipt_engine.application.render_receipt import RenderReceiptHandler
from receipt_engine.application.show_fields import ShowFieldsHandler
from receipt_engine.domain.exceptions import DomainException
from receipt_engine.infrastructure.bootstrap import (
    design_repository,
    order_repository,
    render_settings,
)


def _describe(command: CommandDTO) -> str:
    """One-line human summary of a command's arguments."""
    args = command.args
    if command.kind == "text":
        style = args["style"]
        flags = [name for name in ("bold", "underline") if style[name]]
        if style["size"] != "NORMAL":
            flags.append(style["size"].lower())
        suffix = f"  [{', '.join(flags)}]" if flags else ""
        return f"{args['text']!r}{suffix}"
    if command.kind == "align":
        return args["alignment"]
    if command.kind == "feed":
        return str(args["lines"])
    if command.kind == "barcode":
        return f"{args['barcodeType']} {args['data']}"
    if command.kind == "qrcode":
        return f"size={args['size']} {args['data']}"
    return ""


@click.command("render")
@click.option("--design", "design_name", required=True, help="Design name.")
@click.option("--order", "order_id", default=None, help="Order ID (omit for a preview).")
@click.option("--json", "as_json", is_flag=True, help="Print commands as JSON.")
def receipt_render(design_name: str, order_id: str | None, as_json: bool) -> None:
    """Render a design into printer commands."""
    try:
        handler = RenderReceiptHandler(
            design_repo=design_repository(),
            order_repo=order_repository(),
            settings=render_settings(),
        )
        dto = handler.handle(design_name=design_name, order_id=order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if as_json:
        payload = [{"kind": c.kind, **c.args} for c in dto.commands]
        click.echo(json.dumps(payload, indent=2))
        return

    click.echo(f"Receipt '{dto.design_name}'  (order={dto.order_id or '-'})")
    click.echo()
    click.echo(f"  {'#':>3}  {'Command':<8} Details")
    click.echo(f"  {'-'*50}")
    for i, command in enumerate(dto.commands, start=1):
        click.echo(f"  {i:>3}  {command.kind:<8} {_describe(command)}")
    click.echo(f"  {'-'*50}")
    click.echo(f"  {len(dto.commands)} command(s)")


@click.command("fields")
@click.option("--order", "order_id", default=None, help="Order ID (omit for defaults).")
def receipt_fields(order_id: str | None) -> None:
    """Show what every dynamic field prints."""
    try:
        handler = ShowFieldsHandler(order_repo=order_repository(), settings=render_settings())
        fields = handler.handle(order_id=order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{'Field':<16} Value")
    click.echo("-" * 40)
    for field in fields:
        click.echo(f"{field.name:<16} {field.value}")
